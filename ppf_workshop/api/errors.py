"""Translate exceptions into the API error body ``{message, kind}``."""

from __future__ import annotations

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.exceptions import HTTPException as StarletteHTTPException

from ppf_workshop.api.cors import cors_headers
from ppf_workshop.api.v1._authz import authenticate_request, is_public_path
from ppf_workshop.core.config import get_config
from ppf_workshop.core.exceptions import MethodNotAllowed, WorkshopException

logger = logging.getLogger(__name__)

_HTTP_KINDS = {
    400: "validation_error",
    401: "unauthorized",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
}


def error_body(message: str, kind: str, **extra: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message, "kind": kind}
    body.update({key: value for key, value in extra.items() if value is not None})
    return body


def _field_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(location), "message": error.get("msg", "invalid value")})
    return errors


async def handle_workshop_exception(request: Request, exc: WorkshopException) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "api.request.failed",
            extra={"event": "api.request.failed", "path": request.url.path, "error": exc.message},
        )
    body = error_body(exc.message or exc.kind, exc.kind, errors=exc.details.get("errors"))
    return JSONResponse(status_code=exc.status_code, content=body)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    if not is_public_path(request.url.path, get_config().API_PREFIX):
        try:
            await run_in_threadpool(authenticate_request, request)
        except WorkshopException as auth_exc:
            return await handle_workshop_exception(request, auth_exc)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Request validation failed.", "validation_error", errors=_field_errors(exc)),
    )


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        response = await handle_workshop_exception(
            request, MethodNotAllowed(f"Method {request.method} is not allowed for {request.url.path}.")
        )
        response.headers.update(exc.headers or {})
        return response
    kind = _HTTP_KINDS.get(exc.status_code, "http_error")
    message = exc.detail if isinstance(exc.detail, str) else kind
    return JSONResponse(status_code=exc.status_code, content=error_body(message, kind), headers=exc.headers)


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "api.request.unhandled",
        extra={"event": "api.request.unhandled", "method": request.method, "path": request.url.path},
    )
    debug = get_config().DEBUG
    stack = "".join(traceback.format_exception(exc)) if debug else None
    message = (str(exc) or "Internal server error") if debug else "Internal server error"
    # Raised past every user middleware, so CORS headers are added here.
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(message, "internal_error", stack=stack),
        headers=cors_headers(request.headers.get("origin")),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(WorkshopException, handle_workshop_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)
