"""CORS policy: permissive headers on every response, short-circuited preflights."""

from __future__ import annotations

from fastapi import FastAPI, Request, Response
from starlette.middleware.cors import CORSMiddleware

from ppf_workshop.core.config import get_config

ALLOW_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS")
ALLOW_HEADERS = (
    "X-CSRF-Token",
    "X-Requested-With",
    "Accept",
    "Accept-Version",
    "Content-Length",
    "Content-MD5",
    "Content-Type",
    "Date",
    "X-Api-Version",
    "Authorization",
)


def cors_headers(origin: str | None = None) -> dict[str, str]:
    allowed = get_config().CORS_ORIGINS
    headers = {
        "Access-Control-Allow-Methods": ",".join(ALLOW_METHODS),
        "Access-Control-Allow-Headers": ", ".join(ALLOW_HEADERS),
    }
    if "*" in allowed:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in allowed:
        headers["Access-Control-Allow-Origin"] = origin
        headers["Access-Control-Allow-Credentials"] = "true"
        headers["Vary"] = "Origin"
    return headers


def install_cors(app: FastAPI) -> None:
    cfg = get_config()
    wildcard = "*" in cfg.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.CORS_ORIGINS),
        allow_credentials=not wildcard,
        allow_methods=list(ALLOW_METHODS),
        allow_headers=list(ALLOW_HEADERS),
    )

    # Registered after CORSMiddleware so it runs first.
    @app.middleware("http")
    async def cors_everywhere(request: Request, call_next):
        headers = cors_headers(request.headers.get("origin"))
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)
        response = await call_next(request)
        for name, value in headers.items():
            if name not in response.headers:
                response.headers[name] = value
        return response
