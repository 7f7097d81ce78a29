"""Application entrypoint: FastAPI app factory and uvicorn runner."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ppf_workshop.api.cors import install_cors
from ppf_workshop.api.errors import register_error_handlers
from ppf_workshop.api.v1.router import get_api_router
from ppf_workshop.core.config import get_config
from ppf_workshop.core.startup import bootstrap
from ppf_workshop.database.init_db import create_tables, seed_defaults

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    cfg = get_config()
    bootstrap()
    create_tables()
    if cfg.SEED_DEFAULTS:
        seed_defaults()
    logger.info("app.started", extra={"event": "app.started"})
    yield
    logger.info("app.stopped", extra={"event": "app.stopped"})


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Build the ASGI app; tests pass ``use_lifespan=False`` and wire their own store."""
    cfg = get_config()
    app = FastAPI(
        title=cfg.APP_NAME,
        version=cfg.APP_VERSION,
        lifespan=lifespan if use_lifespan else None,
    )
    register_error_handlers(app)
    install_cors(app)
    app.include_router(get_api_router())

    @app.get("/", include_in_schema=False)
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn ppf_workshop.main:app`.
app = create_app()


def run() -> None:
    cfg = get_config()
    uvicorn.run("ppf_workshop.main:app", host=cfg.API_HOST, port=cfg.API_PORT)


if __name__ == "__main__":
    run()
