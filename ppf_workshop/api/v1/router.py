"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from ppf_workshop.api.v1 import auth, health, issues, jobs, packages, products, rolls, usage, users
from ppf_workshop.core.config import get_config


def get_api_router(prefix: str | None = None) -> APIRouter:
    api_router = APIRouter(prefix=get_config().API_PREFIX if prefix is None else prefix)
    api_router.include_router(health.router)
    api_router.include_router(auth.router)
    api_router.include_router(jobs.router)
    api_router.include_router(issues.router)
    api_router.include_router(usage.router)
    api_router.include_router(users.router)
    api_router.include_router(packages.router)
    api_router.include_router(products.router)
    api_router.include_router(rolls.router)
    return api_router
