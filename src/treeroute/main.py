"""FastAPI application entry point."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from .api.routes import health, routes
from .config import settings

_LOGGING_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    """Attach a single stream handler to the root logger."""
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    _LOGGING_CONFIGURED = True


def run_startup_optimization() -> dict:
    from .services.routing.service import get_route_optimization_service

    return get_route_optimization_service().optimize_startup_attributes()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.startup_attributes:
        results = await run_in_threadpool(run_startup_optimization)
        for attribute_name, result in results.items():
            logging.info(f"Startup optimization for '{attribute_name}': {result.status.value}")
    yield


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    if settings.frontend_allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.frontend_allowed_origins),
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.get("/")
    def root():
        return {
            "service": settings.app_name,
            "status": "running",
            "api_prefix": settings.api_prefix,
            "health": f"{settings.api_prefix}/health",
            "docs": "/docs",
        }

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(routes.router, prefix=settings.api_prefix)
    return app


app = create_app()
