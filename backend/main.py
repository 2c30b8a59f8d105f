"""
FastAPI application factory for the strength progress API.

create_app() wires logging, Sentry, CORS and the four routers (health,
progression, sessions, rest timer). Tests build their own instance with
explicit settings and override the stateful providers in api.deps:

    app = create_app(Settings(environment="test", _env_file=None))
    app.dependency_overrides[get_workout_log_repo] = lambda: fake_log

uvicorn serves the module-level `app` (see backend/__main__.py).
"""

import logging
from typing import Optional

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Local web and Expo dev servers
DEV_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:8081",
    "http://localhost:19006",
]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the API.

    Args:
        settings: Explicit settings; defaults to the cached environment settings

    Returns:
        FastAPI app with every router mounted
    """
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _init_sentry(settings)

    app = FastAPI(
        title="Strength Progress API",
        description="Personal records, progress timeline and rest timer",
        version="1.0.0",
        docs_url=None if settings.is_production else "/docs",
    )

    _configure_cors(app, settings)
    _include_routers(app)
    _log_startup(settings)

    return app


def _init_sentry(settings: Settings) -> None:
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        traces_sample_rate=0.1,
    )
    logger.info(f"Sentry enabled ({settings.environment})")


def _configure_cors(app: FastAPI, settings: Settings) -> None:
    origins = list(settings.cors_origins_list)
    if not settings.is_production:
        origins.extend(DEV_ORIGINS)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _include_routers(app: FastAPI) -> None:
    from api.routers import (
        health_router,
        progression_router,
        rest_timer_router,
        sessions_router,
    )

    for router in (health_router, progression_router, sessions_router, rest_timer_router):
        app.include_router(router)


def _log_startup(settings: Settings) -> None:
    logger.info(
        f"Strength progress API starting: env={settings.environment}, "
        f"timeline TTL {settings.timeline_cache_ttl_seconds:g}s, "
        f"default rest {settings.default_rest_seconds}s, "
        f"auto-start rest {'on' if settings.auto_start_rest_timer else 'off'}"
    )


app = create_app()
