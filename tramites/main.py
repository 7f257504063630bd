"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers. Settings
are read inside create_app() so tests can set the environment first.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tramites.api.v1.router import api_router
from tramites.core.config import get_settings
from tramites.core.exception_handlers import register_exception_handlers
from tramites.core.lifespan import create_lifespan
from tramites.core.limiter import limiter
from tramites.middleware import RequestContextMiddleware, TimeoutMiddleware


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    register_exception_handlers(app)

    # Last added is outermost: timeout → request context → CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestContextMiddleware,
        request_id_header=settings.request_id_header,
        correlation_id_header=settings.correlation_id_header,
    )
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")
    return app
