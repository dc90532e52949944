"""ASGI entry point: `uvicorn docflow.main:app`."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from docflow.api.v1 import api_router
from docflow.core.config import get_settings
from docflow.core.exception_handlers import register_exception_handlers
from docflow.core.lifespan import create_lifespan
from docflow.core.limiter import limiter
from docflow.middleware import RequestIDMiddleware


def _origins(raw: str) -> list[str]:
    return [o.strip() for o in raw.split(",") if o.strip()]


def create_app() -> FastAPI:
    """Assemble the app. Settings are read here, not at import of submodules."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    # The middleware added last is outermost: request id wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins(settings.allowed_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag", settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")
    return app


app = create_app()
