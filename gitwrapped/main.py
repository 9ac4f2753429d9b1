from fastapi import FastAPI

from gitwrapped.api.routes.wrapped import router
from gitwrapped.core.middleware import SlidingWindowRateLimitMiddleware
from gitwrapped.core.observability import configure_logging
from gitwrapped.core.observability import init_sentry
from gitwrapped.services.search_counter import SearchCounter
from gitwrapped.settings import Settings


def create_app() -> FastAPI:
    """Build the FastAPI application from current settings."""

    settings = Settings()
    configure_logging(settings)
    init_sentry(settings)

    app = FastAPI(title="gitwrapped")
    app.state.search_counter = SearchCounter()
    app.add_middleware(
        SlidingWindowRateLimitMiddleware,
        paths=("/api/wrapped",),
        requests_per_window=settings.rate_limit_per_minute,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.include_router(router)
    return app


app = create_app()
