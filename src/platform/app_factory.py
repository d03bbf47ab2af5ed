"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.constant.route_constant import (
    ADMIN_BASE,
    BOOKING_BASE,
    SHOW_BASE,
    USER_BASE,
    WEBHOOK_BASE,
)
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.booking.driving_adapter.http_controller.admin_controller import (
    router as admin_router,
)
from src.service.booking.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.booking.driving_adapter.http_controller.user_booking_controller import (
    router as user_booking_router,
)
from src.service.catalog.driving_adapter.http_controller.favorite_controller import (
    router as favorite_router,
)
from src.service.catalog.driving_adapter.http_controller.show_controller import (
    router as show_router,
)
from src.service.shared_kernel.driving_adapter.http_controller.identity_webhook_controller import (
    router as webhook_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Movie ticket booking',
    service_name: str = 'popcorn-booking',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description
        service_name: Service name for tracing

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Auto-instrument FastAPI (must be done before mounting routes)
    TracingConfig(service_name=service_name).instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    app.include_router(show_router, prefix=SHOW_BASE, tags=['show'])
    app.include_router(booking_router, prefix=BOOKING_BASE, tags=['booking'])
    app.include_router(user_booking_router, prefix=USER_BASE, tags=['user'])
    app.include_router(favorite_router, prefix=USER_BASE, tags=['user'])
    app.include_router(admin_router, prefix=ADMIN_BASE, tags=['admin'])
    app.include_router(webhook_router, prefix=WEBHOOK_BASE, tags=['webhook'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register health and metrics endpoints."""

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': settings.PROJECT_NAME}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
