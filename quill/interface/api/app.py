"""FastAPI application."""

import asyncio
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quill.application.usecase.admin import EnsureAdminUseCase
from quill.config import SecuritySettings, Settings
from quill.domain.security import LockoutGuard, RateLimiter
from quill.interface.api.errors import add_validation_handler
from quill.interface.api.middleware import add_security_headers
from quill.interface.api.routes import admin, auth, health, posts, profile, users
from quill.util.di.container import create_container, setup_di
from quill.util.logging import get_logger
from quill.util.observability import instrument_fastapi, instrument_httpx

logger = get_logger(__name__)


async def sweep_security_state(container: AsyncContainer, interval_seconds: float) -> None:
    """Periodically purge stale rate-limit and lockout entries.

    Runs until cancelled. A failed sweep is logged and retried on the next
    tick; the tables stay correct without it, only larger.

    Args:
        container: Root DI container holding the APP-scoped tables
        interval_seconds: Delay between sweeps
    """
    rate_limiter = await container.get(RateLimiter)
    lockout_guard = await container.get(LockoutGuard)
    while True:
        await asyncio.sleep(interval_seconds)
        windows = _sweep(rate_limiter, "rate_limiter")
        lockouts = _sweep(lockout_guard, "lockout_guard")
        if windows or lockouts:
            logfire.debug(
                "Security state swept", rate_windows=windows, lockout_entries=lockouts
            )


def _sweep(table: RateLimiter | LockoutGuard, name: str) -> int:
    try:
        return table.sweep()
    except Exception:
        logfire.exception("Security sweep failed", table=name)
        return 0


async def ensure_admin(container: AsyncContainer) -> None:
    """Create the administrator account if configured and missing."""
    async with container() as request_container:
        use_case = await request_container.get(EnsureAdminUseCase)
        created = await use_case.execute()
    if created:
        logger.info("Administrator account created")


def create_lifespan(container: AsyncContainer):
    """Build the lifespan handler bound to a container.

    Startup bootstraps the administrator and starts the sweep task; shutdown
    cancels the task and closes the container.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        security = await container.get(SecuritySettings)
        await ensure_admin(container)
        sweeper = asyncio.create_task(
            sweep_security_state(container, security.sweep_interval_seconds)
        )
        try:
            yield
        finally:
            sweeper.cancel()
            try:
                await sweeper
            except asyncio.CancelledError:
                pass
            await container.close()

    return lifespan


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it and passes a test container.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()
    if container is None:
        container = create_container()

    # Instrument httpx for outbound identity provider calls
    instrument_httpx()

    app_instance = FastAPI(
        title="Quill API",
        description="Backend API for Quill - a small multi-user blogging platform",
        version="0.1.0",
        lifespan=create_lifespan(container),
    )

    instrument_fastapi(app_instance)

    add_security_headers(app_instance)
    add_validation_handler(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type", "Retry-After"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(profile.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(users.router)
    app_instance.include_router(admin.router)

    return app_instance
