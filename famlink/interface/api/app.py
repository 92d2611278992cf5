"""FastAPI application."""

from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from famlink.application.job.expiry_reclaimer import ExpiryReclaimer
from famlink.config import InvitationSettings, Settings
from famlink.interface.api.routes import (
    external_persons,
    health,
    invitations,
    linked_data,
)
from famlink.util.di.container import create_container, setup_di
from famlink.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to serve requests from; the production
            container is built when omitted (tests pass their own)
    """
    settings = Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        invitation_settings = await container.get(InvitationSettings)
        reclaimer = None
        if invitation_settings.run_expiry_job:
            reclaimer = ExpiryReclaimer(container, invitation_settings)
            reclaimer.start()
        else:
            logfire.info("Expiry reclaimer disabled")

        yield

        if reclaimer is not None:
            await reclaimer.stop()
        await container.close()

    app_instance = FastAPI(
        title="Famlink API",
        description="Backend API for sharing household records with external persons through invitations",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    setup_di(app_instance, container)

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(external_persons.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(linked_data.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
app = create_app()
