"""
resale_market.api.app

FastAPI app factory for the Resale Market service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Initialize and dispose shared infrastructure (DB engine, payment gateway).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_502_BAD_GATEWAY

from resale_market import __version__
from resale_market.api.routers.health import router as health_router
from resale_market.api.routers.orders import router as orders_router
from resale_market.api.routers.payments import router as payments_router
from resale_market.api.routers.products import router as products_router
from resale_market.api.routers.users import router as users_router
from resale_market.db.init_db import init_db
from resale_market.db.session import create_engine, create_sessionmaker
from resale_market.observability.logging import configure_logging, get_logger
from resale_market.observability.middleware import RequestContextMiddleware
from resale_market.services.payments import (
    PaymentGateway,
    PaymentProviderError,
    StripePaymentGateway,
)
from resale_market.settings import Settings, get_settings

log = get_logger(__name__)


def create_app(*, settings: Settings, payments: PaymentGateway | None = None) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # One engine/session factory per process; routers get sessions via
        # `resale_market.api.deps.db_session`.
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        app.state.payments = payments or StripePaymentGateway(
            secret_key=settings.stripe_secret_key
        )
        if settings.create_tables:
            await init_db(engine)
        try:
            yield
        finally:
            # Dispose the engine to close pools/FDs gracefully.
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="Resale Market API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    # Routers resolve settings through DI; bind them to this app's instance.
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router, tags=["health"])
    app.include_router(products_router)
    app.include_router(orders_router)
    app.include_router(users_router)
    app.include_router(payments_router)

    @app.exception_handler(PaymentProviderError)
    async def _payment_provider_error(_: Request, exc: PaymentProviderError) -> JSONResponse:
        log.error("payment_provider_error", error=str(exc))
        return JSONResponse(status_code=HTTP_502_BAD_GATEWAY, content={"detail": str(exc)})

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; data access stays
# in repositories and multi-record flows in services.
