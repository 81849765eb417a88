"""
resale_market.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for DB sessions and the payment gateway.
- Encapsulate app.state access patterns (sessionmaker, payments).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from resale_market.services.payments import PaymentGateway


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    # The sessionmaker is created on app startup in `resale_market.api.app.create_app`.
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped session. Routers/services commit explicitly; anything
    # uncommitted is rolled back when the session closes.
    async with session_factory() as session:
        yield session


def payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payments  # type: ignore[attr-defined]
