"""
tests.conftest

Shared fixtures: an isolated app per test (temporary SQLite file, fake payment
gateway) and helpers for logging users in.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from resale_market.api.app import create_app
from resale_market.settings import Settings


class FakePaymentGateway:
    def __init__(self) -> None:
        self.calls: list[dict[str, object]] = []

    async def create_intent(self, *, amount: int, currency: str) -> str:
        self.calls.append({"amount": amount, "currency": currency})
        return f"pi_test_{len(self.calls)}_secret_abc"


def make_settings(tmp_path: Path, **overrides: object) -> Settings:
    return Settings(
        env="test",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'resale.db'}",
        jwt_secret="test-secret",
        log_level="WARNING",
        **overrides,
    )


@asynccontextmanager
async def open_client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx's ASGITransport does not drive lifespan; run it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def login(client: httpx.AsyncClient, email: str, role: str | None = None) -> str:
    body: dict[str, object] = {"email": email}
    if role is not None:
        body["role"] = role
    r = await client.put(f"/user/{email}", json=body)
    assert r.status_code == 200, r.text
    return r.json()["token"]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def payments() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
def app(settings: Settings, payments: FakePaymentGateway) -> FastAPI:
    return create_app(settings=settings, payments=payments)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    async with open_client(app) as c:
        yield c


@pytest_asyncio.fixture
async def seller_token(client: httpx.AsyncClient) -> str:
    return await login(client, "seller@x.com", "Seller")


@pytest_asyncio.fixture
async def buyer_token(client: httpx.AsyncClient) -> str:
    return await login(client, "buyer@x.com", "Buyer")


@pytest_asyncio.fixture
async def admin_token(client: httpx.AsyncClient) -> str:
    return await login(client, "admin@x.com", "Admin")
