"""
tests.test_policies

Access policy toggles: each permissive default can be switched to a gated
variant through settings.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from resale_market.api.app import create_app
from tests.conftest import FakePaymentGateway, bearer, login, make_settings, open_client


def _app(tmp_path: Path, **overrides: object):
    return create_app(settings=make_settings(tmp_path, **overrides), payments=FakePaymentGateway())


@pytest.mark.asyncio
async def test_closed_role_assignment_is_admin_only(tmp_path: Path) -> None:
    async with open_client(_app(tmp_path, open_role_assignment=False)) as client:
        buyer = await login(client, "buyer@x.com", "Buyer")
        admin = await login(client, "admin@x.com", "Admin")

        r = await client.put("/user/type/buyer@x.com", json={"role": "Admin"})
        assert r.status_code == 401

        r = await client.put(
            "/user/type/buyer@x.com", json={"role": "Admin"}, headers=bearer(buyer)
        )
        assert r.status_code == 403

        r = await client.put(
            "/user/type/buyer@x.com", json={"role": "Seller"}, headers=bearer(admin)
        )
        assert r.status_code == 200
        assert (await client.get("/user/buyer@x.com")).json()["role"] == "Seller"


@pytest.mark.asyncio
async def test_closed_advertising_requires_seller(tmp_path: Path) -> None:
    async with open_client(_app(tmp_path, open_advertising=False)) as client:
        seller = await login(client, "seller@x.com", "Seller")
        buyer = await login(client, "buyer@x.com", "Buyer")
        r = await client.post("/product", json={"name": "Lamp"}, headers=bearer(seller))
        product_id = r.json()["insertedId"]

        r = await client.put(f"/advertised/{product_id}", headers=bearer(buyer))
        assert r.status_code == 403
        r = await client.put(f"/advertised/{product_id}", headers=bearer(seller))
        assert r.status_code == 200


@pytest.mark.asyncio
async def test_closed_reporting_requires_registered_user(tmp_path: Path) -> None:
    async with open_client(_app(tmp_path, open_reporting=False)) as client:
        seller = await login(client, "seller@x.com", "Seller")
        stranger = await login(client, "stranger@x.com")
        r = await client.post("/product", json={"name": "Lamp"}, headers=bearer(seller))
        product_id = r.json()["insertedId"]

        # Logged in but never given a role.
        r = await client.put(f"/report/{product_id}", headers=bearer(stranger))
        assert r.status_code == 403
        r = await client.put(f"/report/{product_id}", headers=bearer(seller))
        assert r.status_code == 200


@pytest.mark.asyncio
async def test_untrusted_seller_comes_from_token(tmp_path: Path) -> None:
    async with open_client(_app(tmp_path, trust_product_seller=False)) as client:
        seller = await login(client, "seller@x.com", "Seller")
        buyer = await login(client, "buyer@x.com", "Buyer")

        r = await client.post("/product", json={"name": "Lamp"}, headers=bearer(buyer))
        assert r.status_code == 403

        r = await client.post(
            "/product", json={"name": "Lamp", "email": "victim@x.com"}, headers=bearer(seller)
        )
        product_id = r.json()["insertedId"]
        assert (await client.get(f"/product/{product_id}")).json()["email"] == "seller@x.com"


@pytest.mark.asyncio
async def test_legacy_name_lookup_can_be_disabled(tmp_path: Path) -> None:
    async with open_client(_app(tmp_path, legacy_order_product_name=False)) as client:
        seller = await login(client, "seller@x.com", "Seller")
        r = await client.post("/product", json={"name": "Widget"}, headers=bearer(seller))
        product_id = r.json()["insertedId"]
        r = await client.post("/order", json={"email": "seller@x.com", "productName": "Widget"})
        order_id = r.json()["insertedId"]

        r = await client.put(
            f"/order/{order_id}",
            json={"productName": "Widget", "transactionId": "tx"},
            headers=bearer(seller),
        )
        assert r.status_code == 200
        assert r.json()["product"] is None
        assert (await client.get(f"/product/{product_id}")).json()["status"] == "available"
