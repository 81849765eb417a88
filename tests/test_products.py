from __future__ import annotations

import uuid

import httpx
import pytest

from tests.conftest import bearer


async def _create(client: httpx.AsyncClient, token: str, **fields: object) -> str:
    body = {"name": "Widget", "email": "seller@x.com", "category": "phones", **fields}
    r = await client.post("/product", json=body, headers=bearer(token))
    assert r.status_code == 200, r.text
    assert r.json()["acknowledged"] is True
    return r.json()["insertedId"]


@pytest.mark.asyncio
async def test_create_and_fetch_product(client: httpx.AsyncClient, seller_token: str) -> None:
    product_id = await _create(client, seller_token, resalePrice=120.5, condition="good")

    r = await client.get(f"/product/{product_id}")
    assert r.status_code == 200
    doc = r.json()
    assert doc["_id"] == product_id
    assert doc["name"] == "Widget"
    assert doc["condition"] == "good"
    assert doc["resalePrice"] == 120.5
    assert doc["status"] == "available"
    assert doc["advertised"] is False
    assert doc["report"] is False


@pytest.mark.asyncio
async def test_unknown_product_is_null(client: httpx.AsyncClient) -> None:
    r = await client.get(f"/product/{uuid.uuid4()}")
    assert r.status_code == 200
    assert r.json() is None


@pytest.mark.asyncio
async def test_catalogue_filters(client: httpx.AsyncClient, seller_token: str) -> None:
    phone = await _create(client, seller_token, name="Phone")
    await _create(client, seller_token, name="Laptop", category="laptops")
    await _create(client, seller_token, name="Old", status="sold")

    names = {p["name"] for p in (await client.get("/products")).json()}
    assert names == {"Phone", "Laptop"}

    r = await client.get("/category/phones")
    assert [p["_id"] for p in r.json()] == [phone]

    assert (await client.get("/advertised")).json() == []
    r = await client.put(f"/advertised/{phone}", headers=bearer(seller_token))
    assert r.json()["modifiedCount"] == 1
    assert [p["_id"] for p in (await client.get("/advertised")).json()] == [phone]


@pytest.mark.asyncio
async def test_sold_then_available_round_trip(
    client: httpx.AsyncClient, seller_token: str
) -> None:
    product_id = await _create(client, seller_token)
    await client.put(f"/advertised/{product_id}", headers=bearer(seller_token))

    r = await client.put(f"/sold/{product_id}", headers=bearer(seller_token))
    assert r.status_code == 200
    doc = (await client.get(f"/product/{product_id}")).json()
    assert doc["status"] == "sold"
    assert doc["advertised"] is False

    # Re-advertise while sold; the available transition must leave it alone.
    await client.put(f"/advertised/{product_id}", headers=bearer(seller_token))
    r = await client.put(f"/available/{product_id}", headers=bearer(seller_token))
    assert r.status_code == 200
    doc = (await client.get(f"/product/{product_id}")).json()
    assert doc["status"] == "available"
    assert doc["advertised"] is True


@pytest.mark.asyncio
async def test_status_flip_on_missing_product_matches_nothing(
    client: httpx.AsyncClient, seller_token: str
) -> None:
    r = await client.put(f"/sold/{uuid.uuid4()}", headers=bearer(seller_token))
    assert r.status_code == 200
    assert r.json()["matchedCount"] == 0


@pytest.mark.asyncio
async def test_update_product_sets_only_supplied_fields(
    client: httpx.AsyncClient, seller_token: str
) -> None:
    product_id = await _create(client, seller_token, resalePrice=50, color="red")

    r = await client.put(
        f"/update-product/{product_id}",
        json={"resalePrice": 45, "location": "Dhaka"},
        headers=bearer(seller_token),
    )
    assert r.status_code == 200
    assert r.json()["matchedCount"] == 1
    assert r.json()["modifiedCount"] == 1

    doc = (await client.get(f"/product/{product_id}")).json()
    assert doc["resalePrice"] == 45
    assert doc["location"] == "Dhaka"
    assert doc["color"] == "red"
    assert doc["name"] == "Widget"


@pytest.mark.asyncio
async def test_update_product_upserts_missing_id(
    client: httpx.AsyncClient, seller_token: str
) -> None:
    product_id = str(uuid.uuid4())
    r = await client.put(
        f"/update-product/{product_id}", json={"name": "Fresh"}, headers=bearer(seller_token)
    )
    assert r.json()["upsertedId"] == product_id
    doc = (await client.get(f"/product/{product_id}")).json()
    assert doc["name"] == "Fresh"
    assert doc["status"] == "available"


@pytest.mark.asyncio
async def test_update_product_requires_token(client: httpx.AsyncClient) -> None:
    r = await client.put(f"/update-product/{uuid.uuid4()}", json={"name": "x"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_my_products_filters_by_caller(
    client: httpx.AsyncClient, seller_token: str, admin_token: str, buyer_token: str
) -> None:
    await _create(client, seller_token, name="Mine")
    await _create(client, seller_token, name="Theirs", email="other@x.com")

    r = await client.get("/my-product", headers=bearer(seller_token))
    assert [p["name"] for p in r.json()] == ["Mine"]

    r = await client.get("/my-product", headers=bearer(admin_token))
    assert r.status_code == 200
    assert r.json() == []

    r = await client.get("/my-product", headers=bearer(buyer_token))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_report_and_list_reported(
    client: httpx.AsyncClient, seller_token: str, buyer_token: str, admin_token: str
) -> None:
    product_id = await _create(client, seller_token)

    r = await client.put(f"/report/{product_id}", headers=bearer(buyer_token))
    assert r.status_code == 200
    assert r.json()["modifiedCount"] == 1

    r = await client.get("/all-report", headers=bearer(admin_token))
    assert [p["_id"] for p in r.json()] == [product_id]
    assert r.json()[0]["report"] is True


@pytest.mark.asyncio
async def test_any_authenticated_caller_may_advertise(
    client: httpx.AsyncClient, seller_token: str, buyer_token: str
) -> None:
    product_id = await _create(client, seller_token)
    r = await client.put(f"/advertised/{product_id}", headers=bearer(buyer_token))
    assert r.status_code == 200
    assert r.json()["modifiedCount"] == 1


@pytest.mark.asyncio
async def test_malformed_product_id_is_rejected(client: httpx.AsyncClient) -> None:
    r = await client.get("/product/not-a-uuid")
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_non_canonical_fields_round_trip_verbatim(
    client: httpx.AsyncClient, seller_token: str
) -> None:
    body = {
        "email": "seller@x.com",
        "name": {"en": "Lamp", "bn": "বাতি"},
        "resalePrice": "120",
        "advertised": "yes",
        "tags": ["brass", 1970],
    }
    r = await client.post("/product", json=body, headers=bearer(seller_token))
    assert r.status_code == 200, r.text
    product_id = r.json()["insertedId"]

    doc = (await client.get(f"/product/{product_id}")).json()
    for key, value in body.items():
        assert doc[key] == value
    assert doc["status"] == "available"
    assert doc["report"] is False

    # "yes" is not a boolean, so the listing is not treated as advertised.
    assert (await client.get("/advertised")).json() == []
    assert [p["_id"] for p in (await client.get("/products")).json()] == [product_id]

    r = await client.put(f"/advertised/{product_id}", headers=bearer(seller_token))
    assert r.json()["modifiedCount"] == 1
    assert [p["_id"] for p in (await client.get("/advertised")).json()] == [product_id]
