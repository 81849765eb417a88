"""
resale_market.api.routers.products

Product listing endpoints.

Responsibilities:
- Public catalogue reads (available, by category, advertised, by id).
- Seller writes: create, partial update, status flips.
- Moderation flags: advertise and report.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from resale_market.api.deps import db_session
from resale_market.auth.deps import (
    get_principal,
    require_admin,
    require_registered,
    require_seller_or_admin,
    unless_policy,
)
from resale_market.auth.models import Principal
from resale_market.db.base import to_documents
from resale_market.db.models import ProductStatus
from resale_market.db.repositories.products import ProductRepo
from resale_market.observability.logging import get_logger
from resale_market.settings import Settings, get_settings

log = get_logger(__name__)

router = APIRouter(tags=["products"])


@router.get("/products")
async def list_available_products(
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    return to_documents(await ProductRepo(session).list_available())


@router.get("/product/{product_id}")
async def get_product(
    product_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any] | None:
    product = await ProductRepo(session).get(product_id)
    return product.to_document() if product else None


@router.get("/category/{name}")
async def list_category(
    name: str,
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    return to_documents(await ProductRepo(session).list_by_category(name))


@router.get("/advertised")
async def list_advertised(
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    return to_documents(await ProductRepo(session).list_advertised())


@router.post(
    "/product",
    dependencies=[Depends(unless_policy("trust_product_seller", require_seller_or_admin))],
)
async def create_product(
    body: dict[str, Any] = Body(...),
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    if not settings.trust_product_seller:
        body = {**body, "email": principal.email}
    result = await ProductRepo(session).insert(body)
    await session.commit()
    log.info("product_created", product_id=str(result.inserted_id), caller=principal.email)
    return result.to_response()


@router.put("/update-product/{product_id}", dependencies=[Depends(get_principal)])
async def update_product(
    product_id: uuid.UUID,
    body: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await ProductRepo(session).patch(product_id, body, upsert=True)
    await session.commit()
    return result.to_response()


@router.put("/sold/{product_id}", dependencies=[Depends(require_seller_or_admin)])
async def mark_sold(
    product_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await ProductRepo(session).patch(
        product_id, {"status": ProductStatus.sold.value, "advertised": False}
    )
    await session.commit()
    return result.to_response()


@router.put("/available/{product_id}", dependencies=[Depends(require_seller_or_admin)])
async def mark_available(
    product_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await ProductRepo(session).patch(
        product_id, {"status": ProductStatus.available.value}
    )
    await session.commit()
    return result.to_response()


@router.put(
    "/advertised/{product_id}",
    dependencies=[
        Depends(get_principal),
        Depends(unless_policy("open_advertising", require_seller_or_admin)),
    ],
)
async def advertise_product(
    product_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await ProductRepo(session).patch(product_id, {"advertised": True})
    await session.commit()
    return result.to_response()


@router.get("/my-product", dependencies=[Depends(require_seller_or_admin)])
async def list_my_products(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    return to_documents(await ProductRepo(session).list_for_seller(principal.email))


@router.put(
    "/report/{product_id}",
    dependencies=[
        Depends(get_principal),
        Depends(unless_policy("open_reporting", require_registered)),
    ],
)
async def report_product(
    product_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await ProductRepo(session).patch(product_id, {"report": True})
    await session.commit()
    log.info("product_reported", product_id=str(product_id), caller=principal.email)
    return result.to_response()


@router.get("/all-report", dependencies=[Depends(require_admin)])
async def list_reported_products(
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    return to_documents(await ProductRepo(session).list_reported())
