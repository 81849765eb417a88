"""
resale_market.api.routers.orders

Order (booking) endpoints.

Responsibilities:
- Place an order and list the caller's orders.
- Confirm payment for an order (delegates to `CheckoutService`).
- Fetch a single booking by id.
"""

from __future__ import annotations

import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from resale_market.api.deps import db_session
from resale_market.auth.deps import get_principal
from resale_market.auth.models import Principal
from resale_market.db.base import to_documents
from resale_market.db.repositories.orders import OrderRepo
from resale_market.services.checkout_service import CheckoutService
from resale_market.settings import Settings, get_settings

router = APIRouter(tags=["orders"])


@router.get("/order")
async def list_my_orders(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> list[dict[str, Any]]:
    return to_documents(await OrderRepo(session).list_for_buyer(principal.email))


@router.post("/order")
async def place_order(
    body: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await OrderRepo(session).insert(body)
    await session.commit()
    return result.to_response()


@router.put("/order/{order_id}", dependencies=[Depends(get_principal)])
async def confirm_payment(
    order_id: uuid.UUID,
    body: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    svc = CheckoutService(session=session, settings=settings)
    confirmation = await svc.confirm_payment(order_id=order_id, body=body)
    return confirmation.to_response()


@router.get("/booking/{order_id}")
async def get_booking(
    order_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any] | None:
    order = await OrderRepo(session).get(order_id)
    return order.to_document() if order else None
