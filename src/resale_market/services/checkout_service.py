"""
resale_market.services.checkout_service

Checkout flows that span more than one record.

Responsibilities:
- Confirm an order's payment and mark the purchased product sold.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from resale_market.db.models import Order, Product, ProductStatus
from resale_market.db.repositories.documents import UpdateResult
from resale_market.db.repositories.orders import OrderRepo
from resale_market.db.repositories.products import ProductRepo
from resale_market.observability.logging import get_logger
from resale_market.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PaymentConfirmation:
    order: UpdateResult
    product: UpdateResult | None

    def to_response(self) -> dict[str, Any]:
        return {
            "order": self.order.to_response(),
            "product": self.product.to_response() if self.product else None,
        }


class CheckoutService:
    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
    ) -> None:
        self._session = session
        self._settings = settings

        self._orders = OrderRepo(session)
        self._products = ProductRepo(session)

    async def confirm_payment(
        self, *, order_id: uuid.UUID, body: dict[str, Any]
    ) -> PaymentConfirmation:
        """
        Mark the order paid, then mark its product sold.

        The two writes are committed separately: if the product write fails,
        the order stays paid.
        """

        paid: dict[str, Any] = {"paid": True}
        if "transactionId" in body:
            paid["transactionId"] = body["transactionId"]
        order_result = await self._orders.patch(order_id, paid)
        await self._session.commit()
        if order_result.matched_count == 0:
            # The product write below still runs; it does not depend on the order.
            log.warning("order_not_found", order_id=str(order_id))
        log.info(
            "order_paid",
            order_id=str(order_id),
            matched=order_result.matched_count,
            transaction_id=body.get("transactionId"),
        )

        order = await self._orders.get(order_id)
        product = await self._find_product(body=body, order=order)
        if product is None:
            return PaymentConfirmation(order=order_result, product=None)

        product_result = await self._products.patch(
            product.id, {"status": ProductStatus.sold.value}
        )
        await self._session.commit()
        log.info("product_sold", product_id=str(product.id), order_id=str(order_id))
        return PaymentConfirmation(order=order_result, product=product_result)

    async def _find_product(self, *, body: dict[str, Any], order: Order | None) -> Product | None:
        product_id = body.get("productId") or (order.product_id if order else None)
        if product_id:
            try:
                return await self._products.get(uuid.UUID(str(product_id)))
            except ValueError:
                log.warning("order_product_id_invalid", product_id=product_id)
                return None

        product_name = body.get("productName") or (order.product_name if order else None)
        if not isinstance(product_name, str) or not product_name:
            return None
        if not self._settings.legacy_order_product_name:
            return None
        # Names are not unique: the first listing with this name wins.
        log.warning("order_product_name_lookup", product_name=product_name)
        return await self._products.first_by_name(product_name)
