from __future__ import annotations

from resale_market.db.models import Order
from resale_market.db.repositories.documents import DocumentRepo


class OrderRepo(DocumentRepo[Order]):
    model = Order

    async def list_for_buyer(self, email: str) -> list[Order]:
        return await self.find(Order.buyer_email == email)
