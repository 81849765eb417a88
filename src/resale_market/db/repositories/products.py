from __future__ import annotations

from typing import Any

from resale_market.db.models import Product, ProductStatus
from resale_market.db.repositories.documents import DocumentRepo, InsertResult


class ProductRepo(DocumentRepo[Product]):
    model = Product

    async def insert(self, document: dict[str, Any]) -> InsertResult:
        # New listings are available unless the body says otherwise.
        return await super().insert({"status": ProductStatus.available.value, **document})

    async def list_available(self) -> list[Product]:
        return await self.find(Product.status == ProductStatus.available)

    async def list_by_category(self, category: str) -> list[Product]:
        return await self.find(
            Product.category == category,
            Product.status == ProductStatus.available,
        )

    async def list_advertised(self) -> list[Product]:
        return await self.find(
            Product.advertised.is_(True),
            Product.status == ProductStatus.available,
        )

    async def list_reported(self) -> list[Product]:
        return await self.find(Product.reported.is_(True))

    async def list_for_seller(self, email: str) -> list[Product]:
        return await self.find(Product.seller_email == email)

    async def first_by_name(self, name: str) -> Product | None:
        return await self.find_one(Product.name == name)
