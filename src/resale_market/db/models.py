"""
resale_market.db.models

Persistence schema for the marketplace.

Responsibilities:
- Define the document collections:
  - Product: a seller's listing
  - User: marketplace account keyed by email
  - Order: a buyer's order (also served as a "booking")
"""

from __future__ import annotations

import enum
from typing import ClassVar

from sqlalchemy import Boolean, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from resale_market.db.base import Base, DocumentMixin


class ProductStatus(enum.StrEnum):
    available = "available"
    sold = "sold"


class Product(DocumentMixin, Base):
    __tablename__ = "products"

    __document_fields__: ClassVar[dict[str, str]] = {
        "email": "seller_email",
        "name": "name",
        "category": "category",
        "status": "status",
        "advertised": "advertised",
        "report": "reported",
        "resalePrice": "resale_price",
    }

    seller_email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    name: Mapped[str | None] = mapped_column(String(512), nullable=True, index=True)
    category: Mapped[str | None] = mapped_column(String(256), nullable=True, index=True)
    status: Mapped[str | None] = mapped_column(
        String(32), nullable=True, default=ProductStatus.available.value, index=True
    )
    advertised: Mapped[bool | None] = mapped_column(
        Boolean, nullable=True, default=False, index=True
    )
    reported: Mapped[bool | None] = mapped_column(
        Boolean, nullable=True, default=False, index=True
    )
    resale_price: Mapped[float | None] = mapped_column(Float, nullable=True)


class User(DocumentMixin, Base):
    __tablename__ = "users"

    __document_fields__: ClassVar[dict[str, str]] = {
        "email": "email",
        "role": "role",
        "verified": "verified",
    }

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True, index=True)
    verified: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)


class Order(DocumentMixin, Base):
    __tablename__ = "orders"

    __document_fields__: ClassVar[dict[str, str]] = {
        "email": "buyer_email",
        "productId": "product_id",
        "productName": "product_name",
        "paid": "paid",
        "transactionId": "transaction_id",
    }

    buyer_email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    product_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    product_name: Mapped[str | None] = mapped_column(String(512), nullable=True)
    paid: Mapped[bool | None] = mapped_column(Boolean, nullable=True, default=False)
    transaction_id: Mapped[str | None] = mapped_column(String(256), nullable=True)


# --- Module Notes -----------------------------------------------------------
# Filter columns are nullable: a value that does not fit the column type stays
# only in `attributes`.
# `Order.product_id` is a plain string rather than a foreign key: orders are
# inserted verbatim and may reference products that no longer exist.
