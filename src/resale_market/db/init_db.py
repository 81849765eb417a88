"""
resale_market.db.init_db

Schema bootstrap.

Responsibilities:
- Create tables at startup when `Settings.create_tables` is enabled.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from resale_market.db import models  # noqa: F401  # ensure models are registered on Base.metadata
from resale_market.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Create tables if they don't exist.
    """

    # Use a transactional DDL block when supported by the backend.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
