"""
resale_market.db.repositories.documents

Generic document-collection repository.

Responsibilities:
- Insert/read/patch/delete document-shaped records.
- Report writes the way a document store does (matched/modified/upserted counts).
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from resale_market.db.base import DocumentMixin

T = TypeVar("T", bound=DocumentMixin)


@dataclass(frozen=True, slots=True)
class InsertResult:
    inserted_id: uuid.UUID

    def to_response(self) -> dict[str, Any]:
        return {"acknowledged": True, "insertedId": str(self.inserted_id)}


@dataclass(frozen=True, slots=True)
class UpdateResult:
    matched_count: int
    modified_count: int
    upserted_id: uuid.UUID | None = None

    def to_response(self) -> dict[str, Any]:
        return {
            "acknowledged": True,
            "matchedCount": self.matched_count,
            "modifiedCount": self.modified_count,
            "upsertedId": str(self.upserted_id) if self.upserted_id else None,
        }


@dataclass(frozen=True, slots=True)
class DeleteResult:
    deleted_count: int

    def to_response(self) -> dict[str, Any]:
        return {"acknowledged": True, "deletedCount": self.deleted_count}


class DocumentRepo(Generic[T]):
    model: ClassVar[type[DocumentMixin]]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def insert(self, document: dict[str, Any]) -> InsertResult:
        record = self.model()
        record.apply(document)
        self._session.add(record)
        await self._session.flush()
        return InsertResult(inserted_id=record.id)

    async def get(self, record_id: uuid.UUID) -> T | None:
        return await self._session.get(self.model, record_id)  # type: ignore[return-value]

    async def find(self, *criteria: ColumnElement[bool]) -> list[T]:
        stmt = select(self.model).where(*criteria).order_by(self.model.created_at)
        return list((await self._session.execute(stmt)).scalars().all())

    async def find_one(self, *criteria: ColumnElement[bool]) -> T | None:
        # First match in insertion order; later duplicates are ignored.
        stmt = select(self.model).where(*criteria).order_by(self.model.created_at).limit(1)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def patch(
        self,
        record_id: uuid.UUID,
        fields: dict[str, Any],
        *,
        upsert: bool = False,
    ) -> UpdateResult:
        record = await self.get(record_id)
        if record is None:
            if not upsert:
                return UpdateResult(matched_count=0, modified_count=0)
            record = self.model(id=record_id)
            record.apply(fields)
            self._session.add(record)
            await self._session.flush()
            return UpdateResult(matched_count=0, modified_count=0, upserted_id=record_id)

        modified = record.apply(fields)
        await self._session.flush()
        return UpdateResult(matched_count=1, modified_count=int(modified))

    async def delete(self, record_id: uuid.UUID) -> DeleteResult:
        record = await self.get(record_id)
        if record is None:
            return DeleteResult(deleted_count=0)
        await self._session.delete(record)
        await self._session.flush()
        return DeleteResult(deleted_count=1)


# --- Module Notes -----------------------------------------------------------
# Concurrent patches to the same record are last-write-wins; nothing here locks.
