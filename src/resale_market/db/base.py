"""
resale_market.db.base

SQLAlchemy declarative base and the document mapping mixin.

Responsibilities:
- Provide a shared DeclarativeBase for all ORM models.
- Map caller-supplied documents onto well-known columns plus a JSON bag.
"""

from __future__ import annotations

import math
import uuid
from datetime import datetime
from typing import Any, ClassVar

from sqlalchemy import JSON, Uuid as SAUuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

_MISSING = object()


def _utcnow() -> datetime:
    # Persist naive UTC timestamps for simplicity.
    return datetime.utcnow()


class Base(DeclarativeBase):
    pass


class DocumentMixin:
    """
    A record that behaves like a schemaless document.

    `attributes` holds every caller-supplied key exactly as sent. Keys listed
    in `__document_fields__` are also copied into real columns so they can be
    filtered on, but only when the value fits the column type; otherwise the
    column is left NULL.
    """

    __document_fields__: ClassVar[dict[str, str]] = {}

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    attributes: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(nullable=False, default=_utcnow, onupdate=_utcnow)

    @classmethod
    def _column_value(cls, column: str, value: Any) -> Any:
        kind = cls.__table__.columns[column].type.python_type  # type: ignore[attr-defined]
        if kind is bool:
            return value if isinstance(value, bool) else None
        if kind is float:
            if isinstance(value, bool) or not isinstance(value, int | float):
                return None
            return float(value) if math.isfinite(value) else None
        return value if isinstance(value, kind) else None

    def apply(self, fields: dict[str, Any]) -> bool:
        """Set the given document fields; return True if anything changed."""
        changed = False
        document = dict(self.attributes or {})
        for key, value in fields.items():
            if key == "_id":
                continue
            if document.get(key, _MISSING) != value:
                document[key] = value
                changed = True
            column = self.__document_fields__.get(key)
            if column is not None:
                setattr(self, column, self._column_value(column, value))
        if changed:
            # Reassign so SQLAlchemy notices the JSON change.
            self.attributes = document
        return changed

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {}
        # Column defaults stand in for keys the caller never sent.
        for key, column in self.__document_fields__.items():
            value = getattr(self, column)
            if value is not None:
                doc[key] = value
        doc.update(self.attributes or {})
        doc["_id"] = str(self.id)
        return doc


def to_documents(records: list[DocumentMixin]) -> list[dict[str, Any]]:
    return [r.to_document() for r in records]


# --- Module Notes -----------------------------------------------------------
# All ORM models should inherit from `Base` (and `DocumentMixin`) so metadata
# discovery in `db.init_db` picks them up.
