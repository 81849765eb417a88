from __future__ import annotations

from typing import Any

from sqlalchemy import select

from resale_market.auth.models import Role
from resale_market.db.models import User
from resale_market.db.repositories.documents import DocumentRepo, UpdateResult


class UserRepo(DocumentRepo[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email)
        return (await self._session.execute(stmt)).scalar_one_or_none()

    async def upsert_by_email(self, email: str, fields: dict[str, Any]) -> UpdateResult:
        # The path email is authoritative; a body email never re-keys the record.
        fields = {**fields, "email": email}
        user = await self.get_by_email(email)
        if user is None:
            user = User()
            user.apply(fields)
            self._session.add(user)
            await self._session.flush()
            return UpdateResult(matched_count=0, modified_count=0, upserted_id=user.id)

        modified = user.apply(fields)
        await self._session.flush()
        return UpdateResult(matched_count=1, modified_count=int(modified))

    async def list_by_role(self, role: Role) -> list[User]:
        return await self.find(User.role == role.value)
