"""
resale_market.auth.roles

Role resolution against stored user records.

Responsibilities:
- Look up a verified identity's user record and classify it into a `Role`.
- Fail explicitly for unknown users and unrecognized role values.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from resale_market.auth.models import Role
from resale_market.db.repositories.users import UserRepo


class RoleResolutionError(Exception):
    pass


class UnknownUserError(RoleResolutionError):
    def __init__(self, email: str) -> None:
        super().__init__(f"no user record for {email!r}")
        self.email = email


class UnrecognizedRoleError(RoleResolutionError):
    def __init__(self, email: str, raw: object) -> None:
        super().__init__(f"user {email!r} has unrecognized role {raw!r}")
        self.email = email
        self.raw = raw


async def resolve_role(session: AsyncSession, email: str) -> Role:
    user = await UserRepo(session).get_by_email(email)
    if user is None:
        raise UnknownUserError(email)
    role = Role.parse(user.role)
    if role is None:
        raise UnrecognizedRoleError(email, user.role)
    return role
