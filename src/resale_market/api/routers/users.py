"""
resale_market.api.routers.users

User account endpoints.

Responsibilities:
- Login upsert keyed by email, returning a freshly minted token.
- Role assignment and role checks for the calling user.
- Admin moderation: list, verify and delete users.
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from resale_market.api.deps import db_session
from resale_market.auth.deps import get_principal, require_admin, unless_policy
from resale_market.auth.jwt import JwtConfig, issue_token
from resale_market.auth.models import Principal, Role
from resale_market.db.base import to_documents
from resale_market.db.repositories.users import UserRepo
from resale_market.observability.logging import get_logger
from resale_market.settings import Settings, get_settings

log = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.put("/user/{email}")
async def login_upsert(
    email: str,
    body: dict[str, Any] | None = Body(default=None),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    # Must stay callable before the caller has a token: this is where tokens come from.
    result = await UserRepo(session).upsert_by_email(email, body or {})
    await session.commit()
    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        email=email,
        ttl=timedelta(hours=settings.jwt_ttl_hours),
    )
    log.info("user_login", email=email, created=result.upserted_id is not None)
    return {"result": result.to_response(), "token": token}


@router.put(
    "/user/type/{email}",
    dependencies=[Depends(unless_policy("open_role_assignment", require_admin))],
)
async def set_user_role(
    email: str,
    body: dict[str, Any] = Body(...),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await UserRepo(session).upsert_by_email(email, body)
    await session.commit()
    log.info("user_role_set", email=email, role=body.get("role"))
    return result.to_response()


@router.get("/user/{email}")
async def get_user(
    email: str,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any] | None:
    user = await UserRepo(session).get_by_email(email)
    return user.to_document() if user else None


async def _user_if_role(session: AsyncSession, email: str, role: Role) -> dict[str, Any]:
    user = await UserRepo(session).get_by_email(email)
    if user is None or Role.parse(user.role) is not role:
        return {}
    return user.to_document()


@router.get("/admin")
async def check_admin(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    return await _user_if_role(session, principal.email, Role.admin)


@router.get("/seller")
async def check_seller(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    return await _user_if_role(session, principal.email, Role.seller)


@router.get("/buyer")
async def check_buyer(
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    return await _user_if_role(session, principal.email, Role.buyer)


@router.get("/all-buyers")
async def list_buyers(session: AsyncSession = Depends(db_session)) -> list[dict[str, Any]]:
    return to_documents(await UserRepo(session).list_by_role(Role.buyer))


@router.get("/all-sellers", dependencies=[Depends(get_principal)])
async def list_sellers(session: AsyncSession = Depends(db_session)) -> list[dict[str, Any]]:
    return to_documents(await UserRepo(session).list_by_role(Role.seller))


@router.delete("/delete-user/{user_id}", dependencies=[Depends(require_admin)])
async def delete_user(
    user_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await UserRepo(session).delete(user_id)
    await session.commit()
    log.info("user_deleted", user_id=str(user_id), by=principal.email, deleted=result.deleted_count)
    return result.to_response()


@router.put("/verified/{user_id}", dependencies=[Depends(require_admin)])
async def verify_user(
    user_id: uuid.UUID,
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    result = await UserRepo(session).patch(user_id, {"verified": True})
    await session.commit()
    return result.to_response()
