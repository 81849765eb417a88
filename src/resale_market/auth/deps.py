"""
resale_market.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal` (token verifier gate).
- Enforce role gates via reusable dependency factories.
- Apply gates conditionally for routes governed by access policy toggles.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from resale_market.api.deps import db_session
from resale_market.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from resale_market.auth.models import Principal, Role
from resale_market.auth.roles import RoleResolutionError, resolve_role
from resale_market.observability.logging import get_logger
from resale_market.settings import Settings, get_settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(get_settings),
) -> Principal:
    if creds is None or not creds.credentials:
        # A header that is present but not "Bearer <token>" is a bad credential,
        # not a missing one.
        if request.headers.get("authorization"):
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Forbidden access")
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unauthorized access")

    try:
        payload = decode_and_validate(cfg=JwtConfig.from_settings(settings), token=creds.credentials)
    except JwtValidationError as e:
        log.info("token_rejected", reason=str(e))
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Forbidden access") from e

    email = str(payload.get("email") or "")
    if not email:
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Forbidden access")
    return Principal(email=email)


def require_roles(*allowed: Role):
    allowed_set = frozenset(allowed)

    async def _dep(
        principal: Principal = Depends(get_principal),
        session: AsyncSession = Depends(db_session),
    ) -> Principal:
        try:
            role = await resolve_role(session, principal.email)
        except RoleResolutionError as e:
            log.warning("access_denied", email=principal.email, reason=str(e))
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Forbidden access") from e
        if role not in allowed_set:
            log.warning("access_denied", email=principal.email, role=role.value)
            raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Forbidden access")
        return principal

    return _dep


require_seller_or_admin = require_roles(Role.seller, Role.admin)
require_admin = require_roles(Role.admin)
require_registered = require_roles(*Role)


def unless_policy(flag: str, gate):
    """
    Run `gate` only when the boolean settings attribute `flag` is off.

    The gate's own dependencies are resolved by hand so the open variant of the
    route never touches the token or the user store.
    """

    async def _dep(
        request: Request,
        creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
        settings: Settings = Depends(get_settings),
        session: AsyncSession = Depends(db_session),
    ) -> None:
        if getattr(settings, flag):
            return
        principal = get_principal(request, creds, settings)
        await gate(principal, session)

    return _dep


# --- Module Notes -----------------------------------------------------------
# Gates always run after `get_principal` (they depend on it), so the role lookup
# never happens for unauthenticated or forbidden tokens.
