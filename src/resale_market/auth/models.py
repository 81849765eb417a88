"""
resale_market.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints.
- Define the closed set of marketplace roles.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class Role(enum.StrEnum):
    # Values are stored verbatim on user records; treat as stable API contract.
    buyer = "Buyer"
    seller = "Seller"
    admin = "Admin"

    @classmethod
    def parse(cls, raw: object) -> Role | None:
        """Map a stored role value onto the enumeration, or None if it is not one."""
        try:
            return cls(raw)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity (decoded token claim).
    """

    email: str


# --- Module Notes -----------------------------------------------------------
# Principal deliberately carries no role: roles live on the user record and are
# resolved per request by `auth.roles.resolve_role`.
