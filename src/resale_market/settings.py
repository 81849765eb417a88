"""
resale_market.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (JWT secret, Stripe key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Env-driven configuration for the marketplace API.

    The access policy flags default to the permissive historical behavior.
    """

    model_config = SettingsConfigDict(
        env_prefix="RESALE_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "resale-market"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Auth
    jwt_alg: str = "HS256"
    jwt_issuer: str = "resale-market"
    jwt_audience: str = "resale-market-api"
    jwt_secret: str = Field(default="dev-secret-change-me", repr=False)
    jwt_ttl_hours: int = 24

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./resale.db"
    create_tables: bool = True

    # Payments
    stripe_secret_key: str = Field(default="", repr=False)
    payment_currency: str = "usd"

    # Access policies
    open_role_assignment: bool = True
    open_advertising: bool = True
    open_reporting: bool = True
    trust_product_seller: bool = True
    legacy_order_product_name: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# `api.app.create_app` overrides `get_settings` in the DI container, so routers
# always see the settings object the app was built with.
