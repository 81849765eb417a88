"""
resale_market.services.payments

Payment provider boundary.

Responsibilities:
- Convert decimal prices to integer minor units.
- Define the `PaymentGateway` interface payment intents are created through.
- Provide the Stripe-backed gateway used in production.
- Create payment intents in the configured currency.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Protocol

import stripe
from starlette.concurrency import run_in_threadpool

from resale_market.observability.logging import get_logger
from resale_market.settings import Settings

log = get_logger(__name__)


class PaymentProviderError(Exception):
    pass


def to_minor_units(price: float | int | str | Decimal) -> int:
    # Go through str() so binary float noise (19.99 * 100 == 1998.99...) can't leak in.
    amount = Decimal(str(price)) * 100
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentGateway(Protocol):
    async def create_intent(self, *, amount: int, currency: str) -> str:
        """Create a payment intent and return its client secret."""
        ...


class StripePaymentGateway:
    def __init__(self, *, secret_key: str) -> None:
        self._secret_key = secret_key

    async def create_intent(self, *, amount: int, currency: str) -> str:
        if not self._secret_key:
            raise PaymentProviderError("payment provider is not configured")
        try:
            # The classic stripe SDK is blocking; keep it off the event loop.
            intent = await run_in_threadpool(
                stripe.PaymentIntent.create,
                api_key=self._secret_key,
                amount=amount,
                currency=currency,
                payment_method_types=["card"],
            )
        except stripe.StripeError as e:
            raise PaymentProviderError(e.user_message or str(e)) from e
        return intent.client_secret


class PaymentIntentService:
    def __init__(self, *, settings: Settings, payments: PaymentGateway) -> None:
        self._settings = settings
        self._payments = payments

    async def create(self, *, price: float | str) -> str:
        amount = to_minor_units(price)
        currency = self._settings.payment_currency
        secret = await self._payments.create_intent(amount=amount, currency=currency)
        log.info("payment_intent_created", amount=amount, currency=currency)
        return secret
