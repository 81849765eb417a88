from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from resale_market.api.deps import payment_gateway
from resale_market.auth.deps import get_principal
from resale_market.services.payments import PaymentGateway, PaymentIntentService
from resale_market.settings import Settings, get_settings

router = APIRouter(tags=["payments"])

# Far above any listing; keeps the minor-unit conversion in exact decimal range.
MAX_RESALE_PRICE = 1_000_000_000


class PaymentIntentRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    resale_price: float = Field(
        alias="resalePrice", ge=0, le=MAX_RESALE_PRICE, allow_inf_nan=False
    )


class PaymentIntentResponse(BaseModel):
    client_secret: str = Field(serialization_alias="clientSecret")


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    dependencies=[Depends(get_principal)],
)
async def create_payment_intent(
    body: PaymentIntentRequest,
    settings: Settings = Depends(get_settings),
    payments: PaymentGateway = Depends(payment_gateway),
) -> PaymentIntentResponse:
    svc = PaymentIntentService(settings=settings, payments=payments)
    secret = await svc.create(price=body.resale_price)
    return PaymentIntentResponse(client_secret=secret)
