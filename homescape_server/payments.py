"""
Payment intents (POST /create-payment-intent) through Stripe.
The browser completes the payment with the returned client secret.
"""
import logging
from typing import Annotated

import stripe
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from homescape_server.auth import RequireToken
from homescape_server.config import PAYMENT_CURRENCY, STRIPE_SECRET_KEY

logger = logging.getLogger(__name__)
router = APIRouter()


class PaymentIntentRequest(BaseModel):
    price: float = Field(gt=0)


class PaymentGateway:
    def __init__(self, api_key: str, currency: str):
        self.api_key = api_key
        self.currency = currency

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def create_intent(self, amount: int) -> str:
        """Create a card PaymentIntent for `amount` (smallest currency unit); return its client secret."""
        intent = stripe.PaymentIntent.create(
            amount=amount,
            currency=self.currency,
            payment_method_types=["card"],
            api_key=self.api_key,
        )
        return intent.client_secret


_gateway: PaymentGateway | None = None


def get_payment_gateway() -> PaymentGateway:
    """Dependency: process-wide gateway built from config."""
    global _gateway
    if _gateway is None:
        _gateway = PaymentGateway(STRIPE_SECRET_KEY, PAYMENT_CURRENCY)
    return _gateway


def price_to_cents(price: float) -> int:
    return int(round(price * 100))


@router.post("/create-payment-intent")
def create_payment_intent(
    body: PaymentIntentRequest,
    gateway: Annotated[PaymentGateway, Depends(get_payment_gateway)],
    claims: dict = RequireToken,
):
    if not gateway.configured:
        logger.error("STRIPE_SECRET_KEY not set")
        raise HTTPException(status_code=503, detail="Payments not configured")
    amount = price_to_cents(body.price)
    try:
        client_secret = gateway.create_intent(amount)
    except stripe.StripeError as e:
        logger.error("Payment intent failed for %s: %s", claims.get("email"), e)
        raise HTTPException(status_code=502, detail="Payment provider error")
    return {"clientSecret": client_secret}
