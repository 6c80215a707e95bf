# meditrack/utils/stripe_client.py
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import httpx

from meditrack.config import settings

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    def __init__(self, message: str, payload: Optional[Dict[str, Any]] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.payload = payload or {}
        self.status_code = status_code

    @property
    def public_info(self) -> Dict[str, Any]:
        # Only the machine readable part of the gateway error is safe to echo
        return {k: self.payload[k] for k in ("type", "code") if self.payload.get(k)}


def to_minor_units(price: float) -> int:
    """Major currency units to minor units, rounded half-up (19.995 -> 2000)."""
    return int((Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class StripeClient:
    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_url = settings.STRIPE_API_URL
        self.secret_key = settings.STRIPE_SECRET_KEY
        self.currency = settings.PAYMENT_CURRENCY
        self.transport = transport

    async def create_payment_intent(self, amount: int, currency: Optional[str] = None) -> Dict[str, Any]:
        # Submit a payment intent request to the Stripe API
        url = urljoin(self.api_url, "/v1/payment_intents")
        data = {
            "amount": str(amount),
            "currency": currency or self.currency,
            "payment_method_types[]": "card",
        }
        headers = {"Authorization": f"Bearer {self.secret_key}"}
        async with httpx.AsyncClient(transport=self.transport, timeout=30) as client:
            try:
                response = await client.post(url, data=data, headers=headers)
            except httpx.RequestError as e:
                logger.error(f"Stripe request error: {e}")
                raise PaymentGatewayError(str(e)) from e

        if response.status_code >= 400:
            try:
                error = response.json().get("error", {})
            except ValueError:
                error = {"message": response.text}
            logger.error("Stripe create payment intent error: status=%s error=%s", response.status_code, error)
            raise PaymentGatewayError(error.get("message") or "Payment gateway error", error, response.status_code)

        try:
            intent = response.json()
        except ValueError:
            intent = {}
        if not intent.get("client_secret"):
            logger.error("Stripe payment intent reply without client_secret: status=%s", response.status_code)
            raise PaymentGatewayError("Payment intent reply without client secret", status_code=response.status_code)
        return intent


stripe_client = StripeClient()
