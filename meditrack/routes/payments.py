# meditrack/routes/payments.py
import logging

from fastapi import APIRouter, HTTPException, status

from meditrack.schemas.payment import PaymentIntentRequest, PaymentIntentResponse
from meditrack.utils.stripe_client import PaymentGatewayError, stripe_client, to_minor_units

router = APIRouter(tags=["Payments"])
logger = logging.getLogger(__name__)


@router.post("/create-payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(payload: PaymentIntentRequest):
    amount = to_minor_units(payload.price)
    try:
        intent = await stripe_client.create_payment_intent(amount)
        client_secret = intent.get("client_secret")
        if not client_secret:
            raise PaymentGatewayError("Payment intent reply without client secret")
    except PaymentGatewayError as e:
        logger.exception("Payment intent creation failed for amount %s: %s", amount, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"message": "Payment gateway error", **e.public_info},
        )

    logger.info("Payment intent %s created for amount %s", intent.get("id"), amount)
    return {"clientSecret": client_secret}
