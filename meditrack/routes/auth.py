# meditrack/routes/auth.py
import logging

from fastapi import APIRouter

from meditrack.schemas.auth import TokenRequest, TokenResponse
from meditrack.utils.tokenJWT import create_access_token

router = APIRouter(tags=["Auth"])
logger = logging.getLogger(__name__)


# Issue a bearer token for the signed-in client
@router.post("/jwt", response_model=TokenResponse)
def issue_token(payload: TokenRequest):
    email = payload.email.strip().lower()
    token = create_access_token(data={"sub": email, "email": email})
    logger.info("Issued token for %s", email)
    return {"token": token}
