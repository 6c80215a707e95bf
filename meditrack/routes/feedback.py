# meditrack/routes/feedback.py
import logging
from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends
from pymongo import DESCENDING
from pymongo.database import Database

from meditrack.database import FEEDBACK, get_db
from meditrack.schemas.auth import Principal
from meditrack.schemas.common import InsertResult
from meditrack.schemas.feedback import FeedbackCreate, FeedbackOut
from meditrack.utils.mongo import insert_result_out, serialize_docs
from meditrack.utils.tokenJWT import get_current_principal

router = APIRouter(prefix="/feedback", tags=["Feedback"])
logger = logging.getLogger(__name__)


@router.get("", response_model=List[FeedbackOut])
def list_feedback(db: Database = Depends(get_db)):
    return serialize_docs(db[FEEDBACK].find().sort("createdAt", DESCENDING))


# Append a feedback entry; the log is never edited
@router.post("", response_model=InsertResult)
def submit_feedback(
    payload: FeedbackCreate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    doc = payload.model_dump(exclude_none=True)
    doc["email"] = (doc.get("email") or principal.email).lower()
    doc["createdAt"] = datetime.now(timezone.utc)
    result = db[FEEDBACK].insert_one(doc)
    logger.info("Feedback %s submitted by %s", result.inserted_id, principal.email)
    return insert_result_out(result)
