# meditrack/routes/registrations.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo import DESCENDING
from pymongo.database import Database

from meditrack.database import REGISTRATIONS, get_db
from meditrack.schemas.auth import Principal
from meditrack.schemas.common import DeleteResult, InsertResult, UpdateResult
from meditrack.schemas.registration import (
    DEFAULT_REGISTRATION_STATUS, FeedbackUpdate, PaymentStatus, PaymentUpdate,
    RegistrationCreate, RegistrationOut, RegistrationPage, RegistrationStatusUpdate,
)
from meditrack.utils.mongo import (
    delete_result_out, ensure_deleted, ensure_matched, insert_result_out, parse_object_id,
    search_filter, serialize_docs, total_pages, update_result_out,
)
from meditrack.utils.permissions import Capability
from meditrack.utils.tokenJWT import ensure_self, get_current_principal, require_capability

router = APIRouter(tags=["Registrations"])
logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("campName", "participantName", "participantEmail")

manage_registrations = require_capability(Capability.MANAGE_REGISTRATIONS)


# Sign the caller up for a camp (self-service only)
@router.post("/register-camp", response_model=InsertResult)
def register_camp(
    payload: RegistrationCreate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    ensure_self(principal, payload.participantEmail)
    parse_object_id(payload.campId, "camp id")

    doc = payload.model_dump(exclude_none=True)
    doc["participantEmail"] = doc["participantEmail"].lower()
    doc.update({
        "paymentStatus": PaymentStatus.UNPAID,
        "status": DEFAULT_REGISTRATION_STATUS,
        "createdAt": datetime.now(timezone.utc),
    })
    result = db[REGISTRATIONS].insert_one(doc)
    logger.info("Registration %s created for camp %s by %s", result.inserted_id, payload.campId, principal.email)
    return insert_result_out(result)


# TODO: decide whether deletion should be restricted to the participant and admins
@router.delete("/delete-registered-camp/{registration_id}", response_model=DeleteResult)
def delete_registration(
    registration_id: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    oid = parse_object_id(registration_id, "registration id")
    result = ensure_deleted(db[REGISTRATIONS].delete_one({"_id": oid}), "Registration not found")
    logger.info("Registration %s deleted by %s", registration_id, principal.email)
    return delete_result_out(result)


@router.get("/registered-camps/{email}", response_model=List[RegistrationOut])
def registered_camps(
    email: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    ensure_self(principal, email)
    return serialize_docs(db[REGISTRATIONS].find({"participantEmail": email.strip().lower()}))


# Mark a registration as paid
@router.patch("/update-payment/{registration_id}", response_model=UpdateResult)
def update_payment(
    registration_id: str,
    payload: PaymentUpdate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    oid = parse_object_id(registration_id, "registration id")
    # No idempotency guard: a later payment reference overwrites the earlier one
    update = {
        "paymentStatus": PaymentStatus.PAID,
        "paymentTime": datetime.now(timezone.utc),
        "paymentId": payload.paymentId,
    }
    result = ensure_matched(
        db[REGISTRATIONS].update_one({"_id": oid}, {"$set": update}),
        "Registration not found",
    )
    logger.info("Registration %s paid (%s) by %s", registration_id, payload.paymentId, principal.email)
    return update_result_out(result)


# Attach participant feedback; feedback can only be set once
@router.patch("/update-feedback/{registration_id}", response_model=UpdateResult)
def update_feedback(
    registration_id: str,
    payload: FeedbackUpdate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    oid = parse_object_id(registration_id, "registration id")
    update = payload.model_dump(exclude_none=True)

    result = db[REGISTRATIONS].update_one({"_id": oid, "feedback": None}, {"$set": update})
    if result.matched_count == 0 and db[REGISTRATIONS].find_one({"_id": oid}, {"_id": 1}) is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Feedback already submitted")
    ensure_matched(result, "Registration not found")

    logger.info("Feedback added to registration %s by %s", registration_id, principal.email)
    return update_result_out(result)


# Set the confirmation status of a registration (Admin only)
@router.patch("/update-registration-status/{registration_id}", response_model=UpdateResult)
def update_registration_status(
    registration_id: str,
    payload: RegistrationStatusUpdate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(manage_registrations),
):
    oid = parse_object_id(registration_id, "registration id")
    result = ensure_matched(
        db[REGISTRATIONS].update_one({"_id": oid}, {"$set": {"status": payload.status}}),
        "Registration not found",
    )
    logger.info("Registration %s status set to %s by %s", registration_id, payload.status, principal.email)
    return update_result_out(result)


@router.get("/registrations", response_model=List[RegistrationOut])
def all_registrations(
    db: Database = Depends(get_db),
    principal: Principal = Depends(manage_registrations),
):
    return serialize_docs(db[REGISTRATIONS].find())


# Paginated registration management view (Admin only)
@router.get("/admin/manage-registrations", response_model=RegistrationPage)
def manage_registrations_page(
    search: Optional[str] = Query(None, description="Camp, participant name or email"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Database = Depends(get_db),
    principal: Principal = Depends(manage_registrations),
):
    query = search_filter(search, SEARCH_FIELDS)
    total = db[REGISTRATIONS].count_documents(query)
    items = (
        db[REGISTRATIONS].find(query)
        .sort("createdAt", DESCENDING)
        .skip((page - 1) * limit)
        .limit(limit)
    )
    return {
        "registrations": serialize_docs(items),
        "totalRegistrations": total,
        "currentPage": page,
        "totalPages": total_pages(total, limit),
    }
