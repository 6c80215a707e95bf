# meditrack/routes/camps.py
import logging
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pymongo import ASCENDING, DESCENDING
from pymongo.database import Database

from meditrack.database import CAMPS, get_db
from meditrack.schemas.auth import Principal
from meditrack.schemas.camp import CampCreate, CampOut, CampPage, CampUpdate, IncrementResult
from meditrack.schemas.common import DeleteResult, InsertResult, UpdateResult
from meditrack.utils.mongo import (
    delete_result_out, ensure_deleted, ensure_matched, insert_result_out, parse_object_id,
    search_filter, serialize_doc, serialize_docs, total_pages, update_result_out,
)
from meditrack.utils.permissions import Capability
from meditrack.utils.tokenJWT import ensure_self, get_current_principal, require_capability

router = APIRouter(tags=["Camps"])
logger = logging.getLogger(__name__)

SEARCH_FIELDS = ("campName", "healthcareProfessional", "location")

SortField = Literal[
    "campName", "dateAndTime", "location", "healthcareProfessional", "campFees", "participantCount",
]

POPULAR_LIMIT = 4
POPULAR_LIMIT_MD = 3


# List camps with search, optional sorting and pagination
@router.get("/camps", response_model=CampPage)
def list_camps(
    search: Optional[str] = Query(None, description="Camp name, professional or location"),
    sortBy: Optional[SortField] = Query(None),
    order: Literal["asc", "desc"] = "asc",
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    db: Database = Depends(get_db),
):
    query = search_filter(search, SEARCH_FIELDS)

    cursor = db[CAMPS].find(query)
    # Natural storage order unless a sort field is supplied
    if sortBy:
        cursor = cursor.sort(sortBy, ASCENDING if order == "asc" else DESCENDING)

    total = db[CAMPS].count_documents(query)
    camps = cursor.skip((page - 1) * limit).limit(limit)

    return {
        "camps": serialize_docs(camps),
        "totalCamps": total,
        "currentPage": page,
        "totalPages": total_pages(total, limit),
    }


def _popular(db: Database, limit: int) -> List[dict]:
    return serialize_docs(db[CAMPS].find().sort("participantCount", DESCENDING).limit(limit))


@router.get("/popular-camps", response_model=List[CampOut])
def popular_camps(db: Database = Depends(get_db)):
    return _popular(db, POPULAR_LIMIT)


@router.get("/popular-camps-md", response_model=List[CampOut])
def popular_camps_md(db: Database = Depends(get_db)):
    return _popular(db, POPULAR_LIMIT_MD)


# Camps organized by the calling admin
@router.get("/camps/organizer/{email}", response_model=List[CampOut])
def organizer_camps(
    email: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(require_capability(Capability.MANAGE_CAMPS)),
):
    ensure_self(principal, email)
    return serialize_docs(db[CAMPS].find({"organizerEmail": email.strip().lower()}))


@router.get("/camps/{camp_id}", response_model=Optional[CampOut])
def get_camp(
    camp_id: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    oid = parse_object_id(camp_id, "camp id")
    return serialize_doc(db[CAMPS].find_one({"_id": oid}))


# Create a camp (Admin only)
@router.post("/camps", response_model=InsertResult)
def create_camp(
    payload: CampCreate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(require_capability(Capability.MANAGE_CAMPS)),
):
    doc = payload.model_dump(exclude_none=True)
    doc["organizerEmail"] = (doc.get("organizerEmail") or principal.email).lower()
    result = db[CAMPS].insert_one(doc)
    logger.info("Camp %s created by %s", result.inserted_id, principal.email)
    return insert_result_out(result)


# Partial update of a camp (Admin only)
@router.patch("/update-camp/{camp_id}", response_model=UpdateResult)
def update_camp(
    camp_id: str,
    payload: CampUpdate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(require_capability(Capability.MANAGE_CAMPS)),
):
    oid = parse_object_id(camp_id, "camp id")
    fields = payload.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    result = ensure_matched(db[CAMPS].update_one({"_id": oid}, {"$set": fields}), "Camp not found")
    logger.info("Camp %s updated by %s: %s", camp_id, principal.email, sorted(fields))
    return update_result_out(result)


# Delete a camp (Admin only); registrations are left in place
@router.delete("/delete-camp/{camp_id}", response_model=DeleteResult)
def delete_camp(
    camp_id: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(require_capability(Capability.MANAGE_CAMPS)),
):
    oid = parse_object_id(camp_id, "camp id")
    result = ensure_deleted(db[CAMPS].delete_one({"_id": oid}), "Camp not found")
    logger.info("Camp %s deleted by %s", camp_id, principal.email)
    return delete_result_out(result)


@router.patch("/increment-participant/{camp_id}", response_model=IncrementResult)
def increment_participant(
    camp_id: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(require_capability(Capability.MANAGE_CAMPS)),
):
    oid = parse_object_id(camp_id, "camp id")
    result = ensure_matched(
        db[CAMPS].update_one({"_id": oid}, {"$inc": {"participantCount": 1}}),
        "Camp not found",
    )
    logger.info("Participant count of camp %s incremented by %s", camp_id, principal.email)
    return {
        "success": True,
        "message": "Participant count incremented",
        "result": update_result_out(result),
    }
