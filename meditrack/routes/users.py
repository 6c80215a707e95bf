# meditrack/routes/users.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from meditrack.database import USERS, get_db
from meditrack.schemas.auth import Principal
from meditrack.schemas.common import UpdateResult
from meditrack.schemas.user import AdminCheck, ProfileUpdate, UserCreate, UserCreateResult, UserOut
from meditrack.utils.mongo import ensure_matched, serialize_doc, serialize_docs, update_result_out
from meditrack.utils.permissions import Capability, Role, is_admin
from meditrack.utils.tokenJWT import ensure_self, get_current_principal, require_capability

router = APIRouter(prefix="/users", tags=["Users"])
logger = logging.getLogger(__name__)

EXISTING_USER_MESSAGE = "user already exists"


def _profile_fields(payload) -> dict:
    return payload.model_dump(exclude_unset=True, exclude={"email"})


# Retrieve all users (Admin only)
@router.get("", response_model=List[UserOut])
def get_all_users(
    db: Database = Depends(get_db),
    principal: Principal = Depends(require_capability(Capability.VIEW_USERS)),
):
    return serialize_docs(db[USERS].find())


# Create the user on first sign-in; existing users are left untouched
@router.post("", response_model=UserCreateResult)
def create_user(payload: UserCreate, db: Database = Depends(get_db)):
    email = payload.email.lower()
    if db[USERS].find_one({"email": email}, {"_id": 1}):
        return {"message": EXISTING_USER_MESSAGE, "insertedId": None}

    doc = {
        **_profile_fields(payload),
        "email": email,
        "role": Role.USER.value,
        "createdAt": datetime.now(timezone.utc),
    }
    try:
        result = db[USERS].insert_one(doc)
    except DuplicateKeyError:
        # Lost a race with a concurrent first sign-in
        return {"message": EXISTING_USER_MESSAGE, "insertedId": None}

    logger.info("User %s created", email)
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


# Profile sync: overwrite profile fields, never the role of an existing user
@router.put("", response_model=UpdateResult)
def upsert_user(payload: UserCreate, db: Database = Depends(get_db)):
    email = payload.email.lower()
    update = {
        "$setOnInsert": {
            "email": email,
            "role": Role.USER.value,
            "createdAt": datetime.now(timezone.utc),
        },
    }
    fields = _profile_fields(payload)
    if fields:
        update["$set"] = fields

    result = db[USERS].update_one({"email": email}, update, upsert=True)
    logger.info("User %s synced (upserted=%s)", email, result.upserted_id is not None)
    return update_result_out(result)


# Self-service profile edit
@router.patch("/profile", response_model=UpdateResult)
def update_profile(
    payload: ProfileUpdate,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    ensure_self(principal, payload.email)
    fields = _profile_fields(payload)
    if not fields:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    result = ensure_matched(
        db[USERS].update_one({"email": payload.email.lower()}, {"$set": fields}),
        "User not found",
    )
    logger.info("Profile of %s updated: %s", principal.email, sorted(fields))
    return update_result_out(result)


@router.get("/admin/{email}", response_model=AdminCheck)
def check_admin(
    email: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    ensure_self(principal, email)
    user = db[USERS].find_one({"email": email.strip().lower()}, {"role": 1})
    return {"admin": bool(user and is_admin(user.get("role")))}


@router.get("/{email}", response_model=Optional[UserOut])
def get_user(
    email: str,
    db: Database = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    ensure_self(principal, email)
    return serialize_doc(db[USERS].find_one({"email": email.strip().lower()}))
