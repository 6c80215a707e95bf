from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr

from meditrack.schemas.common import DocumentOut


# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr


# Schema for first sign-in and profile sync; any client supplied role is ignored
class UserCreate(UserBase):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    photo: Optional[str] = None
    phone: Optional[str] = None


# Schema for self-service profile edits
class ProfileUpdate(UserBase):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    photo: Optional[str] = None
    phone: Optional[str] = None


# Output schema for user profile details
class UserOut(DocumentOut):
    email: str
    name: Optional[str] = None
    photo: Optional[str] = None
    phone: Optional[str] = None
    role: str = "user"


class UserCreateResult(BaseModel):
    acknowledged: bool = True
    insertedId: Optional[str] = None
    message: Optional[str] = None


class AdminCheck(BaseModel):
    admin: bool
