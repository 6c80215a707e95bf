# meditrack/schemas/camp.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from meditrack.schemas.common import DocumentOut, UpdateResult


# Shared base attributes for camp documents
class CampBase(BaseModel):
    model_config = ConfigDict(extra="allow")

    campName: Optional[str] = None
    image: Optional[str] = None
    dateAndTime: Optional[str] = None
    location: Optional[str] = None
    healthcareProfessional: Optional[str] = None
    campFees: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None

    # Extra keys are stored verbatim; the id is server assigned and operators are not field names
    @model_validator(mode="after")
    def _storable_extra_keys(self):
        for key in self.model_extra or {}:
            if key == "_id" or key.startswith("$") or "." in key:
                raise ValueError(f"Field name not allowed: {key}")
        return self


# Schema for creating a camp; required fields are enforced by the client
class CampCreate(CampBase):
    participantCount: int = Field(default=0, ge=0)
    organizerEmail: Optional[EmailStr] = None


# Schema for PATCH requests - all fields optional, counter not writable
class CampUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    campName: Optional[str] = None
    image: Optional[str] = None
    dateAndTime: Optional[str] = None
    location: Optional[str] = None
    healthcareProfessional: Optional[str] = None
    campFees: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None


class CampOut(DocumentOut):
    campName: Optional[str] = None
    participantCount: Optional[int] = None


# Paginated response for camp listings
class CampPage(BaseModel):
    camps: List[CampOut]
    totalCamps: int
    currentPage: int
    totalPages: int


class IncrementResult(BaseModel):
    success: bool
    message: str
    result: UpdateResult
