# meditrack/schemas/registration.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from meditrack.schemas.common import DocumentOut


class PaymentStatus:
    UNPAID = "Unpaid"
    PAID = "Paid"


DEFAULT_REGISTRATION_STATUS = "Pending"


# Input schema for a participant signing up for a camp
class RegistrationCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    campId: str
    campName: Optional[str] = None
    campFees: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None
    healthcareProfessional: Optional[str] = None
    participantName: Optional[str] = None
    participantEmail: EmailStr
    age: Optional[int] = Field(default=None, ge=0)
    phone: Optional[str] = None
    gender: Optional[str] = None
    emergencyContact: Optional[str] = None


class PaymentUpdate(BaseModel):
    paymentId: str

    @field_validator("paymentId")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("paymentId is required")
        return v


class FeedbackUpdate(BaseModel):
    feedback: str = Field(..., min_length=1)
    rating: Optional[int] = Field(default=None, ge=1, le=5)


class RegistrationStatusUpdate(BaseModel):
    status: str = Field(..., min_length=1)


class RegistrationOut(DocumentOut):
    campId: Optional[str] = None
    participantEmail: Optional[str] = None
    paymentStatus: Optional[str] = None
    status: Optional[str] = None


# Schema for paginated registration lists
class RegistrationPage(BaseModel):
    registrations: List[RegistrationOut]
    totalRegistrations: int
    currentPage: int
    totalPages: int
