from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from meditrack.schemas.common import DocumentOut


class FeedbackCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    photo: Optional[str] = None
    campName: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    content: str = Field(..., min_length=1)


class FeedbackOut(DocumentOut):
    name: Optional[str] = None
    email: Optional[str] = None
    content: Optional[str] = None
