# meditrack/schemas/common.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# Stored documents carry arbitrary extra fields; only _id is guaranteed
class DocumentOut(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., alias="_id")


# Wire shapes of the driver results returned to clients
class InsertResult(BaseModel):
    acknowledged: bool = True
    insertedId: Optional[str] = None


class UpdateResult(BaseModel):
    acknowledged: bool = True
    matchedCount: int
    modifiedCount: int
    upsertedId: Optional[str] = None


class DeleteResult(BaseModel):
    acknowledged: bool = True
    deletedCount: int
