# meditrack/utils/mongo.py
import math
import re
from typing import Any, Dict, Iterable, List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult


# Parse a path id into an ObjectId, rejecting malformed values with 400
def parse_object_id(value: str, label: str = "id") -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid {label}")


def serialize_doc(doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return a JSON friendly copy of a Mongo document (ObjectIds become strings)."""
    if doc is None:
        return None
    return {k: (str(v) if isinstance(v, ObjectId) else v) for k, v in doc.items()}


def serialize_docs(docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_doc(d) for d in docs]


def search_filter(search: Optional[str], fields: Iterable[str]) -> Dict[str, Any]:
    # Empty search matches every document
    if not search:
        return {}
    pattern = re.escape(search)
    return {"$or": [{f: {"$regex": pattern, "$options": "i"}} for f in fields]}


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


# ---- driver result wrappers ----

def insert_result_out(result: InsertOneResult) -> Dict[str, Any]:
    return {"acknowledged": result.acknowledged, "insertedId": str(result.inserted_id)}


def update_result_out(result: UpdateResult) -> Dict[str, Any]:
    upserted = result.upserted_id
    return {
        "acknowledged": result.acknowledged,
        "matchedCount": result.matched_count,
        "modifiedCount": result.modified_count,
        "upsertedId": str(upserted) if upserted is not None else None,
    }


def delete_result_out(result: DeleteResult) -> Dict[str, Any]:
    return {"acknowledged": result.acknowledged, "deletedCount": result.deleted_count}


def ensure_matched(result: UpdateResult, detail: str = "Document not found") -> UpdateResult:
    """Raise 404 when a targeted update addressed no document."""
    if result.matched_count == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return result


def ensure_deleted(result: DeleteResult, detail: str = "Document not found") -> DeleteResult:
    if result.deleted_count == 0:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    return result
