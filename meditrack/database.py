# meditrack/database.py
import logging
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database

from meditrack.config import settings

logger = logging.getLogger(__name__)

USERS = "users"
CAMPS = "camps"
REGISTRATIONS = "registrations"
FEEDBACK = "feedback"

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    # One pooled client per process, shared by every request
    global _client
    if _client is None:
        _client = MongoClient(settings.MONGODB_URI, tz_aware=True)
        logger.info("MongoDB client created for database %s", settings.DB_NAME)
    return _client


def get_db():
    yield get_client()[settings.DB_NAME]


def init_db(db: Database):
    db[USERS].create_index([("email", ASCENDING)], unique=True)


def close_client():
    global _client
    if _client is not None:
        _client.close()
        _client = None
