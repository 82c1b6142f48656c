# storefront/db/__init__.py
"""
Database module.
"""
from typing import Optional

from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from storefront.core.config import settings
from storefront.core.logging import log
from storefront.models import DOCUMENT_MODELS

# Motor client instance
_client = None
_db = None
_connection_error: Optional[str] = None


async def init_models(database) -> None:
    """Bind every Beanie document to ``database``."""
    global _db
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    _db = database


async def connect_db():
    """
    Connect to MongoDB.

    If MongoDB is not available, stores the error for later retrieval
    rather than silently failing.
    """
    global _client, _db, _connection_error
    mongo_url = settings.database.mongodb_url
    try:
        _client = AsyncIOMotorClient(
            mongo_url,
            serverSelectionTimeoutMS=settings.database.server_selection_timeout_ms,
        )

        # Test connection - this will fail fast if MongoDB is not running
        await _client.admin.command("ping")
        log("DB", f"Connected to MongoDB ({settings.database.db_name})")

        await init_models(_client[settings.database.db_name])
        log("DB", "Beanie ODM initialized")
        _connection_error = None
    except Exception as e:
        error_msg = str(e)
        log("DB", f"MongoDB not available: {error_msg}")
        log("DB", f"Database features are disabled until MongoDB is reachable at {mongo_url}")
        _client = None
        _db = None
        _connection_error = error_msg


async def disconnect_db():
    """Disconnect from MongoDB."""
    global _client, _db
    if _client:
        _client.close()
        log("DB", "Disconnected from MongoDB")
    _client = None
    _db = None


def get_db():
    """
    Get database instance.

    Returns None if MongoDB is not connected.
    """
    return _db


def is_connected() -> bool:
    """Check if database is connected."""
    return _db is not None


def get_connection_error() -> Optional[str]:
    """Get connection error message if connection failed."""
    return _connection_error
