"""
MongoDB connection and collection access for the authentication service
"""
import logging

from fastapi import Request
from pymongo import ASCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.errors import OperationFailure, PyMongoError

from .config import Settings, settings as default_settings
from .errors import DatabaseConnectionError

logger = logging.getLogger(__name__)

EMAIL_INDEX_NAME = "uniq_email"


def ensure_indexes(users: Collection) -> None:
    """
    Create the unique index on email.

    Registration relies on this index to reject duplicates atomically.
    """
    users.create_index([("email", ASCENDING)], unique=True, name=EMAIL_INDEX_NAME)


def init_db(settings: Settings = None) -> Collection:
    """
    Connect to MongoDB and return the users collection.

    Should be called once by the process entry point. Pings the server so an
    unreachable database fails here rather than on the first request.

    Raises:
        DatabaseConnectionError: If the server cannot be reached or the index cannot be created
    """
    settings = settings or default_settings
    client = MongoClient(settings.MONGODB_URI, serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS)
    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        logger.error("MongoDB connection error: %s", e)
        raise DatabaseConnectionError(str(e)) from e

    users = client[settings.MONGODB_DB_NAME][settings.MONGODB_COLLECTION]
    try:
        ensure_indexes(users)
    except OperationFailure as e:
        # Existing duplicate emails or missing createIndex privileges
        client.close()
        logger.error(
            "Could not create unique index %s on %s.%s: %s",
            EMAIL_INDEX_NAME, settings.MONGODB_DB_NAME, settings.MONGODB_COLLECTION, e
        )
        raise DatabaseConnectionError(f"Unique email index could not be created: {e}") from e
    except PyMongoError as e:
        client.close()
        logger.error("MongoDB connection error: %s", e)
        raise DatabaseConnectionError(str(e)) from e

    logger.info(
        "Connected to MongoDB database=%s collection=%s",
        settings.MONGODB_DB_NAME, settings.MONGODB_COLLECTION
    )
    return users


def close_db(users: Collection) -> None:
    users.database.client.close()


def get_users(request: Request) -> Collection:
    """
    Dependency function returning the shared users collection.

    Returns:
        Collection: the collection installed on app.state at startup
    """
    return request.app.state.users
