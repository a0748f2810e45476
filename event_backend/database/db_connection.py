"""
MongoDB connection helper.
Provides get_db() for the gateway and store_errors() for the components.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from event_backend import config
from event_backend.errors import InternalError

logger = logging.getLogger(__name__)


def get_client() -> MongoClient:
    """
    Build a MongoClient from the configured connection string.

    The client connects lazily and keeps its own connection pool, so one
    instance is shared by every request the process serves.
    """
    return MongoClient(
        config.MONGO_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=config.MONGO_TIMEOUT_MS,
    )


def get_db(client: MongoClient = None) -> Database:
    """
    Return the configured database.

    Usage:
        db = get_db()
        users = db["users"]

    Args:
        client (MongoClient, optional): Reuse an existing client.

    Returns:
        pymongo.database.Database: Handle for the `MONGO_DB` database.
    """
    if client is None:
        client = get_client()
    return client[config.MONGO_DB]


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """
    Map driver failures inside the block to InternalError.

    DuplicateKeyError is re-raised untouched so callers can treat a unique
    index violation as a conflict.

    Usage:
        with store_errors("find user"):
            user = users.find_one({"email": email})
    """
    try:
        yield
    except DuplicateKeyError:
        raise
    except PyMongoError as e:
        logger.error(f"[Store] {action} failed: {e}")
        raise InternalError() from e
