"""
Create the indexes the service relies on.

Run once per environment (it is also called when the gateway starts as a script):
    python -m event_backend.database.init_db

The unique index on users.email turns the register/sign-in existence check
into a real guarantee: a concurrent duplicate insert fails with
DuplicateKeyError instead of creating a second account.
"""

import logging
import sys

from pymongo import ASCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError

from event_backend.database.db_connection import get_db

logger = logging.getLogger(__name__)


def ensure_indexes(db: Database) -> None:
    """
    Create (or confirm) the users and events indexes. Idempotent.

    Raises:
        pymongo.errors.PyMongoError: If the store rejects the request, e.g.
            existing duplicate emails block the unique index.
    """
    db["users"].create_index([("email", ASCENDING)], unique=True, name="email_unique")
    db["events"].create_index([("category", ASCENDING)], name="category")
    logger.info("Indexes ensured on users.email (unique) and events.category")


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(asctime)s - %(message)s")
    try:
        ensure_indexes(get_db())
    except PyMongoError as e:
        logger.error(f"Could not create indexes: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
