"""
Catalog component: create, read, update, delete and search events.

No ordering is guaranteed for list results; callers must not depend on the
store's natural order.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo.collection import Collection

from event_backend import config
from event_backend.database.db_connection import store_errors
from event_backend.errors import NotFound
from event_backend.events_service.models import build_event_fields, serialize_event

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"
SEARCH_FIELDS = ["title", "description"]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_object_id(event_id: Any) -> ObjectId:
    """
    Raises:
        NotFound: The id is not a valid ObjectId, so no event can match it.
    """
    if not isinstance(event_id, str) or not ObjectId.is_valid(event_id):
        raise NotFound("Event not found")
    return ObjectId(event_id)


def build_query(search: Optional[str] = None, category: Optional[str] = None) -> Dict[str, Any]:
    """
    Filter for ListEvents.

    `search` is a literal, case-insensitive substring of `title` or `description`;
    `category` is an exact match unless it is the "all" sentinel.
    """
    query: Dict[str, Any] = {}
    if search:
        pattern = re.escape(search)
        query["$or"] = [{f: {"$regex": pattern, "$options": "i"}} for f in SEARCH_FIELDS]
    if category and category != ALL_CATEGORIES:
        query["category"] = category
    return query


class CatalogService:
    def __init__(self, events: Collection, default_image_url: Optional[str] = None) -> None:
        self.events = events
        self.default_image_url = default_image_url or config.DEFAULT_IMAGE_URL

    def list_events(self, search: Optional[str] = None, category: Optional[str] = None) -> List[Dict[str, Any]]:
        query = build_query(search, category)
        with store_errors("list events"):
            docs = list(self.events.find(query))
        return [serialize_event(d) for d in docs]

    def get_event(self, event_id: Any) -> Dict[str, Any]:
        oid = to_object_id(event_id)
        with store_errors("get event"):
            doc = self.events.find_one({"_id": oid})
        if not doc:
            raise NotFound("Event not found")
        return serialize_event(doc)

    def create_event(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate and insert a new event.

        Returns:
            dict: The stored event including its new `_id`.

        Raises:
            ValidationError: Missing title/descriptions, or malformed price/date.
        """
        doc = build_event_fields(data, require=True)
        if not doc["imageUrl"]:
            doc["imageUrl"] = self.default_image_url
        now = utcnow()
        doc["createdAt"] = now
        doc["updatedAt"] = now

        with store_errors("create event"):
            result = self.events.insert_one(doc)

        logger.info(f"[Events] Created event {result.inserted_id}")
        return serialize_event(dict(doc, _id=result.inserted_id))

    def update_event(self, event_id: Any, data: Dict[str, Any]) -> None:
        """
        Replace every mutable field of an event. Absent fields become null;
        createdAt is left alone.

        Raises:
            ValidationError: Malformed price/date.
            NotFound: No event has this id.
        """
        oid = to_object_id(event_id)
        fields = build_event_fields(data, require=False)
        fields["updatedAt"] = utcnow()

        with store_errors("update event"):
            result = self.events.update_one({"_id": oid}, {"$set": fields})
        if result.matched_count == 0:
            raise NotFound("Event not found")

    def delete_event(self, event_id: Any) -> None:
        oid = to_object_id(event_id)
        with store_errors("delete event"):
            result = self.events.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFound("Event not found")
        logger.info(f"[Events] Deleted event {event_id}")

    def list_categories(self) -> List[Any]:
        """Distinct category values. No ordering guarantee."""
        with store_errors("list categories"):
            return list(self.events.distinct("category"))
