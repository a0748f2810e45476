"""
Event documents for the `events` collection: input parsing and response shaping.

Inputs are checked for presence and format before anything is coerced, so a
malformed price or date is rejected instead of being stored as NaN or an
invalid timestamp.
"""

import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from event_backend.errors import ValidationError

REQUIRED_FIELDS = ["title", "shortDescription", "fullDescription"]
TEXT_FIELDS = ["title", "shortDescription", "fullDescription", "category", "location", "imageUrl", "organizer"]

# Mutable fields, in the order they are written
EVENT_FIELDS = [
    "title", "shortDescription", "fullDescription",
    "price", "date",
    "category", "location", "imageUrl", "organizer",
]


def parse_dt(val: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 date or datetime string. Naive values are taken as UTC.

    Args:
        val: The raw input value.

    Returns:
        datetime: Timezone-aware datetime, or None when the input is empty.

    Raises:
        ValidationError: Non-string input or an unparseable string.
    """
    if val is None or val == "":
        return None
    if not isinstance(val, str):
        raise ValidationError("date must be an ISO-8601 string")
    try:
        # Handles 'YYYY-MM-DD', 'YYYY-MM-DDTHH:MM' and '...Z' or '...+00:00'
        if val.endswith("Z"):
            val = val[:-1] + "+00:00"
        parsed = datetime.fromisoformat(val)
    except ValueError:
        raise ValidationError("date must be an ISO-8601 string")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_price(val: Any) -> Optional[float]:
    """
    Parse a price from a number or numeric string.

    Raises:
        ValidationError: Booleans, non-numeric text, NaN or infinity.
    """
    if val is None or val == "":
        return None
    if isinstance(val, bool) or not isinstance(val, (int, float, str)):
        raise ValidationError("price must be a number")
    try:
        price = float(val)
    except (ValueError, OverflowError):
        raise ValidationError("price must be a number")
    if not math.isfinite(price):
        raise ValidationError("price must be a number")
    return price


def build_event_fields(data: Dict[str, Any], require: bool) -> Dict[str, Any]:
    """
    Validate raw input and return every mutable field, absent ones as None.

    Args:
        data: Request body.
        require: Enforce the create-time required fields.
    """
    if require and any(not data.get(f) for f in REQUIRED_FIELDS):
        raise ValidationError("All fields are required")

    for field in TEXT_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{field} must be a string")

    fields = {f: data.get(f) for f in EVENT_FIELDS}
    fields["price"] = parse_price(data.get("price"))
    fields["date"] = parse_dt(data.get("date"))
    return fields


def serialize_event(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored event into JSON-ready values (hex id, ISO timestamps)."""
    event = dict(doc)
    if "_id" in event:
        event["_id"] = str(event["_id"])
    for key in ("date", "createdAt", "updatedAt"):
        if isinstance(event.get(key), datetime):
            event[key] = event[key].isoformat()
    return event
