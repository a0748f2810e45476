"""
Events service routes: create, read, update, delete, search and categories.
"""

import logging
from typing import Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from event_backend.auth_service.utils import json_body
from event_backend.events_service.service import CatalogService

events_bp = Blueprint("events", __name__)


def get_catalog() -> CatalogService:
    return current_app.extensions["catalog"]


@events_bp.before_request
def before_request() -> None:
    logging.info(f"[Events] Incoming {request.method} {request.path}")


@events_bp.after_request
def after_request(response: Response) -> Response:
    logging.info(f"[Events] Response {response.status}")
    return response


@events_bp.route("/events", methods=["GET"])
def list_events() -> Tuple[Response, int]:
    """
    Return all events matching the optional filters.

    Query params:
        search: case-insensitive substring of the title or descriptions.
        category: exact category; "all" disables the filter.

    Returns:
        200: List of event objects, in no guaranteed order.
        500: Database error.
    """
    events = get_catalog().list_events(
        search=request.args.get("search"),
        category=request.args.get("category"),
    )
    return jsonify(events), 200


@events_bp.route("/events/<event_id>", methods=["GET"])
def get_event(event_id: str) -> Tuple[Response, int]:
    """
    Get a single event by ID.

    Returns:
        200: Event object.
        404: Malformed id or no such event.
    """
    return jsonify(get_catalog().get_event(event_id)), 200


@events_bp.route("/events", methods=["POST"])
def create_event() -> Tuple[Response, int]:
    """
    Create an event.

    Validations:
    - title, shortDescription and fullDescription are required.
    - price must be numeric and date ISO-8601 when given.

    Returns:
        201: { "message": str, "event": {...} }
        400: Validation error.
        500: Server error.
    """
    event = get_catalog().create_event(json_body())
    return jsonify({"message": "Event created successfully", "event": event}), 201


@events_bp.route("/events/<event_id>", methods=["PUT"])
def update_event(event_id: str) -> Tuple[Response, int]:
    """
    Replace all mutable fields of an event.

    Returns:
        200: Status message.
        400: Malformed price or date.
        404: Event not found.
    """
    get_catalog().update_event(event_id, json_body())
    return jsonify({"message": "Event updated successfully"}), 200


@events_bp.route("/events/<event_id>", methods=["DELETE"])
def delete_event(event_id: str) -> Tuple[Response, int]:
    get_catalog().delete_event(event_id)
    return jsonify({"message": "Event deleted successfully"}), 200


@events_bp.route("/categories", methods=["GET"])
def list_categories() -> Tuple[Response, int]:
    """Distinct category values across all events."""
    return jsonify(get_catalog().list_categories()), 200
