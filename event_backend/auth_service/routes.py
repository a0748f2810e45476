"""
Authentication service route handlers.

Provides routes for:
- User registration
- Password login (credential check only, no token is issued)
- Google sign-in upsert

Validation and persistence live in `auth_service.service.IdentityService`;
errors raised there are rendered by the gateway's error handlers.
"""

import logging
from typing import Tuple

from flask import Blueprint, Response, current_app, jsonify, request

from event_backend.auth_service.service import IdentityService
from event_backend.auth_service.utils import json_body

auth_bp = Blueprint("auth", __name__)


def get_identity() -> IdentityService:
    return current_app.extensions["identity"]


# --- REQUEST LOGGING ---
@auth_bp.before_request
def before_request() -> None:
    logging.info(f"[Auth] Incoming {request.method} {request.path}")


@auth_bp.after_request
def after_request(response: Response) -> Response:
    """
    Log the response status code for every request.

    Args:
        response (Response): The Flask response object.

    Returns:
        Response: The passed-through response object.
    """
    logging.info(f"[Auth] Response {response.status}")
    return response


# --- REGISTER ---
@auth_bp.route("/register", methods=["POST"])
def register() -> Tuple[Response, int]:
    """
    Register a new local user.

    Expects a JSON body with:
    - name (str)
    - email (str): Must not belong to an existing user.
    - password (str): Minimum 6 characters.

    Returns:
        201: JSON with message and user {id, name, email}.
        400: Missing fields, short password, or email already exists.
        500: Server-side error (hashing or database).
    """
    data = json_body()
    user = get_identity().register(data.get("name"), data.get("email"), data.get("password"))
    return jsonify({"message": "User created successfully", "user": user}), 201


# --- LOGIN ---
@auth_bp.route("/login", methods=["POST"])
def login() -> Tuple[Response, int]:
    """
    Check an email/password pair.

    Returns:
        200: JSON with message and user {id, name, email, role}.
        400: Missing credentials, or invalid credentials (same message for
             unknown email and wrong password).
        500: Database error.
    """
    data = json_body()
    user = get_identity().login(data.get("email"), data.get("password"))
    return jsonify({"message": "Login successful", "user": user}), 200


# --- GOOGLE SIGN-IN ---
@auth_bp.route("/google", methods=["POST"])
def google() -> Tuple[Response, int]:
    """
    Create or refresh the user behind a Google sign-in.

    The provider handshake happens on the client; this only persists the profile.

    Expects JSON: { "name": str, "email": str, "provider": str (optional) }

    Returns:
        200: JSON with message and user {id, name, email, role}.
        400: Name or email missing.
        500: Database error.
    """
    data = json_body()
    user, created = get_identity().upsert_third_party(
        data.get("name"), data.get("email"), data.get("provider")
    )
    message = "User created with Google OAuth" if created else "User updated with Google OAuth"
    return jsonify({"message": message, "user": user}), 200
