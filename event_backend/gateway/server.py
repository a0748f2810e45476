"""
API gateway: combines the auth and events blueprints.
This is the process entrypoint.
"""

import logging
import sys
from typing import Any, Optional

from flask import Flask, Response, jsonify
from flask_cors import CORS
from pymongo.errors import PyMongoError
from werkzeug.exceptions import HTTPException

from event_backend import config
from event_backend.auth_service.routes import auth_bp
from event_backend.auth_service.service import IdentityService
from event_backend.auth_service.utils import CredentialHasher
from event_backend.database.db_connection import get_db
from event_backend.database.init_db import ensure_indexes
from event_backend.errors import APIError, InternalError
from event_backend.events_service.routes import events_bp
from event_backend.events_service.service import CatalogService

# Basic console logging during API requests
logging.basicConfig(level=config.LOG_LEVEL, format="[%(levelname)s] %(asctime)s - %(message)s")


def register_error_handlers(app: Flask) -> None:
    """Render every failure as {"error": "<message>"} without internal details."""

    @app.errorhandler(APIError)
    def handle_api_error(error: APIError):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logging.exception(f"Unhandled error: {error}")
        return jsonify(InternalError().to_dict()), InternalError.status_code


def create_app(db: Any = None, hasher: Optional[CredentialHasher] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        db: Database handle supporting db["users"] and db["events"].
            Defaults to the configured MongoDB database.
        hasher: Credential hasher for the identity component.

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    wildcard = config.CORS_ORIGINS == ["*"]
    CORS(app, send_wildcard=wildcard, resources={
        r"/*": {
            "origins": "*" if wildcard else config.CORS_ORIGINS,
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type"],
        }
    })

    if db is None:
        db = get_db()

    # --- COMPONENTS ---
    app.extensions["identity"] = IdentityService(db["users"], hasher or CredentialHasher())
    app.extensions["catalog"] = CatalogService(db["events"])

    # --- REGISTER BLUEPRINTS ---
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(events_bp, url_prefix="/api")
    register_error_handlers(app)

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return Response("Event Management Server is running!", mimetype="text/plain")

    @app.route("/health")
    def health():
        return jsonify({"status": "ok"}), 200

    return app


def main() -> None:
    db = get_db()
    try:
        ensure_indexes(db)
    except PyMongoError as e:
        logging.error(f"MongoDB connection error: {e}")
        sys.exit(1)

    app = create_app(db)
    logging.info(f"Server is running on port: {config.PORT}")
    app.run(host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    main()
