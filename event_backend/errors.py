"""
Error taxonomy shared by the identity and catalog components.

Each error knows the HTTP status it maps to; the gateway turns any of them
into a `{"error": "<message>"}` body.
"""

from typing import Optional


class APIError(Exception):
    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationError(APIError):
    """Missing or malformed request input."""
    status_code = 400
    message = "Invalid input"


class ConflictError(APIError):
    """A user with the given email already exists."""
    status_code = 400
    message = "User already exists with this email"


class InvalidCredentials(APIError):
    """Unknown email or wrong password; both get the same message."""
    status_code = 400
    message = "Invalid email or password"


class NotFound(APIError):
    status_code = 404
    message = "Not found"


class InternalError(APIError):
    """Store or unexpected failure. Details stay in the server log."""
    status_code = 500
    message = "Internal server error"
