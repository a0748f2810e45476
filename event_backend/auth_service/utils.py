"""
Shared request and credential helpers.
Wraps argon2 behind a small hash/verify interface used by the identity component.
"""

import logging
from typing import Any, Dict, Optional

from argon2 import PasswordHasher
from argon2.exceptions import HashingError, InvalidHashError, VerificationError
from flask import request

from event_backend.errors import InternalError

logger = logging.getLogger(__name__)


class CredentialHasher:
    """
    Slow one-way password hashing.

    The default argon2 parameters (64 MiB, 3 passes) are the library's
    recommended profile; tests pass a cheaper PasswordHasher.
    """

    def __init__(self, hasher: Optional[PasswordHasher] = None) -> None:
        self._ph = hasher or PasswordHasher()

    def hash(self, plaintext: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            InternalError: If argon2 fails to produce a digest.
        """
        try:
            return self._ph.hash(plaintext)
        except HashingError as e:
            logger.error(f"[Auth] Password hashing failed: {e}")
            raise InternalError() from e

    def verify(self, plaintext: str, digest: Optional[str]) -> bool:
        """
        Check a plaintext password against a stored digest.

        Returns:
            bool: True on match. False on mismatch, a missing digest
            (third-party-only account) or a digest argon2 cannot parse.
        """
        if not digest:
            return False
        try:
            return self._ph.verify(digest, plaintext)
        except (VerificationError, InvalidHashError):
            return False


def json_body() -> Dict[str, Any]:
    """Request JSON as a dict; a missing, malformed or non-object body counts as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}
