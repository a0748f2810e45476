"""
Identity component: registration, password login and third-party upsert.

Each operation does at most two store round-trips. The existence check
before an insert is not atomic on its own; with the unique email index from
init_db in place, the losing side of a race gets DuplicateKeyError, which is
handled below.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Tuple

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from event_backend.auth_service.models import new_user_document, public_user
from event_backend.auth_service.utils import CredentialHasher
from event_backend.database.db_connection import store_errors
from event_backend.errors import ConflictError, InvalidCredentials, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6
DEFAULT_PROVIDER = "google"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_strings(message: str, *values: Any) -> None:
    for value in values:
        if not value or not isinstance(value, str):
            raise ValidationError(message)


class IdentityService:
    def __init__(self, users: Collection, hasher: CredentialHasher) -> None:
        self.users = users
        self.hasher = hasher

    def register(self, name: Any, email: Any, password: Any) -> Dict[str, Any]:
        """
        Create a locally registered user.

        Returns:
            dict: id, name and email of the new user.

        Raises:
            ValidationError: A field is missing or the password is too short.
            ConflictError: The email is already taken.
        """
        _require_strings("All fields are required", name, email, password)
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        with store_errors("register lookup"):
            existing = self.users.find_one({"email": email})
        if existing:
            raise ConflictError()

        doc = new_user_document(name, email, utcnow(), password=self.hasher.hash(password))

        with store_errors("register insert"):
            try:
                result = self.users.insert_one(doc)
            except DuplicateKeyError:
                # Lost a race against a concurrent registration
                raise ConflictError()

        logger.info(f"[Auth] Registered user {result.inserted_id}")
        return public_user(doc, result.inserted_id, include_role=False)

    def login(self, email: Any, password: Any) -> Dict[str, Any]:
        """
        Verify an email/password pair. Issues no token.

        Raises:
            ValidationError: Email or password missing.
            InvalidCredentials: Unknown email or wrong password.
        """
        _require_strings("Email and password are required", email, password)

        with store_errors("login lookup"):
            user = self.users.find_one({"email": email})

        if not user or not self.hasher.verify(password, user.get("password")):
            raise InvalidCredentials()

        return public_user(user)

    def upsert_third_party(self, name: Any, email: Any, provider: Any = None) -> Tuple[Dict[str, Any], bool]:
        """
        Create or refresh the user behind a third-party sign-in, keyed by email.

        Returns:
            tuple: (user dict with id/name/email/role, created flag)

        Raises:
            ValidationError: Name or email missing.
        """
        _require_strings("Name and email are required", name, email)
        provider = provider or DEFAULT_PROVIDER
        if not isinstance(provider, str):
            raise ValidationError("provider must be a string")

        with store_errors("third-party lookup"):
            existing = self.users.find_one({"email": email})
        if existing:
            self._refresh_provider(existing, provider)
            return public_user(existing), False

        doc = new_user_document(name, email, utcnow(), provider=provider)
        with store_errors("third-party insert"):
            try:
                result = self.users.insert_one(doc)
            except DuplicateKeyError:
                existing = self.users.find_one({"email": email})
                if not existing:
                    raise ConflictError()
                self._refresh_provider(existing, provider)
                return public_user(existing), False

        logger.info(f"[Auth] Created user {result.inserted_id} via {provider}")
        return public_user(doc, result.inserted_id), True

    def _refresh_provider(self, user: Dict[str, Any], provider: str) -> None:
        with store_errors("third-party update"):
            self.users.update_one(
                {"_id": user["_id"]},
                {"$set": {"provider": provider, "updatedAt": utcnow()}},
            )
