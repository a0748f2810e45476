"""
User documents for the `users` collection.

Stored shape:
    _id         ObjectId, assigned by the store
    name, email str
    password    argon2 digest, only for locally registered users
    role        "user" unless changed outside this service
    provider    set after a third-party sign-in
    createdAt   set once
    updatedAt   refreshed on every mutation
"""

from datetime import datetime
from typing import Any, Dict, Optional

DEFAULT_ROLE = "user"


def new_user_document(
    name: str,
    email: str,
    now: datetime,
    password: Optional[str] = None,
    provider: Optional[str] = None,
) -> Dict[str, Any]:
    doc: Dict[str, Any] = {"name": name, "email": email}
    if password is not None:
        doc["password"] = password
    if provider is not None:
        doc["provider"] = provider
    doc["role"] = DEFAULT_ROLE
    doc["createdAt"] = now
    doc["updatedAt"] = now
    return doc


def public_user(doc: Dict[str, Any], user_id: Any = None, include_role: bool = True) -> Dict[str, Any]:
    """Response view of a user. Never includes the password digest."""
    user = {
        "id": str(user_id if user_id is not None else doc["_id"]),
        "name": doc.get("name"),
        "email": doc.get("email"),
    }
    if include_role:
        user["role"] = doc.get("role", DEFAULT_ROLE)
    return user
