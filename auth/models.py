"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic beyond view helpers).
Mirrors assets/models.py -- dataclasses own domain shape; stores and services
do the work.

Layer rule: no imports from api/ or assets/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered account.

    hashed_password is a bcrypt hash and must never leave the auth layer.
    Use public_view() whenever a user is handed to a caller.

    id is None before the record is written to the database.
    """

    email: str
    hashed_password: str
    name: str | None = None
    id: str | None = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""

    def public_view(self) -> UserPublic:
        return UserPublic(id=self.id, email=self.email, name=self.name, created_at=self.created_at)


@dataclass(frozen=True)
class UserPublic:
    """The shape of a user that is safe to return: no password hash."""

    id: str
    email: str
    name: str | None
    created_at: str


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token.

    issued_at and expires_at are POSIX timestamps (seconds).
    """

    subject: str  # user id
    email: str
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class AuthResult:
    """Returned by register and login: a fresh token plus the public user."""

    access_token: str
    user: UserPublic
