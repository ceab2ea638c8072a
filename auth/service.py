"""
auth/service.py -- Registration, login and token orchestration.

AuthService is the only place that combines the credential store, the
password hasher and the token service. All three are constructor-injected so
tests can pass in-memory stores and cheap hashers.

Failure policy:
  register            -> ConflictError on duplicate email
  validate_credentials -> None on any mismatch, never raises
  login               -> UnauthorizedError when validate_credentials is None
  verify_token        -> UnauthorizedError on any token problem

Timing equalization: validate_credentials always runs bcrypt, against a dummy
hash when the email is unknown, so response time does not reveal which
emails are registered.

Layer rule: no imports from api/ or assets/.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from auth.models import AuthResult, TokenClaims, User, UserPublic
from auth.store import UserStore
from auth.tokens import PasswordHasher, TokenService
from core.errors import ConflictError, UnauthorizedError

logger = logging.getLogger("assetvault.auth")


class AuthService:
    def __init__(self, store: UserStore, hasher: PasswordHasher, tokens: TokenService) -> None:
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        # Computed once so the first failed login is not measurably slower
        # than later ones.
        self._dummy_hash = hasher.hash("assetvault_timing_dummy")

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def register(self, email: str, password: str, name: str | None = None) -> AuthResult:
        """Create an account and return a token for it.

        The up-front lookup gives the common duplicate case a clean error;
        the unique index catches the concurrent case the lookup cannot.
        """
        if self.store.get_by_email(email) is not None:
            raise ConflictError("A user with that email already exists.")

        user = User(email=email, hashed_password=self.hasher.hash(password), name=name)
        try:
            user_id = self.store.create_user(user)
        except IntegrityError as exc:
            raise ConflictError("A user with that email already exists.") from exc

        created = self.store.get_by_id(user_id)
        logger.info("Registered user %s", user_id)
        return AuthResult(access_token=self.issue_token(created.id, created.email), user=created.public_view())

    def validate_credentials(self, email: str, password: str) -> UserPublic | None:
        """Return the public view of the user if email and password match, else None."""
        user = self.store.get_by_email(email)
        if user is None:
            # Equalize timing -- do NOT return before running bcrypt
            self.hasher.verify(password, self._dummy_hash)
            return None
        if not self.hasher.verify(password, user.hashed_password):
            return None
        return user.public_view()

    def login(self, email: str, password: str) -> AuthResult:
        user = self.validate_credentials(email, password)
        if user is None:
            logger.info("Failed login attempt")
            raise UnauthorizedError("Invalid email or password.")
        return AuthResult(access_token=self.issue_token(user.id, user.email), user=user)

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def issue_token(self, user_id: str, email: str) -> str:
        return self.tokens.issue(user_id, email)

    def verify_token(self, token: str) -> TokenClaims:
        return self.tokens.verify(token)

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def get_profile(self, user_id: str) -> User:
        """Load the user behind a verified token subject.

        A validly signed token whose user no longer exists is not a usable
        credential, so this raises UnauthorizedError rather than NotFoundError.
        """
        user = self.store.get_by_id(user_id)
        if user is None:
            raise UnauthorizedError("Invalid or expired token.")
        return user
