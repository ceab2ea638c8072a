"""
auth/tokens.py -- JWT signing/verification and password hashing.

Security design decisions:
  JWT: python-jose with HS256. Tokens are signed with the configured secret and
       carry the user id (sub), email, issued-at and expiry. Verification
       raises UnauthorizedError on any failure -- malformed, bad signature,
       expired, or missing claims all look the same to the caller.

  Passwords: bcrypt directly (no passlib wrapper). bcrypt.gensalt() gives every
       hash its own random salt, and checkpw() compares in constant time.

  Configuration is injected: TokenService receives its secret and expiry and
  PasswordHasher its cost factor from the caller (the API lifespan reads them
  from core.config once at startup). Nothing here reads global settings, so
  tests can build instances with fixed secrets and cheap bcrypt rounds.

Layer rule: no imports from api/ or assets/. Import from core/ is allowed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

from auth.models import TokenClaims
from core.errors import UnauthorizedError

logger = logging.getLogger("assetvault.auth")

_ALGORITHM = "HS256"
_REQUIRED_CLAIMS = ("sub", "email", "iat", "exp")

# ---------------------------------------------------------------------------
# Password hashing (bcrypt -- direct usage, no passlib wrapper)
# ---------------------------------------------------------------------------


class PasswordHasher:
    """One-way salted password hashing.

    rounds is bcrypt's log2 cost factor. Production uses the configured value
    (default 12); tests pass 4 to keep the suite fast.
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash(self, plain: str) -> str:
        """Return a bcrypt hash of the given plaintext password.

        bcrypt refuses input longer than 72 bytes. RegisterRequest rejects
        such passwords before they get here.
        """
        return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain: str, hashed: str) -> bool:
        """Return True if the plaintext password matches the bcrypt hash."""
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # Corrupt or non-bcrypt hash in the store
            return False


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


class TokenService:
    """Issues and verifies signed bearer tokens.

    Verification is a pure function of the token, the secret and the clock --
    there is no revocation list and no cache.
    """

    def __init__(self, secret_key: str, expire_seconds: int = 3600) -> None:
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key.")
        self._secret_key = secret_key
        self.expire_seconds = expire_seconds

    def issue(self, user_id: str, email: str) -> str:
        """Encode a signed JWT for the given identity with the configured expiry."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "email": email,
            "iat": now,
            "exp": now + timedelta(seconds=self.expire_seconds),
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        """Decode and verify a JWT. Raises UnauthorizedError on any failure.

        jose checks the signature and the exp claim. Missing claims are
        rejected here so a correctly signed token without a subject is not
        accepted as an identity.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[_ALGORITHM])
        except JWTError as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            raise UnauthorizedError("Invalid or expired token.") from exc
        if any(claim not in payload for claim in _REQUIRED_CLAIMS):
            raise UnauthorizedError("Invalid or expired token.")
        return TokenClaims(
            subject=str(payload["sub"]),
            email=str(payload["email"]),
            issued_at=int(payload["iat"]),
            expires_at=int(payload["exp"]),
        )
