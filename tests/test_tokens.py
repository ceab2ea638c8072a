"""Unit tests for auth/tokens.py -- password hashing and JWT issue/verify.

Covers:
- PasswordHasher salts every hash and verifies in both directions
- PasswordHasher.verify() returns False (never raises) on a corrupt hash
- TokenService round-trips subject and email
- Expired, foreign-secret, tampered, garbage and claim-less tokens all raise
  the same UnauthorizedError
"""

import pytest
from jose import jwt

from auth.tokens import PasswordHasher, TokenService
from conftest import TEST_SECRET
from core.errors import UnauthorizedError


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(TEST_SECRET, expire_seconds=3600)


class TestPasswordHasher:
    def test_hash_is_not_plaintext_and_salted(self, hasher):
        first = hasher.hash("password123")
        second = hasher.hash("password123")
        assert first != "password123"
        assert first != second

    def test_verify_matches_only_the_original(self, hasher):
        hashed = hasher.hash("password123")
        assert hasher.verify("password123", hashed) is True
        assert hasher.verify("password124", hashed) is False

    def test_verify_corrupt_hash_returns_false(self, hasher):
        assert hasher.verify("password123", "not-a-bcrypt-hash") is False


class TestTokenService:
    def test_round_trip(self, tokens):
        claims = tokens.verify(tokens.issue("user-1", "a@x.com"))
        assert claims.subject == "user-1"
        assert claims.email == "a@x.com"
        assert claims.expires_at - claims.issued_at == 3600

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService("")

    def test_expired_token(self):
        expired = TokenService(TEST_SECRET, expire_seconds=-60).issue("user-1", "a@x.com")
        with pytest.raises(UnauthorizedError):
            TokenService(TEST_SECRET).verify(expired)

    def test_foreign_secret(self, tokens):
        other = TokenService("another-secret-key-that-is-also-32-characters").issue("user-1", "a@x.com")
        with pytest.raises(UnauthorizedError):
            tokens.verify(other)

    def test_tampered_payload(self, tokens):
        header, _payload, signature = tokens.issue("user-1", "a@x.com").split(".")
        _h, other_payload, _s = tokens.issue("user-2", "b@x.com").split(".")
        with pytest.raises(UnauthorizedError):
            tokens.verify(f"{header}.{other_payload}.{signature}")

    @pytest.mark.parametrize("garbage", ["", "invalid-token", "a.b.c"])
    def test_garbage(self, tokens, garbage):
        with pytest.raises(UnauthorizedError):
            tokens.verify(garbage)

    def test_missing_claims(self, tokens):
        # Correctly signed, but no email/iat/exp
        token = jwt.encode({"sub": "user-1"}, TEST_SECRET, algorithm="HS256")
        with pytest.raises(UnauthorizedError):
            tokens.verify(token)

    def test_failures_share_one_message(self, tokens):
        messages = set()
        for bad in ("invalid-token", TokenService(TEST_SECRET, expire_seconds=-60).issue("u", "e@x.com")):
            with pytest.raises(UnauthorizedError) as excinfo:
                tokens.verify(bad)
            messages.add(excinfo.value.message)
        assert len(messages) == 1
