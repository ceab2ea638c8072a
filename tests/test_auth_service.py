"""Unit tests for auth/service.py and auth/store.py.

Covers:
- register() persists a hashed password and returns a usable token
- register() raises ConflictError for a repeated email, including the
  race where the up-front lookup misses and the unique index fires
- validate_credentials() returns None (never raises) on any mismatch
- login() raises UnauthorizedError for unknown email and wrong password
- get_profile() rejects tokens whose user no longer exists
"""

from dataclasses import asdict
from unittest.mock import patch

import pytest

from auth.models import User
from conftest import TEST_PASSWORD
from core.errors import ConflictError, UnauthorizedError


class TestRegister:
    def test_register_returns_token_and_public_user(self, services):
        result = services.auth.register("a@x.com", TEST_PASSWORD, "Alice")

        assert result.user.email == "a@x.com"
        assert result.user.name == "Alice"
        assert result.user.created_at
        assert "hashed_password" not in asdict(result.user)

        claims = services.auth.verify_token(result.access_token)
        assert claims.subject == result.user.id
        assert claims.email == "a@x.com"

    def test_password_is_stored_hashed(self, services):
        services.auth.register("a@x.com", TEST_PASSWORD)
        stored = services.user_store.get_by_email("a@x.com")
        assert stored.hashed_password != TEST_PASSWORD
        assert services.auth.hasher.verify(TEST_PASSWORD, stored.hashed_password)

    def test_name_is_optional(self, services):
        result = services.auth.register("a@x.com", TEST_PASSWORD)
        assert result.user.name is None

    def test_duplicate_email_conflicts(self, services):
        services.auth.register("a@x.com", TEST_PASSWORD)
        with pytest.raises(ConflictError):
            services.auth.register("a@x.com", "different-password")

    def test_duplicate_email_conflicts_when_lookup_races(self, services):
        services.auth.register("a@x.com", TEST_PASSWORD)
        # Simulate a concurrent insert landing between lookup and insert
        with patch.object(services.user_store, "get_by_email", return_value=None):
            with pytest.raises(ConflictError):
                services.auth.register("a@x.com", TEST_PASSWORD)

    def test_email_match_is_exact(self, services):
        services.auth.register("a@x.com", TEST_PASSWORD)
        assert services.user_store.get_by_email("A@X.COM") is None


class TestCredentials:
    def test_validate_credentials_match(self, services):
        registered = services.auth.register("a@x.com", TEST_PASSWORD, "Alice")
        user = services.auth.validate_credentials("a@x.com", TEST_PASSWORD)
        assert user == registered.user

    def test_validate_credentials_wrong_password(self, services):
        services.auth.register("a@x.com", TEST_PASSWORD)
        assert services.auth.validate_credentials("a@x.com", "wrongpassword") is None

    def test_validate_credentials_unknown_email_still_hashes(self, services):
        with patch.object(services.auth.hasher, "verify", wraps=services.auth.hasher.verify) as spy:
            assert services.auth.validate_credentials("nobody@x.com", TEST_PASSWORD) is None
        spy.assert_called_once()

    def test_login_success(self, services):
        registered = services.auth.register("a@x.com", TEST_PASSWORD)
        result = services.auth.login("a@x.com", TEST_PASSWORD)
        assert result.user.id == registered.user.id
        assert services.auth.verify_token(result.access_token).subject == registered.user.id

    @pytest.mark.parametrize(
        "email,password",
        [("a@x.com", "wrongpassword"), ("nobody@x.com", TEST_PASSWORD), ("", "")],
    )
    def test_login_failures(self, services, email, password):
        services.auth.register("a@x.com", TEST_PASSWORD)
        with pytest.raises(UnauthorizedError):
            services.auth.login(email, password)


class TestProfile:
    def test_get_profile(self, services):
        registered = services.auth.register("a@x.com", TEST_PASSWORD, "Alice")
        user = services.auth.get_profile(registered.user.id)
        assert isinstance(user, User)
        assert user.email == "a@x.com"
        assert user.updated_at

    def test_get_profile_unknown_user(self, services):
        with pytest.raises(UnauthorizedError):
            services.auth.get_profile("does-not-exist")
