"""Unit tests for core/config.py -- SECRET_KEY policy and value clamping."""

import pytest
from pydantic import ValidationError

from core.config import Settings

_KEY = "k" * 32


def test_debug_generates_secret_key():
    settings = Settings(debug=True, secret_key="")
    assert len(settings.secret_key) >= 32


def test_production_requires_secret_key():
    with pytest.raises(ValidationError):
        Settings(debug=False, secret_key="")


def test_short_secret_key_rejected():
    with pytest.raises(ValidationError):
        Settings(debug=True, secret_key="too-short")


def test_explicit_secret_key_kept():
    assert Settings(secret_key=_KEY).secret_key == _KEY


def test_bcrypt_rounds_clamped():
    assert Settings(secret_key=_KEY, bcrypt_rounds=1).bcrypt_rounds == 4
    assert Settings(secret_key=_KEY, bcrypt_rounds=40).bcrypt_rounds == 31


def test_token_expiry_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(secret_key=_KEY, token_expire_seconds=0)


def test_defaults():
    settings = Settings(secret_key=_KEY)
    assert settings.token_expire_seconds == 3600
    assert settings.database_url.startswith("sqlite:///")
