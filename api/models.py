"""
API request and response models for AssetVault REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
assets/models.py, which own the internal domain representation. Route
handlers map between the two with the from_* factory methods below.

User and asset payloads use camelCase on the wire (userId, createdAt,
updatedAt) while Python code keeps snake_case; the alias generator does the
translation. access_token stays snake_case.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from pydantic.alias_generators import to_camel

from assets.models import Asset
from auth.models import User, UserPublic

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Deliberately loose: one "@", no whitespace, a dot in the domain part.
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# bcrypt ignores (or, in newer releases, refuses) anything past 72 bytes.
MAX_PASSWORD_BYTES = 72

# SQLite INTEGER is a signed 64-bit value.
AssetNumber = Annotated[StrictInt, Field(ge=-(2**63), le=2**63 - 1)]

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# ---------------------------------------------------------------------------
# Auth -- request models
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register. Unknown fields are ignored."""

    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=6)
    name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes when UTF-8 encoded")
        return value


class LoginRequest(BaseModel):
    """Request body for POST /auth/login.

    Both fields default to "" and carry no format rules: a missing or
    malformed credential is an authentication failure (401), not a
    validation failure (400). Non-string values are treated as empty.
    """

    email: str = ""
    password: str = ""

    @field_validator("email", "password", mode="before")
    @classmethod
    def non_string_as_empty(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""


# ---------------------------------------------------------------------------
# Auth -- response models
# ---------------------------------------------------------------------------


class UserResponse(BaseModel):
    """Public view of a user. Never contains the password hash."""

    model_config = _CAMEL

    id: str
    email: str
    name: Optional[str] = None
    created_at: str

    @classmethod
    def from_public(cls, user: UserPublic) -> "UserResponse":
        return cls(id=user.id, email=user.email, name=user.name, created_at=user.created_at)


class UserProfileResponse(UserResponse):
    """Response for GET /users/profile -- the public view plus updatedAt."""

    updated_at: str

    @classmethod
    def from_user(cls, user: User) -> "UserProfileResponse":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class AuthResponse(BaseModel):
    """Response for POST /auth/register and POST /auth/login."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    user: UserResponse


# ---------------------------------------------------------------------------
# Assets
# ---------------------------------------------------------------------------


class AssetCreate(BaseModel):
    """Request body for POST /assets."""

    name: str = Field(min_length=1, max_length=255)
    number: AssetNumber


class AssetPatch(BaseModel):
    """Request body for PATCH /assets/{asset_id}.

    Omitted fields are left unchanged. An explicit null is rejected: both
    columns are NOT NULL, so null can only be a client mistake.
    """

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    number: Optional[AssetNumber] = None

    @field_validator("name", "number", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Only runs for values the client actually sent
        if value is None:
            raise ValueError("may not be null")
        return value


class AssetResponse(BaseModel):
    model_config = _CAMEL

    id: str
    user_id: str
    name: str
    number: int
    created_at: str
    updated_at: str

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetResponse":
        """Build an AssetResponse from a domain Asset."""
        return cls(
            id=asset.id,
            user_id=asset.user_id,
            name=asset.name,
            number=asset.number,
            created_at=asset.created_at,
            updated_at=asset.updated_at,
        )


class DeleteResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True


# ---------------------------------------------------------------------------
# Errors and service status
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable error payload."""

    model_config = ConfigDict(frozen=True)

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Top-level error envelope returned on 4xx/5xx responses."""

    model_config = ConfigDict(frozen=True)

    error: ErrorDetail


class StatusResponse(BaseModel):
    """Response for GET /."""

    model_config = ConfigDict(frozen=True)

    message: str
    timestamp: str


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "OK"
    timestamp: str
