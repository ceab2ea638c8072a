"""
auth/dependencies.py -- FastAPI Depends() helpers for bearer authentication.

Only one credential form is accepted: `Authorization: Bearer <token>`.

get_current_claims() verifies the token and returns its claims.
get_current_user() additionally loads the user so routes can rely on the
subject referring to an existing account.

Both raise UnauthorizedError; api/main.py turns it into a 401 with a
`WWW-Authenticate: Bearer` header.

Layer rule: no imports from api/ or assets/. fastapi is allowed because this
module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Depends, Request

from auth.models import TokenClaims, User
from auth.service import AuthService
from core.errors import UnauthorizedError


def _bearer_token(request: Request) -> str | None:
    """Extract the raw token from the Authorization header, or None."""
    auth_header = request.headers.get("Authorization", "")
    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_claims(request: Request) -> TokenClaims:
    """Require a valid bearer token. Raises UnauthorizedError otherwise.

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(claims: TokenClaims = Depends(get_current_claims)): ...
    """
    token = _bearer_token(request)
    if token is None:
        raise UnauthorizedError("Authentication required.")
    auth_service: AuthService = request.app.state.auth_service
    return auth_service.verify_token(token)


def get_current_user(request: Request, claims: TokenClaims = Depends(get_current_claims)) -> User:
    """Require a valid bearer token whose subject is a stored user."""
    auth_service: AuthService = request.app.state.auth_service
    return auth_service.get_profile(claims.subject)
