"""
api/routes/auth.py -- Registration, login and profile endpoints.

Routes:
  POST /auth/register   -- create account; returns token + user (201)
  POST /auth/login      -- password login; returns token + user (201)
  GET  /auth/profile    -- current user (requires bearer token)

Route handlers are thin: AuthService raises ConflictError / UnauthorizedError
and the handler in api/main.py turns them into the error envelope.

Security:
  validate_credentials() does timing equalization -- never inline
  get_by_email() + verify() here.
  Cache-Control: no-store on every response that carries a token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response

from api.models import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from auth.dependencies import get_current_user
from auth.models import AuthResult, User
from auth.service import AuthService

# Auth policy:
# - POST /auth/register: public
# - POST /auth/login:    public
# - GET  /auth/profile:  requires bearer token (get_current_user)
router = APIRouter()


@router.post("/auth/register", response_model=AuthResponse, status_code=201)
def register(request: Request, response: Response, body: RegisterRequest) -> AuthResponse:
    """Create a new account and sign it in. 409 if the email is taken."""
    auth_service: AuthService = request.app.state.auth_service
    result = auth_service.register(body.email, body.password, body.name)
    response.headers["Cache-Control"] = "no-store"
    return _to_response(result)


@router.post("/auth/login", response_model=AuthResponse, status_code=201)
def login(request: Request, response: Response, body: LoginRequest | None = None) -> AuthResponse:
    """Exchange email and password for a bearer token.

    Unknown email and wrong password return the same 401 so the response
    does not reveal which emails are registered. An empty body is the same
    as empty credentials.
    """
    auth_service: AuthService = request.app.state.auth_service
    body = body or LoginRequest()
    result = auth_service.login(body.email, body.password)
    response.headers["Cache-Control"] = "no-store"
    return _to_response(result)


@router.get("/auth/profile", response_model=UserResponse)
def profile(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the identity behind the presented bearer token."""
    return UserResponse.from_public(current_user.public_view())


def _to_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(access_token=result.access_token, user=UserResponse.from_public(result.user))
