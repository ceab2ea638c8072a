"""
api/routes/users.py -- User account endpoints.

Routes:
  GET /users/profile -- full profile of the current user, including updatedAt
"""

from fastapi import APIRouter, Depends

from api.models import UserProfileResponse
from auth.dependencies import get_current_user
from auth.models import User

router = APIRouter()


@router.get("/users/profile", response_model=UserProfileResponse)
def user_profile(current_user: User = Depends(get_current_user)) -> UserProfileResponse:
    return UserProfileResponse.from_user(current_user)
