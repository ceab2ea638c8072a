"""
api/routes/assets.py -- Ownership-scoped asset routes.

Routes:
  POST   /assets              -- create asset owned by the caller
  GET    /assets              -- list the caller's assets, newest first
  GET    /assets/{asset_id}   -- one asset (404 if absent or not the caller's)
  PATCH  /assets/{asset_id}   -- partial update (404 absent, 403 not the caller's)
  DELETE /assets/{asset_id}   -- delete (404 absent, 403 not the caller's)

The owner id always comes from the bearer token via get_current_user(). A
userId in a request body is ignored by the request models.
"""

from fastapi import APIRouter, Depends, Request

from api.models import AssetCreate, AssetPatch, AssetResponse, DeleteResponse
from assets.service import AssetService
from auth.dependencies import get_current_user
from auth.models import User

# All asset routes require authentication.
router = APIRouter(dependencies=[Depends(get_current_user)])


def _service(request: Request) -> AssetService:
    return request.app.state.asset_service


@router.post("/assets", response_model=AssetResponse, status_code=201)
def create_asset(
    request: Request,
    body: AssetCreate,
    current_user: User = Depends(get_current_user),
) -> AssetResponse:
    asset = _service(request).create(current_user.id, body.name, body.number)
    return AssetResponse.from_asset(asset)


@router.get("/assets", response_model=list[AssetResponse])
def list_assets(request: Request, current_user: User = Depends(get_current_user)) -> list[AssetResponse]:
    """Return every asset owned by the caller, newest first."""
    return [AssetResponse.from_asset(a) for a in _service(request).list_for_owner(current_user.id)]


@router.get("/assets/{asset_id}", response_model=AssetResponse)
def get_asset(
    request: Request,
    asset_id: str,
    current_user: User = Depends(get_current_user),
) -> AssetResponse:
    return AssetResponse.from_asset(_service(request).get_one(current_user.id, asset_id))


@router.patch("/assets/{asset_id}", response_model=AssetResponse)
def update_asset(
    request: Request,
    asset_id: str,
    body: AssetPatch,
    current_user: User = Depends(get_current_user),
) -> AssetResponse:
    """Apply only the fields present in the body."""
    fields = body.model_dump(exclude_unset=True)
    asset = _service(request).update(current_user.id, asset_id, **fields)
    return AssetResponse.from_asset(asset)


@router.delete("/assets/{asset_id}", response_model=DeleteResponse)
def delete_asset(
    request: Request,
    asset_id: str,
    current_user: User = Depends(get_current_user),
) -> DeleteResponse:
    _service(request).remove(current_user.id, asset_id)
    return DeleteResponse(success=True)
