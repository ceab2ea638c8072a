"""
assets/service.py -- Ownership-scoped CRUD over assets.

Every operation takes the owner id from the verified bearer token. The rules:

  get_one          absent or someone else's  -> NotFoundError
  update / remove  absent                    -> NotFoundError
                   someone else's            -> ForbiddenError

Reads hide existence from non-owners; writes reveal it with a 403. The two
paths disagree on purpose -- clients already depend on the 403 from PATCH and
DELETE -- so do not "fix" one side without changing the other.

No locking: a row deleted between the ownership check and the write shows up
as a False return from the store and is reported as NotFoundError.
"""

import logging
from typing import Optional

from assets.models import Asset
from assets.store import AssetStore
from core.errors import ForbiddenError, NotFoundError

logger = logging.getLogger("assetvault.assets")


class AssetService:
    def __init__(self, store: AssetStore) -> None:
        self.store = store

    def create(self, owner_id: str, name: str, number: int) -> Asset:
        asset_id = self.store.create_asset(Asset(user_id=owner_id, name=name, number=number))
        return self.store.get_asset(asset_id)

    def list_for_owner(self, owner_id: str) -> list[Asset]:
        return self.store.list_assets_for_user(owner_id)

    def get_one(self, owner_id: str, asset_id: str) -> Asset:
        asset = self.store.get_asset(asset_id)
        if asset is None or asset.user_id != owner_id:
            raise NotFoundError("Asset not found.")
        return asset

    def update(
        self,
        owner_id: str,
        asset_id: str,
        name: Optional[str] = None,
        number: Optional[int] = None,
    ) -> Asset:
        """Apply the supplied fields. None means "leave unchanged"."""
        self._require_owned(owner_id, asset_id)
        fields = {}
        if name is not None:
            fields["name"] = name
        if number is not None:
            fields["number"] = number
        if not self.store.update_asset(asset_id, **fields):
            raise NotFoundError("Asset not found.")
        return self.get_one(owner_id, asset_id)

    def remove(self, owner_id: str, asset_id: str) -> None:
        self._require_owned(owner_id, asset_id)
        if not self.store.delete_asset(asset_id):
            raise NotFoundError("Asset not found.")
        logger.info("Deleted asset %s for user %s", asset_id, owner_id)

    def _require_owned(self, owner_id: str, asset_id: str) -> Asset:
        asset = self.store.get_asset(asset_id)
        if asset is None:
            raise NotFoundError("Asset not found.")
        if asset.user_id != owner_id:
            raise ForbiddenError("You do not have access to this asset.")
        return asset
