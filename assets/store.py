"""
assets/store.py -- SQLAlchemy-backed persistence layer for assets.

Uses SQLAlchemy Core (not ORM) so the dataclass in assets/models.py remains
the authoritative domain representation.

Pattern: Repository + Data Mapper. AssetStore is the repository; _row_to_asset
is the mapper. The store knows nothing about ownership rules -- get_asset()
returns any asset by id and AssetService decides who may see it.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = AssetStore("sqlite:///:memory:")
    asset_id = store.create_asset(Asset(user_id=uid, name="Box", number=5))
    assets = store.list_assets_for_user(uid)
    store.update_asset(asset_id, number=9)
    store.delete_asset(asset_id)
    store.close()
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, Index, Integer, MetaData, String, Table
from sqlalchemy.engine import Engine

from assets.models import Asset
from core.database import make_engine

# Columns a caller may change through update_asset(). Anything else is
# rejected before it reaches SQL.
_MUTABLE_FIELDS = frozenset({"name", "number"})

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_assets = Table(
    "assets",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("user_id", String(36), nullable=False),
    Column("name", String(255), nullable=False),
    Column("number", Integer, nullable=False),
    Column("created_at", String(32), nullable=False),
    Column("updated_at", String(32), nullable=False),
    Index("ix_assets_user_created", "user_id", "created_at"),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class AssetStore:
    def __init__(self, db_url: str) -> None:
        self.engine: Engine = make_engine(db_url)
        metadata.create_all(self.engine)

    def create_asset(self, asset: Asset) -> str:
        """Insert a new asset and return its generated id."""
        asset_id = uuid.uuid4().hex
        now = _now_iso()
        with self.engine.connect() as conn:
            conn.execute(
                _assets.insert().values(
                    id=asset_id,
                    user_id=asset.user_id,
                    name=asset.name,
                    number=asset.number,
                    created_at=now,
                    updated_at=now,
                )
            )
            conn.commit()
        return asset_id

    def get_asset(self, asset_id: str) -> Optional[Asset]:
        """Return the asset with this id regardless of owner, or None."""
        with self.engine.connect() as conn:
            row = conn.execute(_assets.select().where(_assets.c.id == asset_id)).fetchone()
        return _row_to_asset(row) if row is not None else None

    def list_assets_for_user(self, user_id: str) -> list[Asset]:
        """Return all assets owned by user_id, newest first."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                _assets.select().where(_assets.c.user_id == user_id).order_by(_assets.c.created_at.desc())
            ).fetchall()
        return [_row_to_asset(r) for r in rows]

    def update_asset(self, asset_id: str, **fields) -> bool:
        """Update name and/or number and bump updated_at.

        Unknown field names raise ValueError rather than being silently
        ignored. Returns True if a row was updated, False if asset_id was
        not found.
        """
        unknown = set(fields) - _MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown asset fields: {sorted(unknown)!r}")
        with self.engine.connect() as conn:
            result = conn.execute(
                _assets.update().where(_assets.c.id == asset_id).values(updated_at=_now_iso(), **fields)
            )
            conn.commit()
        return result.rowcount > 0

    def delete_asset(self, asset_id: str) -> bool:
        """Delete an asset. Returns True if deleted, False if not found."""
        with self.engine.connect() as conn:
            result = conn.execute(_assets.delete().where(_assets.c.id == asset_id))
            conn.commit()
        return result.rowcount > 0

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mapper (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_asset(row) -> Asset:
    return Asset(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        number=row.number,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )
