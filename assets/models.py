"""
assets/models.py -- Domain dataclass for the asset resource.

A pure data container with zero logic. Ownership rules live in
assets/service.py; SQL lives in assets/store.py.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Asset:
    """A named, numbered record owned by exactly one user.

    user_id is the owner. It is taken from the verified bearer token, never
    from the request body.

    id is None before the record is written to the database.
    """

    user_id: str
    name: str
    number: int
    id: Optional[str] = None
    created_at: str = ""  # ISO 8601, set by store on insert
    updated_at: str = ""  # ISO 8601, bumped on every update
