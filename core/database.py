"""
core/database.py -- SQLAlchemy engine construction shared by the stores.

Both UserStore and AssetStore call make_engine() so SQLite gets the same
connection settings everywhere. Swapping SQLite for PostgreSQL is a
connection string change (DATABASE_URL), not a rewrite.

Layer rule: core/ is the kernel. No imports from api/, auth/, or assets/.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode for concurrent read safety.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool. In-memory databases ignore the request.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def make_engine(db_url: str) -> Engine:
    """Create an Engine for db_url with SQLite-specific tweaks applied."""
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        # FastAPI runs sync handlers in a threadpool, so one pooled
        # connection may be used from several threads.
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_wal_mode)
    return engine
