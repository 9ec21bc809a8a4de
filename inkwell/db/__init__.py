"""Relational database engine and session helpers."""

from inkwell.db.database import (
    SessionMaker,
    close_db,
    create_engine,
    create_session_maker,
    init_db,
    transaction,
)

__all__ = [
    "SessionMaker",
    "close_db",
    "create_engine",
    "create_session_maker",
    "init_db",
    "transaction",
]
