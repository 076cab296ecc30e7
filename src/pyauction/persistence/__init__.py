"""Persistence layer for saved auction sessions."""

from .snapshot import (
    PersistenceLoadFailure,
    RestoredState,
    SessionSnapshot,
    decode_session,
    encode_session,
)
from .store import MemorySessionStore, SessionStore, SqliteSessionStore

__all__ = [
    "MemorySessionStore",
    "PersistenceLoadFailure",
    "RestoredState",
    "SessionSnapshot",
    "SessionStore",
    "SqliteSessionStore",
    "decode_session",
    "encode_session",
]
