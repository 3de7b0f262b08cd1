"""Session recording and persistence."""

from .recorder import SessionRecorder, SessionStateError
from .store import (
    InMemorySessionStore,
    JsonlSessionStore,
    SessionStore,
    build_saved_record,
    save_session,
)

__all__ = [
    "InMemorySessionStore",
    "JsonlSessionStore",
    "SessionRecorder",
    "SessionStateError",
    "SessionStore",
    "build_saved_record",
    "save_session",
]
