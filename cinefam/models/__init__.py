"""Data models for catalog records and session state."""
from cinefam.models.catalog import Film, MalformedRecord, Series
from cinefam.models.session import SaveResult, Session, SessionResult

__all__ = [
    "Film",
    "Series",
    "MalformedRecord",
    "Session",
    "SessionResult",
    "SaveResult",
]
