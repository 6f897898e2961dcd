"""Session state and the results of gate and save operations."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Session:
    """Authentication state held by the app state container."""
    authenticated: bool = False
    access_token: Optional[str] = None

    def clear(self) -> None:
        self.authenticated = False
        self.access_token = None


@dataclass
class SessionResult:
    """Outcome of a passphrase submission."""
    ok: bool
    message: str = ""


@dataclass
class SaveResult:
    """Outcome of flushing the buffer to the remote store."""
    ok: bool
    message: str = ""
    upserts: int = 0
