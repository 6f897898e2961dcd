"""Persist and load the durable "authenticated" flag (JSON)."""
import json
import logging
from pathlib import Path
from typing import Optional

from cinefam.config import SESSION_FLAG_PATH
from cinefam.models.session import Session

logger = logging.getLogger(__name__)


class SessionFlagStore:
    """One small JSON file that survives restarts."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = Path(path) if path is not None else SESSION_FLAG_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Session:
        """Return the persisted session, or an unauthenticated one."""
        p = self._path
        if not p.exists():
            return Session()
        try:
            data = json.loads(p.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable session flag %s: %s", p, e)
            return Session()
        if not isinstance(data, dict) or data.get("authenticated") is not True:
            return Session()
        token = data.get("access_token")
        return Session(authenticated=True, access_token=token if isinstance(token, str) else None)

    def save(self, session: Session) -> None:
        p = self._path
        p.parent.mkdir(parents=True, exist_ok=True)
        data = {"authenticated": session.authenticated, "access_token": session.access_token}
        p.write_text(json.dumps(data, indent=2))

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
