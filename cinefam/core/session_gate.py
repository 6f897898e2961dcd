"""Passphrase gate: sign in against the store, persist the flag, trigger the load."""
import logging
from typing import Awaitable, Callable

from cinefam.config import ACCESS_CODE, ADMIN_EMAIL
from cinefam.core.catalog_store import CatalogStoreError, RemoteCatalogStore
from cinefam.core.session_flag import SessionFlagStore
from cinefam.models.session import Session, SessionResult

logger = logging.getLogger(__name__)

INVALID_CODE_MESSAGE = "Invalid access code. Please try again."
AUTH_FAILED_MESSAGE = "Authentication failed. Please try again."


class SessionGate:
    """Owns the Session object; the only writer of the durable flag."""

    def __init__(
        self,
        store: RemoteCatalogStore,
        flag: SessionFlagStore,
        session: Session,
        on_authenticated: Callable[[], Awaitable[object]],
        *,
        access_code: str = ACCESS_CODE,
        identity: str = ADMIN_EMAIL,
    ) -> None:
        self._store = store
        self._flag = flag
        self._on_authenticated = on_authenticated
        self._access_code = access_code
        self._identity = identity
        self.session = session

    @property
    def authenticated(self) -> bool:
        return self.session.authenticated

    async def submit_passphrase(self, code: str) -> SessionResult:
        if code != self._access_code:
            return SessionResult(ok=False, message=INVALID_CODE_MESSAGE)
        try:
            token = await self._store.authenticate(self._identity, code)
        except CatalogStoreError as e:
            logger.warning("Sign-in failed: %s", e)
            return SessionResult(ok=False, message=AUTH_FAILED_MESSAGE)

        self.session.authenticated = True
        self.session.access_token = token
        try:
            self._flag.save(self.session)
        except OSError as e:
            # Unlocked for this run only; the next start asks for the code again
            logger.warning("Could not persist session flag %s: %s", self._flag.path, e)
        logger.info("Signed in as %s", self._identity)
        await self._on_authenticated()
        return SessionResult(ok=True)

    async def restore_session(self) -> bool:
        """Trust a persisted flag from a previous run; no re-verification."""
        stored = self._flag.load()
        if not stored.authenticated:
            return False
        self.session.authenticated = True
        self.session.access_token = stored.access_token
        self._store.access_token = stored.access_token
        logger.info("Restored session from %s", self._flag.path)
        await self._on_authenticated()
        return True

    async def logout(self) -> None:
        """Sign out remotely (best effort), then drop local state and the flag."""
        try:
            await self._store.invalidate_session()
        except CatalogStoreError as e:
            logger.warning("Remote sign-out failed: %s", e)
        self.session.clear()
        self._flag.clear()
        logger.info("Signed out")
