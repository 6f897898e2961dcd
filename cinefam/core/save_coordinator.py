"""Flush the edit buffer to the remote store: one concurrent upsert per record."""
import asyncio
import logging
from typing import List, Optional

from cinefam.config import SAVE_SUCCESS_CLEAR_SEC
from cinefam.core.catalog_store import RemoteCatalogStore
from cinefam.models.catalog import FILMS, SERIES, Film, Series
from cinefam.models.session import SaveResult

logger = logging.getLogger(__name__)

SAVE_FAILED_MESSAGE = (
    "Failed to save changes. Some records may already have been saved. Please try again."
)
SAVE_IN_PROGRESS_MESSAGE = "A save is already in progress."


class SaveCoordinator:
    """Tracks the saving/success/error state shown next to the save button.

    Upserts are not transactional: when one fails, the others may already
    be applied remotely and stay that way. Records deleted from the buffer
    are never deleted remotely.
    """

    def __init__(
        self,
        store: RemoteCatalogStore,
        *,
        success_clear_sec: float = SAVE_SUCCESS_CLEAR_SEC,
    ) -> None:
        self._store = store
        self.success_clear_sec = success_clear_sec
        self._clear_handle: Optional[asyncio.TimerHandle] = None
        self.saving = False
        self.success = False
        self.error_message = ""

    def status(self) -> dict:
        return {"saving": self.saving, "success": self.success, "error": self.error_message}

    def _cancel_clear(self) -> None:
        if self._clear_handle is not None:
            self._clear_handle.cancel()
            self._clear_handle = None

    def _clear_success(self) -> None:
        self._clear_handle = None
        self.success = False

    async def save(self, films: List[Film], series: List[Series]) -> SaveResult:
        if self.saving:
            return SaveResult(ok=False, message=SAVE_IN_PROGRESS_MESSAGE)
        self.saving = True
        self.success = False
        self.error_message = ""
        self._cancel_clear()
        try:
            calls = [self._store.upsert(FILMS, f.to_dict()) for f in films]
            calls += [self._store.upsert(SERIES, s.to_dict()) for s in series]
            results = await asyncio.gather(*calls, return_exceptions=True)
            errors = [r for r in results if isinstance(r, BaseException)]
            if errors:
                for e in errors:
                    logger.warning("Upsert failed: %s", e)
                logger.warning("Save failed: %d of %d upserts failed", len(errors), len(results))
                self.error_message = SAVE_FAILED_MESSAGE
                return SaveResult(ok=False, message=SAVE_FAILED_MESSAGE, upserts=len(results))

            logger.info("Saved %d films and %d series", len(films), len(series))
            self.success = True
            loop = asyncio.get_running_loop()
            self._clear_handle = loop.call_later(self.success_clear_sec, self._clear_success)
            return SaveResult(ok=True, upserts=len(results))
        finally:
            self.saving = False
