"""Shared application state (injected into routes)."""
from pathlib import Path
from typing import Optional

from fastapi import HTTPException, Request

from cinefam.config import SAVE_SUCCESS_CLEAR_SEC
from cinefam.core.catalog_buffer import CatalogBuffer
from cinefam.core.catalog_store import RemoteCatalogStore
from cinefam.core.editors import FilmEditor, SeriesEditor
from cinefam.core.save_coordinator import SaveCoordinator
from cinefam.core.session_flag import SessionFlagStore
from cinefam.core.session_gate import SessionGate
from cinefam.models.session import Session


class AppState:
    """Top-level container: one session, one buffer, one save coordinator."""

    def __init__(
        self,
        store: Optional[RemoteCatalogStore] = None,
        *,
        flag_path: Optional[Path] = None,
        success_clear_sec: float = SAVE_SUCCESS_CLEAR_SEC,
        **gate_options,
    ) -> None:
        self.store = store if store is not None else RemoteCatalogStore()
        self.session = Session()
        self.buffer = CatalogBuffer(self.store)
        self.saver = SaveCoordinator(self.store, success_clear_sec=success_clear_sec)
        self.gate = SessionGate(
            self.store,
            SessionFlagStore(flag_path),
            self.session,
            on_authenticated=self.buffer.load,
            **gate_options,
        )
        self.film_editor = FilmEditor()
        self.series_editor = SeriesEditor()

    @property
    def authenticated(self) -> bool:
        return self.session.authenticated

    async def save(self):
        return await self.saver.save(self.buffer.films, self.buffer.series)


def get_state(request: Request) -> AppState:
    return request.app.state.cinefam


def require_session(request: Request) -> AppState:
    """Dependency for catalog routes: 401 unless signed in."""
    state = get_state(request)
    if not state.authenticated:
        raise HTTPException(status_code=401, detail="Not signed in")
    return state
