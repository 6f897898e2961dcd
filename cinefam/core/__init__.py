"""Core services: remote store, session gate, edit buffer, save, editors."""
from cinefam.core.catalog_buffer import CatalogBuffer
from cinefam.core.catalog_store import CatalogStoreError, RemoteCatalogStore
from cinefam.core.save_coordinator import SaveCoordinator
from cinefam.core.session_gate import SessionGate

__all__ = [
    "CatalogBuffer",
    "CatalogStoreError",
    "RemoteCatalogStore",
    "SaveCoordinator",
    "SessionGate",
]
