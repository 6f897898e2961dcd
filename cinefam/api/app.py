"""FastAPI app, CORS, and route registration."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Configure logging in the worker process (so gate/buffer/save INFO logs are visible with uvicorn --reload)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from cinefam.api.state import AppState, get_state
from cinefam.config import ensure_data_dir

# Import routes after state to avoid circular imports
from cinefam.api.routes import catalog, session, ui

__all__ = ["app", "create_app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


def create_app(state: Optional[AppState] = None) -> FastAPI:
    """Build the app around one AppState (a fresh one unless given)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_data_dir()
        if await app.state.cinefam.gate.restore_session():
            logger.info("Editor unlocked from a previous session")
        yield

    app = FastAPI(
        title="CineFam Admin",
        description="Admin panel for the CineFam films and series catalog",
        lifespan=lifespan,
    )
    app.state.cinefam = state if state is not None else AppState()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(session.router, prefix="/api/session", tags=["session"])
    app.include_router(catalog.router, prefix="/api", tags=["catalog"])
    app.include_router(ui.router, tags=["ui"])
    return app


app = create_app()
