"""Entry: serve the CineFam admin panel (JSON API + browser UI) with uvicorn.

Connection settings come from .env (see cinefam.config); the durable session
flag lives under CINEFAM_DATA_DIR.
"""
import logging
import uvicorn

from cinefam.config import API_HOST, API_PORT

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    # The app module builds its own AppState; reload keeps edits to the UI quick to try
    uvicorn.run(
        "cinefam.api.app:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
    )
