"""Configuration: env, remote store connection, access code, data paths."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of cinefam package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so CINEFAM_SUPABASE_URL etc. are set
load_dotenv(BASE_DIR / ".env")

DATA_DIR = Path(os.getenv("CINEFAM_DATA_DIR", str(BASE_DIR / "data")))
SESSION_FLAG_PATH = DATA_DIR / "session.json"

# API
API_HOST = os.getenv("CINEFAM_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("CINEFAM_API_PORT", "8000"))

# Remote catalog store (Supabase project). The VITE_* names match the old web build's .env.
SUPABASE_URL = os.getenv("CINEFAM_SUPABASE_URL") or os.getenv("VITE_SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("CINEFAM_SUPABASE_ANON_KEY") or os.getenv("VITE_SUPABASE_ANON_KEY", "")
HTTP_TIMEOUT_SEC = float(os.getenv("CINEFAM_HTTP_TIMEOUT_SEC", "10.0"))

# Session gate: one shared passphrase, checked against a fixed admin identity
ACCESS_CODE = os.getenv("CINEFAM_ACCESS_CODE", "OwnedByCineFam")
ADMIN_EMAIL = os.getenv("CINEFAM_ADMIN_EMAIL", "admin@cinefam.com")

# Seconds the "Saved Successfully!" indicator stays up
SAVE_SUCCESS_CLEAR_SEC = float(os.getenv("CINEFAM_SAVE_SUCCESS_CLEAR_SEC", "3.0"))


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
