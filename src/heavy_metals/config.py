"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads environment variables (after loading the project `.env`), plus
`require_firebase_url` for commands that fetch a live snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

@dataclass(frozen=True)
class Settings:
    """Container for configuration read from the environment.

    Attributes:
        firebase_db_url: Realtime database base URL (REST access).
        firebase_auth_token: Optional auth token sent as the `auth` parameter.
        heavy_metals_path: Database node holding the measurement document.
        mongo_uri: MongoDB connection URI for Gold summaries.
        mongo_db: Target MongoDB database name.
        snapshot_cache_dir: Local cache directory for downloaded snapshots.
    """
    firebase_db_url: str
    firebase_auth_token: str
    heavy_metals_path: str
    mongo_uri: str
    mongo_db: str
    snapshot_cache_dir: Path



def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object."""
    return Settings(
        firebase_db_url=os.getenv("FIREBASE_DB_URL", "").strip().rstrip("/"),
        firebase_auth_token=os.getenv("FIREBASE_AUTH_TOKEN", "").strip(),
        heavy_metals_path=os.getenv("HEAVY_METALS_PATH", "Heavy_Metals").strip("/"),
        mongo_uri=os.getenv("MONGO_URI", "mongodb://localhost:27017"),
        mongo_db=os.getenv("MONGO_DB", "heavy_metals"),
        snapshot_cache_dir=Path(os.getenv("SNAPSHOT_CACHE_DIR", "data/snapshots")),
    )


def require_firebase_url(settings: Settings) -> str:
    """Return the configured database URL.

    Raises:
        RuntimeError: if `FIREBASE_DB_URL` is not set.
    """
    if not settings.firebase_db_url:
        raise RuntimeError(
            "FIREBASE_DB_URL is required to fetch a snapshot. Set it in .env "
            "(example: 'https://your-project-default-rtdb.firebaseio.com'), "
            "or pass --file with a JSON export."
        )
    return settings.firebase_db_url
