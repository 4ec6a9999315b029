"""Load a measurement document snapshot.

A snapshot is the full `Heavy_Metals` node, either fetched once over the
realtime database REST API (``<db-url>/<path>.json``) or read from a JSON
export on disk. Fetched snapshots are cached locally.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

from heavy_metals.aggregate.yearly import InvalidInput
from heavy_metals.config import Settings, require_firebase_url

log = logging.getLogger(__name__)


def heavy_metals_url(base_url: str, path: str) -> str:
    """Return the REST URL of a database node.

    Args:
        base_url: Database URL, e.g. 'https://x-default-rtdb.firebaseio.com'.
        path: Node path, e.g. 'Heavy_Metals'.

    Returns:
        Fully-qualified URL string ending in `.json`.
    """
    return f"{base_url.rstrip('/')}/{path.strip('/')}.json"


def _cache_path(cache_dir: Path, path: str) -> Path:
    return cache_dir / f"{path.strip('/').replace('/', '_')}.json"


def _as_document(payload: Any, source: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise InvalidInput(
            f"snapshot from {source} is not a JSON object (got {type(payload).__name__})"
        )
    return payload


def _reject_constant(token: str) -> Any:
    raise InvalidInput(f"non-standard JSON constant {token!r} in snapshot")


def _parse(text: str, source: str) -> dict[str, Any]:
    """Decode snapshot text; NaN/Infinity tokens are rejected like JSON.parse does."""
    return _as_document(json.loads(text, parse_constant=_reject_constant), source)


def load_snapshot_file(path: Path) -> dict[str, Any]:
    """Read a JSON export of the measurement document.

    Raises:
        FileNotFoundError: if `path` does not exist.
        InvalidInput: if the file does not hold a JSON object, or holds
            NaN/Infinity tokens.
    """
    log.info("Reading snapshot file %s", path)
    return _parse(path.read_text(encoding="utf-8"), str(path))


def fetch_snapshot(settings: Settings, use_cache: bool = True) -> dict[str, Any]:
    """Fetch & cache the measurement document from the realtime database.

    Args:
        settings: Loaded `Settings`; `firebase_db_url` must be set.
        use_cache: Return the cached copy when present and non-empty.

    Returns:
        Parsed measurement document.

    Raises:
        RuntimeError: if no database URL is configured.
        requests.HTTPError: if the remote request fails (non-2xx status).
        InvalidInput: if the node is missing (`null`) or not an object.
    """
    cache_file = _cache_path(settings.snapshot_cache_dir, settings.heavy_metals_path)
    if use_cache and cache_file.exists() and cache_file.stat().st_size > 0:
        log.info("Cache hit: %s", cache_file)
        return load_snapshot_file(cache_file)

    url = heavy_metals_url(require_firebase_url(settings), settings.heavy_metals_path)
    params = {"auth": settings.firebase_auth_token} if settings.firebase_auth_token else None

    log.info("Downloading %s", url)
    r = requests.get(url, params=params, timeout=60)
    r.raise_for_status()
    document = _parse(r.text, url)

    settings.snapshot_cache_dir.mkdir(parents=True, exist_ok=True)
    cache_file.write_text(r.text, encoding="utf-8")
    log.info("Saved: %s (%d depths)", cache_file, len(document))
    return document
