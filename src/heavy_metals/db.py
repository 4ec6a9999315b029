"""MongoDB helpers.

Centralizes creation of Mongo clients used to store Gold summaries.
"""

from __future__ import annotations

from typing import Any
from pymongo import MongoClient
from pymongo.database import Database

import certifi


def _wants_tls(uri: str) -> bool:
    return uri.startswith("mongodb+srv://") or "tls=true" in uri.lower() or "ssl=true" in uri.lower()


def get_client(uri: str) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    Atlas-style URIs (``mongodb+srv://`` or an explicit ``tls=true``) use the
    certifi CA bundle; plain local URIs connect without TLS.

    Args:
        uri: MongoDB connection URI.

    Returns:
        Configured MongoClient instance.
    """
    options: dict[str, Any] = {
        "serverSelectionTimeoutMS": 30000,
        "socketTimeoutMS": 30000,
        "connectTimeoutMS": 30000,
    }
    if _wants_tls(uri):
        options.update(tls=True, tlsCAFile=certifi.where())
    return MongoClient(uri, **options)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient.

    Args:
        client: PyMongo MongoClient.
        db_name: Database name.

    Returns:
        A Database object.
    """
    return client[db_name]
