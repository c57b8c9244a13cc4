from __future__ import annotations

import threading
from typing import Any, Optional

from kubernetes import client

_api_client_lock = threading.Lock()
_cached_api_client: Optional[client.ApiClient] = None


def get_api_client() -> client.ApiClient:
    """Return a cached ApiClient used for (de)serializing Kubernetes models.

    No cluster configuration is loaded; the client only converts between the
    generated model classes and plain JSON-compatible data.
    """
    global _cached_api_client

    with _api_client_lock:
        if _cached_api_client is not None:
            return _cached_api_client

        _cached_api_client = client.ApiClient(configuration=client.Configuration())
        return _cached_api_client


def to_manifest(obj: Any) -> Any:
    """Convert Kubernetes model objects into camelCase dicts, dropping unset fields."""
    return get_api_client().sanitize_for_serialization(obj)
