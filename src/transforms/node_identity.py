"""Deterministic node identity helpers.

Node ids and content digests are pure functions of their inputs so a
repeated ingestion run recreates the same nodes instead of duplicates.
"""

from __future__ import annotations

import hashlib
import json
import uuid
from typing import Any

from core.constants import HASH_ALGORITHM

_NODE_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "sharepoint-source")


def create_node_id(seed: str) -> str:
    """Derive a stable node id from a seed string.

    Args:
        seed: Identity seed, e.g. ``SharePointPagesList-12``.

    Returns:
        UUIDv5 string in the source namespace.
    """
    return str(uuid.uuid5(_NODE_ID_NAMESPACE, seed))


def create_content_digest(payload: Any) -> str:
    """Hash a payload for change detection.

    Strings and bytes are hashed as-is; other values are hashed through
    their canonical JSON encoding with sorted keys.

    Args:
        payload: JSON-compatible value, text, or bytes.

    Returns:
        Hex digest string.
    """
    hasher = hashlib.new(HASH_ALGORITHM)
    hasher.update(_payload_bytes(payload))
    return hasher.hexdigest()


def canonical_json(payload: Any) -> str:
    """Encode a payload as deterministic JSON text."""
    return json.dumps(payload, sort_keys=True, ensure_ascii=False, separators=(",", ":"))


def _payload_bytes(payload: Any) -> bytes:
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload)
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return canonical_json(payload).encode("utf-8")
