"""Collaborator interfaces for the ingestion pipeline.

The pipeline only depends on these protocols; ``store`` and
``ingest.graph_client`` provide the concrete implementations.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol

from core.types import ContentNode


class ListClient(Protocol):
    """Remote API client used by the list and asset ingestors."""

    async def get_json(
        self,
        path: str,
        params: Mapping[str, str] | None = None,
    ) -> Mapping[str, Any]:
        """Fetch a JSON resource."""

    async def get_bytes(self, path: str) -> bytes:
        """Fetch a binary resource as one contiguous buffer."""


class NodeSink(Protocol):
    """Content graph target for emitted nodes."""

    def create_node_id(self, seed: str) -> str:
        """Derive a deterministic node id."""

    def create_content_digest(self, payload: Any) -> str:
        """Hash a payload for change detection."""

    def create_node(self, node: ContentNode) -> None:
        """Add a node to the graph."""

    def set_node_field(self, node: ContentNode, name: str, value: str) -> None:
        """Set a named field link on an existing node."""


class FileStorage(Protocol):
    """File-ingestion collaborator for downloaded assets."""

    def store_buffer(self, buffer: bytes, parent_id: str) -> str | None:
        """Persist a buffer as a file node and return its id."""
