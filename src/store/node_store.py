"""In-memory content graph with JSONL persistence.

This module implements the node sink used by the ingestion pipeline.
Nodes are kept in creation order; re-creating a node id replaces it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from core.config import SourceConfig
from core.constants import NODES_DIR_NAME, NODES_FILE_NAME
from core.errors import SourceStoreError
from core.logging_config import get_logger
from core.types import ContentNode
from store.node_payload import read_nodes_jsonl, write_nodes_jsonl
from transforms.node_identity import create_content_digest, create_node_id

_LOGGER = get_logger(__name__)


class NodeStore:
    """Content graph node sink backed by a JSONL file."""

    def __init__(self, config: SourceConfig) -> None:
        """Initialize an empty graph for the configured data root.

        Args:
            config: Runtime configuration.
        """
        self._nodes_path = config.data_root / NODES_DIR_NAME / NODES_FILE_NAME
        self._nodes: dict[str, ContentNode] = {}

    @property
    def nodes_path(self) -> Path:
        """Return the JSONL file the graph is flushed to."""
        return self._nodes_path

    def create_node_id(self, seed: str) -> str:
        """Derive a deterministic node id from a seed."""
        return create_node_id(seed)

    def create_content_digest(self, payload: Any) -> str:
        """Hash a payload for change detection."""
        return create_content_digest(payload)

    def create_node(self, node: ContentNode) -> None:
        """Add a node and register it as a child of its parent.

        Args:
            node: Node to add.
        """
        self._nodes[node.id] = node
        if node.parent is None:
            return
        parent = self._nodes.get(node.parent)
        if parent is not None and node.id not in parent.children:
            parent.children.append(node.id)

    def set_node_field(self, node: ContentNode, name: str, value: str) -> None:
        """Set a named field link on a node already in the graph.

        Args:
            node: Target node.
            name: Field name.
            value: Field value, usually a linked node id.

        Raises:
            SourceStoreError: If the node was never created in this graph.
        """
        if node.id not in self._nodes:
            raise SourceStoreError(
                f"Cannot set field '{name}' on node {node.id}: node does not exist."
            )
        node.fields[name] = value

    def get_node(self, node_id: str) -> ContentNode | None:
        """Return a node by id, or None."""
        return self._nodes.get(node_id)

    def nodes(self, node_type: str | None = None) -> list[ContentNode]:
        """Return nodes in creation order, optionally filtered by type."""
        if node_type is None:
            return list(self._nodes.values())
        return [node for node in self._nodes.values() if node.node_type == node_type]

    def flush(self) -> Path:
        """Write the whole graph to its JSONL file.

        Returns:
            Path of the written file.

        Raises:
            SourceStoreError: If the file cannot be written.
        """
        try:
            self._nodes_path.parent.mkdir(parents=True, exist_ok=True)
            write_nodes_jsonl(self._nodes_path, self.nodes())
        except OSError as error:
            raise SourceStoreError(
                f"Failed to write nodes to {self._nodes_path}: {error}. "
                "Check that the data root is writable."
            ) from error
        _LOGGER.info("nodes_flushed", path=str(self._nodes_path), node_count=len(self._nodes))
        return self._nodes_path

    def load(self) -> list[ContentNode]:
        """Replace the in-memory graph with the persisted one.

        Returns:
            Loaded nodes in file order.

        Raises:
            SourceStoreError: If the file is missing or invalid.
        """
        if not self._nodes_path.exists():
            raise SourceStoreError(
                f"No nodes found at {self._nodes_path}. Run ingest first."
            )
        try:
            loaded_nodes = read_nodes_jsonl(self._nodes_path)
        except ValueError as error:
            raise SourceStoreError(f"Invalid nodes file {self._nodes_path}: {error}") from error
        self._nodes = {node.id: node for node in loaded_nodes}
        return loaded_nodes
