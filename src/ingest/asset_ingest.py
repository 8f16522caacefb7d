"""Image asset ingestion for record nodes.

This module downloads one Site Assets item, hands the bytes to the file
storage collaborator, and links the resulting file node back onto the
record node. Failures are reported and leave the record node unchanged.
"""

from __future__ import annotations

import asyncio

from core.diagnostics import Diagnostics
from core.errors import SourceStoreError, SourceTransportError
from core.logging_config import get_logger
from core.types import AssetFieldLink, ContentNode
from ingest.naming import image_field_name
from ingest.ports import FileStorage, ListClient, NodeSink

_LOGGER = get_logger(__name__)


class AssetIngestor:
    """Fetch, store, and link image assets one at a time."""

    def __init__(
        self,
        client: ListClient,
        sink: NodeSink,
        storage: FileStorage,
        diagnostics: Diagnostics,
        timeout: float,
    ) -> None:
        self._client = client
        self._sink = sink
        self._storage = storage
        self._diagnostics = diagnostics
        self._timeout = timeout

    async def ingest_asset(
        self,
        endpoint: str,
        field_name: str,
        record_node: ContentNode,
    ) -> AssetFieldLink | None:
        """Download an asset and link it to its record node.

        Args:
            endpoint: Asset content path.
            field_name: Image field the asset was referenced from.
            record_node: Record node receiving the link field.

        Returns:
            The created link, or None when the asset was skipped.
        """
        try:
            buffer = await asyncio.wait_for(self._client.get_bytes(endpoint), self._timeout)
        except (SourceTransportError, asyncio.TimeoutError) as error:
            self._diagnostics.error(
                "asset_fetch_failed",
                f"Couldn't download the asset for field '{field_name}'.",
                node_id=record_node.id,
                field=field_name,
                endpoint=endpoint,
                error=str(error) or type(error).__name__,
            )
            return None
        try:
            file_node_id = self._storage.store_buffer(buffer, record_node.id)
        except SourceStoreError as error:
            self._diagnostics.error(
                "asset_store_failed",
                f"Couldn't store the asset for field '{field_name}'.",
                node_id=record_node.id,
                field=field_name,
                error=str(error),
            )
            return None
        if file_node_id is None:
            self._diagnostics.error(
                "asset_store_failed",
                f"No file was created for field '{field_name}'.",
                node_id=record_node.id,
                field=field_name,
                size=len(buffer),
            )
            return None
        link_name = image_field_name(field_name)
        self._sink.set_node_field(record_node, link_name, file_node_id)
        _LOGGER.info(
            "asset_linked",
            node_id=record_node.id,
            field=link_name,
            file_node_id=file_node_id,
            size=len(buffer),
        )
        return AssetFieldLink(node_id=record_node.id, field_name=link_name, file_node_id=file_node_id)
