"""List ingestion stage.

This module fetches the first page of one SharePoint list, emits one
record node per item, and dispatches asset ingestion for image fields.
Records and their assets are processed strictly in order.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Mapping

from core.constants import FIELD_EXPAND_PARAM
from core.diagnostics import Diagnostics
from core.errors import SourceParseError, SourceTransportError
from core.logging_config import get_logger
from core.types import ContentNode, FieldDescriptor, ListConfig, ListOutcome, SiteConfig
from ingest.asset_ingest import AssetIngestor
from ingest.endpoints import asset_content_endpoint, list_items_endpoint
from ingest.field_projection import project_fields
from ingest.naming import canonical_node_type, normalize_list_name, validate_list
from ingest.ports import ListClient, NodeSink
from transforms.node_identity import canonical_json
from transforms.slug_synthesis import build_slug

_LOGGER = get_logger(__name__)


class ListIngestor:
    """Ingest declared lists of one tenant into the node sink."""

    def __init__(
        self,
        host: str,
        client: ListClient,
        sink: NodeSink,
        assets: AssetIngestor,
        diagnostics: Diagnostics,
        timeout: float,
    ) -> None:
        self._host = host
        self._client = client
        self._sink = sink
        self._assets = assets
        self._diagnostics = diagnostics
        self._timeout = timeout

    async def ingest(self, site: SiteConfig, list_config: ListConfig) -> ListOutcome:
        """Ingest one list of a site.

        Args:
            site: Site owning the list.
            list_config: List to ingest.

        Returns:
            Outcome with emitted record and asset link counts.

        Raises:
            SourceTransportError: If the list page cannot be fetched.
        """
        if not validate_list(list_config, self._diagnostics):
            return ListOutcome(
                site_name=site.name,
                list_title=list_config.title,
                node_type=None,
                status="skipped",
            )
        node_type = canonical_node_type(normalize_list_name(list_config))
        records = await self._fetch_records(site, list_config)
        records_emitted = 0
        assets_linked = 0
        for record in records:
            node = self._emit_record(node_type, list_config, record)
            records_emitted += 1
            assets_linked += await self._ingest_image_fields(site, list_config, node)
        _LOGGER.info(
            "list_ingested",
            site=site.name,
            list=list_config.title,
            node_type=node_type,
            records_emitted=records_emitted,
            assets_linked=assets_linked,
        )
        return ListOutcome(
            site_name=site.name,
            list_title=list_config.title,
            node_type=node_type,
            status="ingested",
            records_emitted=records_emitted,
            assets_linked=assets_linked,
        )

    async def _fetch_records(
        self,
        site: SiteConfig,
        list_config: ListConfig,
    ) -> list[Mapping[str, Any]]:
        # Only the first page is read; @odata.nextLink is not followed.
        path = list_items_endpoint(site, list_config, self._host)
        params = {FIELD_EXPAND_PARAM: project_fields(list_config.fields)}
        try:
            payload = await asyncio.wait_for(self._client.get_json(path, params), self._timeout)
        except asyncio.TimeoutError as error:
            raise SourceTransportError(
                f"GET {path} timed out after {self._timeout} seconds."
            ) from error
        rows = payload.get("value")
        if not isinstance(rows, list):
            raise SourceTransportError(f"GET {path} returned no 'value' array of list items.")
        return [row for row in rows if isinstance(row, Mapping)]

    def _emit_record(
        self,
        node_type: str,
        list_config: ListConfig,
        record: Mapping[str, Any],
    ) -> ContentNode:
        data = _copy_record(record)
        if list_config.slug is not None:
            fields = data.get("fields")
            if not isinstance(fields, dict):
                # Slug synthesis needs a mapping to write into.
                fields = data["fields"] = {}
            fields[list_config.slug.field_name] = build_slug(fields, list_config.slug.template)
        node = ContentNode(
            id=self._sink.create_node_id(f"{node_type}-{data.get('id')}"),
            node_type=node_type,
            data=data,
            content=canonical_json(data),
            content_digest=self._sink.create_content_digest(data),
        )
        self._sink.create_node(node)
        return node

    async def _ingest_image_fields(
        self,
        site: SiteConfig,
        list_config: ListConfig,
        node: ContentNode,
    ) -> int:
        fields = node.data.get("fields")
        if not isinstance(fields, Mapping):
            return 0
        linked = 0
        for descriptor in list_config.image_fields:
            value = fields.get(descriptor.name)
            if not value:
                continue
            asset_item_id = self._parse_asset_id(site, list_config, descriptor, value)
            if asset_item_id is None:
                continue
            endpoint = asset_content_endpoint(site, asset_item_id, self._host)
            link = await self._assets.ingest_asset(endpoint, descriptor.name, node)
            if link is not None:
                linked += 1
        return linked

    def _parse_asset_id(
        self,
        site: SiteConfig,
        list_config: ListConfig,
        descriptor: FieldDescriptor,
        value: object,
    ) -> str | None:
        try:
            return parse_image_reference(value)
        except SourceParseError as error:
            self._diagnostics.error(
                "image_field_parse_failed",
                f"Couldn't retrieve the image for field '{descriptor.name}', "
                f"list '{list_config.title}', site '{site.name}'.",
                site=site.name,
                list=list_config.title,
                field=descriptor.name,
                error=str(error),
            )
            return None


def parse_image_reference(value: object) -> str:
    """Extract the Site Assets item id from an image field value.

    Args:
        value: JSON text such as ``{"id": "abc123"}``, or an already
            decoded mapping.

    Returns:
        Asset item id.

    Raises:
        SourceParseError: If the value is not a JSON object with an id.
    """
    if isinstance(value, Mapping):
        reference: object = value
    else:
        try:
            reference = json.loads(str(value))
        except json.JSONDecodeError as error:
            raise SourceParseError(f"Image field value is not valid JSON: {error.msg}.") from error
    if not isinstance(reference, Mapping):
        raise SourceParseError("Image field value must be a JSON object.")
    asset_item_id = reference.get("id")
    if asset_item_id is None or asset_item_id == "":
        raise SourceParseError("Image field value has no 'id'.")
    return str(asset_item_id)


def _copy_record(record: Mapping[str, Any]) -> dict[str, Any]:
    data = dict(record)
    raw_fields = record.get("fields")
    if isinstance(raw_fields, Mapping):
        data["fields"] = dict(raw_fields)
    return data
