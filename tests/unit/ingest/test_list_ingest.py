"""Unit tests for the list ingestor."""

from __future__ import annotations

import asyncio

import pytest

from core.diagnostics import Diagnostics
from core.errors import SourceParseError, SourceTransportError
from core.types import FieldDescriptor, ListConfig, SiteConfig, SlugConfig
from ingest.asset_ingest import AssetIngestor
from ingest.endpoints import asset_content_endpoint, list_items_endpoint
from ingest.list_ingest import ListIngestor, parse_image_reference
from store.file_store import LocalFileStore
from store.node_store import NodeStore
from transforms.node_identity import create_node_id

_HOST = "contoso.sharepoint.com"
_SITE = SiteConfig(name="Intranet", relative_path="sites/intranet")
_PAGES = ListConfig(
    title="Pages",
    fields=(FieldDescriptor("Title"), FieldDescriptor("SEOImage", "image")),
)
_PNG = b"\x89PNG\r\n\x1a\nfake-png"


def _build_ingestor(client, store: NodeStore, config, diagnostics: Diagnostics) -> ListIngestor:
    assets = AssetIngestor(
        client, store, LocalFileStore(config, store), diagnostics, config.asset_timeout
    )
    return ListIngestor(_HOST, client, store, assets, diagnostics, config.request_timeout)


@pytest.mark.asyncio
async def test_ingest_emits_record_nodes_and_links_images(source_config, fake_graph) -> None:
    """Each item becomes a node and image fields link stored files."""
    fake_graph.add_json(
        list_items_endpoint(_SITE, _PAGES, _HOST),
        {
            "value": [
                {"id": "1", "fields": {"Title": "Home", "SEOImage": '{"id":"abc123"}'}},
                {"id": "2", "fields": {"Title": "About"}},
            ]
        },
    )
    fake_graph.add_bytes(asset_content_endpoint(_SITE, "abc123", _HOST), _PNG)
    store = NodeStore(source_config)
    diagnostics = Diagnostics()

    async with fake_graph.client(source_config) as client:
        outcome = await _build_ingestor(client, store, source_config, diagnostics).ingest(
            _SITE, _PAGES
        )

    records = store.nodes("SharePointPagesList")
    home = store.get_node(create_node_id("SharePointPagesList-1"))
    assert outcome.status == "ingested"
    assert (outcome.records_emitted, outcome.assets_linked) == (2, 1)
    assert [node.data["id"] for node in records] == ["1", "2"]
    assert home is not None and home.parent is None
    assert home.content_digest == store.create_content_digest(home.data)
    assert home.fields["SEOImageImage"] == store.nodes("File")[0].id
    assert fake_graph.requests[0].url.params["$expand"] == "fields($select=Title,SEOImage)"
    assert len(diagnostics) == 0


@pytest.mark.asyncio
async def test_ingest_is_idempotent_across_runs(source_config, fake_graph) -> None:
    """Re-ingesting the same items yields the same ids and digests."""
    fake_graph.add_json(
        list_items_endpoint(_SITE, _PAGES, _HOST),
        {"value": [{"id": "1", "fields": {"Title": "Home"}}]},
    )
    snapshots = []
    for _ in range(2):
        store = NodeStore(source_config)
        async with fake_graph.client(source_config) as client:
            await _build_ingestor(client, store, source_config, Diagnostics()).ingest(
                _SITE, _PAGES
            )
        snapshots.append([(node.id, node.content_digest) for node in store.nodes()])

    assert snapshots[0] == snapshots[1]


@pytest.mark.asyncio
async def test_ingest_skips_malformed_image_field(source_config, fake_graph) -> None:
    """A bad image value is reported while its record is still emitted."""
    fake_graph.add_json(
        list_items_endpoint(_SITE, _PAGES, _HOST),
        {"value": [{"id": "1", "fields": {"Title": "Home", "SEOImage": "not-json"}}]},
    )
    store = NodeStore(source_config)
    diagnostics = Diagnostics()

    async with fake_graph.client(source_config) as client:
        outcome = await _build_ingestor(client, store, source_config, diagnostics).ingest(
            _SITE, _PAGES
        )

    assert outcome.records_emitted == 1 and outcome.assets_linked == 0
    assert len(diagnostics.events("image_field_parse_failed")) == 1
    assert len(fake_graph.requests) == 1


@pytest.mark.asyncio
async def test_ingest_writes_slug_before_emission(source_config, fake_graph) -> None:
    """Configured slugs are stored in the record fields and digest."""
    vacancies = ListConfig(
        title="Vacancies",
        slug=SlugConfig(template=("Position", "Title")),
    )
    fake_graph.add_json(
        list_items_endpoint(_SITE, vacancies, _HOST),
        {"value": [{"id": "9", "fields": {"Position": "Engineer", "Title": "Senior"}}]},
    )
    store = NodeStore(source_config)

    async with fake_graph.client(source_config) as client:
        await _build_ingestor(client, store, source_config, Diagnostics()).ingest(
            _SITE, vacancies
        )

    node = store.nodes("SharePointVacanciesList")[0]
    assert node.data["fields"]["slug"] == "engineer-senior"
    assert node.content_digest == store.create_content_digest(node.data)
    assert fake_graph.requests[0].url.params["$expand"] == "fields"


@pytest.mark.asyncio
async def test_ingest_skips_invalid_list_without_request(source_config, fake_graph) -> None:
    """An untitled list is skipped before any request is made."""
    store = NodeStore(source_config)
    diagnostics = Diagnostics()

    async with fake_graph.client(source_config) as client:
        outcome = await _build_ingestor(client, store, source_config, diagnostics).ingest(
            _SITE, ListConfig(title="")
        )

    assert outcome.status == "skipped"
    assert fake_graph.requests == []
    assert len(diagnostics.events("invalid_list_config")) == 1


@pytest.mark.asyncio
async def test_ingest_raises_transport_error_for_failed_fetch(source_config, fake_graph) -> None:
    """Fetch failures propagate for the pipeline to isolate."""
    fake_graph.add_json(list_items_endpoint(_SITE, _PAGES, _HOST), {}, status_code=500)
    store = NodeStore(source_config)

    async with fake_graph.client(source_config) as client:
        with pytest.raises(SourceTransportError):
            await _build_ingestor(client, store, source_config, Diagnostics()).ingest(
                _SITE, _PAGES
            )

    assert store.nodes() == []


class _StalledListClient:
    async def get_json(self, path, params=None):
        await asyncio.sleep(5)
        return {"value": []}

    async def get_bytes(self, path):
        return b""


@pytest.mark.asyncio
async def test_ingest_raises_transport_error_on_timeout(source_config) -> None:
    """A list fetch slower than the request timeout is a transport failure."""
    store = NodeStore(source_config)
    diagnostics = Diagnostics()
    client = _StalledListClient()
    assets = AssetIngestor(
        client, store, LocalFileStore(source_config, store), diagnostics, timeout=5.0
    )
    ingestor = ListIngestor(_HOST, client, store, assets, diagnostics, timeout=0.05)

    with pytest.raises(SourceTransportError, match="timed out"):
        await ingestor.ingest(_SITE, _PAGES)

    assert store.nodes() == []


@pytest.mark.asyncio
async def test_ingest_keeps_records_without_fields_unchanged(source_config, fake_graph) -> None:
    """Records lacking a fields object are emitted exactly as received."""
    fake_graph.add_json(
        list_items_endpoint(_SITE, _PAGES, _HOST),
        {"value": [{"id": "1", "eTag": "\"v1\""}]},
    )
    store = NodeStore(source_config)

    async with fake_graph.client(source_config) as client:
        outcome = await _build_ingestor(client, store, source_config, Diagnostics()).ingest(
            _SITE, _PAGES
        )

    node = store.nodes("SharePointPagesList")[0]
    assert outcome.records_emitted == 1
    assert node.data == {"id": "1", "eTag": "\"v1\""}
    assert node.content_digest == store.create_content_digest({"id": "1", "eTag": "\"v1\""})


def test_parse_image_reference_reads_id() -> None:
    """Image values hold a JSON object with the asset item id."""
    assert parse_image_reference('{"id":"abc123","serverUrl":"https://x"}') == "abc123"
    assert parse_image_reference({"id": 5}) == "5"


def test_parse_image_reference_rejects_missing_id() -> None:
    """Objects without an id cannot be resolved to an asset."""
    with pytest.raises(SourceParseError):
        parse_image_reference('{"fileName":"hero.png"}')
