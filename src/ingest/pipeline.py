"""Ingest orchestration for SharePoint sources.

This module walks sites and their lists in declaration order, runs the
list ingestor for each, and isolates failures at list granularity so
one unreachable list never stops the rest of the run.
"""

from __future__ import annotations

import asyncio

import httpx

from core.config import SourceConfig
from core.diagnostics import Diagnostics
from core.errors import SourceError
from core.logging_config import get_logger
from core.types import ListConfig, ListOutcome, SiteConfig, SourceRunReport, SourceSettings
from ingest.asset_ingest import AssetIngestor
from ingest.graph_client import GraphClient
from ingest.list_ingest import ListIngestor
from ingest.naming import validate_site
from ingest.ports import FileStorage, ListClient, NodeSink
from store.file_store import LocalFileStore
from store.node_store import NodeStore

_LOGGER = get_logger(__name__)


class SourceRunner:
    """Sequential runner for one ingestion pass over all sites."""

    def __init__(
        self,
        settings: SourceSettings,
        client: ListClient,
        sink: NodeSink,
        storage: FileStorage,
        config: SourceConfig,
        diagnostics: Diagnostics | None = None,
    ) -> None:
        self._settings = settings
        self._diagnostics = diagnostics or Diagnostics()
        assets = AssetIngestor(client, sink, storage, self._diagnostics, config.asset_timeout)
        self._lists = ListIngestor(
            settings.host,
            client,
            sink,
            assets,
            self._diagnostics,
            config.request_timeout,
        )

    async def run(self) -> SourceRunReport:
        """Ingest every declared list and return the run report."""
        outcomes: list[ListOutcome] = []
        for site in self._settings.sites:
            if not validate_site(site, self._diagnostics):
                continue
            for list_config in site.lists:
                outcomes.append(await self._ingest_list(site, list_config))
        report = SourceRunReport(outcomes=tuple(outcomes), diagnostics=self._diagnostics.events())
        _log_run_completion(report)
        return report

    async def _ingest_list(self, site: SiteConfig, list_config: ListConfig) -> ListOutcome:
        try:
            return await self._lists.ingest(site, list_config)
        except SourceError as error:
            self._diagnostics.error(
                "list_fetch_failed",
                f"Couldn't ingest list '{list_config.title}' of site '{site.name}'.",
                site=site.name,
                list=list_config.title,
                error=str(error),
            )
            return ListOutcome(
                site_name=site.name,
                list_title=list_config.title,
                node_type=None,
                status="failed",
            )


def run_source(
    settings: SourceSettings,
    config: SourceConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[SourceRunReport, NodeStore]:
    """Run one ingestion pass and persist the resulting content graph.

    Args:
        settings: Parsed source settings.
        config: Runtime configuration.
        transport: Optional HTTP transport override, used by tests.

    Returns:
        Run report and the node store holding the emitted nodes.

    Raises:
        SourceStoreError: If the node graph cannot be written.
    """
    store = NodeStore(config)
    storage = LocalFileStore(config, store)
    report = asyncio.run(_run_with_client(settings, config, store, storage, transport))
    store.flush()
    return report, store


async def _run_with_client(
    settings: SourceSettings,
    config: SourceConfig,
    store: NodeStore,
    storage: LocalFileStore,
    transport: httpx.AsyncBaseTransport | None,
) -> SourceRunReport:
    async with GraphClient(config, transport=transport) as client:
        runner = SourceRunner(settings, client, store, storage, config)
        return await runner.run()


def _log_run_completion(report: SourceRunReport) -> None:
    _LOGGER.info(
        "source_run_completed",
        lists=len(report.outcomes),
        failed_lists=sum(1 for outcome in report.outcomes if outcome.status == "failed"),
        skipped_lists=sum(1 for outcome in report.outcomes if outcome.status == "skipped"),
        records_emitted=report.records_emitted,
        assets_linked=report.assets_linked,
        diagnostics=len(report.diagnostics),
    )
