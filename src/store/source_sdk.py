"""Python SDK for SharePoint source operations.

This module exposes high-level APIs for ingesting a settings file,
declaring schema types, and reading back the stored content graph.
"""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import httpx

from core.config import SourceConfig
from core.diagnostics import Diagnostics
from core.source_settings import load_source_settings
from core.types import ContentNode, SourceRunReport, SourceSettings
from ingest.pipeline import run_source
from ingest.schema_types import build_image_type_definitions
from store.node_store import NodeStore


class SharePointSourceClient:
    """Primary SDK entry point."""

    def __init__(
        self,
        config: SourceConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            transport: Optional HTTP transport override for the Graph client.
        """
        self._config = config or SourceConfig.from_env()
        self._transport = transport

    @property
    def config(self) -> SourceConfig:
        """Return the runtime configuration."""
        return self._config

    def load_settings(self, settings_path: str) -> SourceSettings:
        """Parse a settings file, using the configured host as fallback.

        Raises:
            SourceConfigError: If the settings file is invalid.
        """
        return load_source_settings(settings_path, default_host=self._config.host)

    def ingest(self, settings_path: str) -> SourceRunReport:
        """Ingest every list declared in a settings file.

        Args:
            settings_path: Path to the YAML settings file.

        Returns:
            Run report with per-list outcomes and diagnostics.

        Raises:
            SourceConfigError: If the settings file is invalid.
            SourceStoreError: If the content graph cannot be persisted.
        """
        settings = self.load_settings(settings_path)
        report, _ = run_source(settings, self._config, transport=self._transport)
        return report

    def schema(self, settings_path: str) -> tuple[str, ...]:
        """Return the image link type definitions for a settings file."""
        settings = self.load_settings(settings_path)
        return build_image_type_definitions(settings, Diagnostics())

    def nodes(self, node_type: str | None = None) -> list[ContentNode]:
        """Load persisted nodes, optionally filtered by node type.

        Raises:
            SourceStoreError: If no ingested graph exists yet.
        """
        store = NodeStore(self._config)
        store.load()
        return store.nodes(node_type)

    def with_data_root(self, data_root: str) -> "SharePointSourceClient":
        """Clone the client with a different local data root."""
        resolved_root = Path(data_root).expanduser().resolve()
        return SharePointSourceClient(replace(self._config, data_root=resolved_root), self._transport)
