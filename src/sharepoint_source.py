"""Public SDK surface for the SharePoint source.

This module provides a stable import path for library users.
It re-exports the primary client and typed models.
"""

from __future__ import annotations

from core.config import SourceConfig
from core.diagnostics import Diagnostics
from core.errors import (
    SourceConfigError,
    SourceError,
    SourceParseError,
    SourceStoreError,
    SourceTransportError,
)
from core.source_settings import load_source_settings, parse_source_settings
from core.types import (
    AssetFieldLink,
    ContentNode,
    FieldDescriptor,
    ListConfig,
    ListOutcome,
    SiteConfig,
    SlugConfig,
    SourceRunReport,
    SourceSettings,
)
from ingest.pipeline import SourceRunner, run_source
from store.source_sdk import SharePointSourceClient

__all__ = [
    "AssetFieldLink",
    "ContentNode",
    "Diagnostics",
    "FieldDescriptor",
    "ListConfig",
    "ListOutcome",
    "SharePointSourceClient",
    "SiteConfig",
    "SlugConfig",
    "SourceConfig",
    "SourceConfigError",
    "SourceError",
    "SourceParseError",
    "SourceRunReport",
    "SourceRunner",
    "SourceSettings",
    "SourceStoreError",
    "SourceTransportError",
    "load_source_settings",
    "parse_source_settings",
    "run_source",
]
