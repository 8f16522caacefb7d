"""Shared typed models.

This module defines the settings, node, and report models used by
the ingest, store, and SDK layers to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Mapping

from core.constants import DEFAULT_SLUG_FIELD_NAME, IMAGE_FIELD_TYPE

FieldType = Literal["plain", "image"]
ListStatus = Literal["ingested", "skipped", "failed"]


@dataclass(frozen=True)
class FieldDescriptor:
    """Declared list field projection target.

    Attributes:
        name: SharePoint internal field name.
        field_type: Semantic type; ``image`` fields trigger asset ingestion.
    """

    name: str
    field_type: FieldType = "plain"

    @property
    def is_image(self) -> bool:
        """Return whether this field references a Site Assets image."""
        return self.field_type == IMAGE_FIELD_TYPE


@dataclass(frozen=True)
class SlugConfig:
    """Slug synthesis options for a list.

    Attributes:
        template: Ordered field names joined into the slug.
        field_name: Record field that receives the slug.
    """

    template: tuple[str, ...]
    field_name: str = DEFAULT_SLUG_FIELD_NAME


@dataclass(frozen=True)
class ListConfig:
    """Declared SharePoint list to ingest.

    Attributes:
        title: List title as shown in SharePoint; empty when misconfigured.
        custom_node_name: Optional override for the node type name.
        fields: Ordered field descriptors to project.
        slug: Optional slug synthesis options.
        raw: Settings payload the list was parsed from, for diagnostics.
        error: Settings problem that makes the list unusable, if any.
    """

    title: str
    custom_node_name: str | None = None
    fields: tuple[FieldDescriptor, ...] = ()
    slug: SlugConfig | None = None
    raw: Mapping[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def image_fields(self) -> tuple[FieldDescriptor, ...]:
        """Return the image-typed field descriptors in declaration order."""
        return tuple(descriptor for descriptor in self.fields if descriptor.is_image)


@dataclass(frozen=True)
class SiteConfig:
    """Remote site collection root.

    Attributes:
        name: Display name used in logs and reports.
        relative_path: Server-relative site path, e.g. ``sites/intranet``.
        lists: Lists to ingest from this site.
        error: Settings problem that makes the site unusable, if any.
    """

    name: str
    relative_path: str
    lists: tuple[ListConfig, ...] = ()
    error: str | None = None


@dataclass(frozen=True)
class SourceSettings:
    """Validated settings file root.

    Attributes:
        host: SharePoint tenant host, e.g. ``contoso.sharepoint.com``.
        sites: Sites processed in declaration order.
    """

    host: str
    sites: tuple[SiteConfig, ...]


@dataclass(frozen=True)
class ContentNode:
    """Node in the local content graph.

    Record nodes carry one list item as ``data``; file nodes carry the
    stored asset metadata and point at their record node via ``parent``.
    Attributes are fixed at creation; only ``fields`` and ``children``
    grow afterwards.

    Attributes:
        id: Deterministic node id.
        node_type: Canonical type name.
        data: Original payload.
        content: JSON text of the payload.
        content_digest: Deterministic hash of the payload.
        parent: Parent node id, None for record nodes.
        children: Ids of nodes created with this node as parent.
        fields: Named field links set after creation.
    """

    id: str
    node_type: str
    data: Mapping[str, Any]
    content: str
    content_digest: str
    parent: str | None = None
    children: list[str] = field(default_factory=list)
    fields: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class AssetFieldLink:
    """Link from a record node to the file node created for one image field."""

    node_id: str
    field_name: str
    file_node_id: str


@dataclass(frozen=True)
class DiagnosticEvent:
    """Structured record of a skipped unit of work.

    Attributes:
        kind: Stable event name, e.g. ``invalid_list_config``.
        message: Human readable description.
        context: Identifying fields (site, list, field, error).
    """

    kind: str
    message: str
    context: Mapping[str, object] = field(default_factory=dict)


@dataclass(frozen=True)
class ListOutcome:
    """Result of ingesting one list."""

    site_name: str
    list_title: str
    node_type: str | None
    status: ListStatus
    records_emitted: int = 0
    assets_linked: int = 0


@dataclass(frozen=True)
class SourceRunReport:
    """Ordered outcomes and diagnostics of one ingestion run."""

    outcomes: tuple[ListOutcome, ...]
    diagnostics: tuple[DiagnosticEvent, ...]

    @property
    def records_emitted(self) -> int:
        """Return total record nodes emitted across lists."""
        return sum(outcome.records_emitted for outcome in self.outcomes)

    @property
    def assets_linked(self) -> int:
        """Return total asset links created across lists."""
        return sum(outcome.assets_linked for outcome in self.outcomes)
