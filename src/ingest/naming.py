"""List validation and canonical naming.

Node creation and schema declaration both derive type and field names
from these helpers so the two always agree.
"""

from __future__ import annotations

from dataclasses import asdict

from core.constants import (
    IMAGE_FIELD_SUFFIX,
    LIST_RESOURCE_TYPE,
    NODE_TYPE_PREFIX,
    NODE_TYPE_SUFFIX,
)
from core.diagnostics import Diagnostics
from core.types import ListConfig, SiteConfig


def validate_list(
    list_config: ListConfig | None,
    diagnostics: Diagnostics,
    resource_type: str = LIST_RESOURCE_TYPE,
) -> bool:
    """Return whether a list config can be ingested.

    Invalid configs are reported once through ``diagnostics``; this
    function never raises for bad input.

    Args:
        list_config: Parsed list configuration.
        diagnostics: Channel receiving the ``invalid_list_config`` event.
        resource_type: Resource kind being ingested.

    Returns:
        True when the resource is a well-formed list with a non-empty title.
    """
    is_valid = (
        resource_type == LIST_RESOURCE_TYPE
        and list_config is not None
        and list_config.error is None
        and bool(list_config.title)
    )
    if not is_valid:
        error = list_config.error if list_config is not None else None
        diagnostics.warning(
            "invalid_list_config",
            error or "Invalid resource list: a non-empty title is required.",
            resource_type=resource_type,
            list_config=_describe(list_config),
        )
    return is_valid


def validate_site(site: SiteConfig, diagnostics: Diagnostics) -> bool:
    """Return whether a site config can be ingested.

    A malformed site is reported once as ``invalid_site_config``.
    """
    if site.error is None:
        return True
    diagnostics.warning("invalid_site_config", site.error, site=site.name)
    return False


def normalize_list_name(list_config: ListConfig) -> str:
    """Return the node name of a list with its first space removed.

    Only the first space is dropped, so ``"Team Member Bios"`` becomes
    ``"TeamMember Bios"``. Existing node type names depend on this.
    """
    name = list_config.custom_node_name or list_config.title
    return name.replace(" ", "", 1)


def canonical_node_type(list_name: str) -> str:
    """Return the node type for a normalized list name."""
    return f"{NODE_TYPE_PREFIX}{list_name}{NODE_TYPE_SUFFIX}"


def image_field_name(field_name: str) -> str:
    """Return the link field name for an image field."""
    return f"{field_name}{IMAGE_FIELD_SUFFIX}"


def _describe(list_config: ListConfig | None) -> object:
    if list_config is None:
        return None
    if list_config.raw:
        return dict(list_config.raw)
    return asdict(list_config)
