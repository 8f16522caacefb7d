"""GraphQL type declarations for image field links."""

from __future__ import annotations

from core.diagnostics import Diagnostics
from core.types import ListConfig, SourceSettings
from ingest.naming import (
    canonical_node_type,
    image_field_name,
    normalize_list_name,
    validate_list,
    validate_site,
)


def build_image_type_definitions(
    settings: SourceSettings,
    diagnostics: Diagnostics,
) -> tuple[str, ...]:
    """Declare a ``File`` link for every image field of every valid list.

    Args:
        settings: Parsed source settings.
        diagnostics: Channel receiving invalid list events.

    Returns:
        One SDL type definition per list that declares image fields.
    """
    definitions: list[str] = []
    for site in settings.sites:
        if not validate_site(site, diagnostics):
            continue
        for list_config in site.lists:
            if not validate_list(list_config, diagnostics):
                continue
            definition = _list_type_definition(list_config)
            if definition is not None:
                definitions.append(definition)
    return tuple(definitions)


def _list_type_definition(list_config: ListConfig) -> str | None:
    image_fields = list_config.image_fields
    if not image_fields:
        return None
    node_type = canonical_node_type(normalize_list_name(list_config))
    field_rows = []
    for descriptor in image_fields:
        link_name = image_field_name(descriptor.name)
        field_rows.append(f'  {link_name}: File @link(from: "fields.{link_name}")')
    return "\n".join([f"type {node_type} implements Node {{", *field_rows, "}"])
