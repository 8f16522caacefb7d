"""Typed parsing for SharePoint source settings files.

This module loads the YAML settings that declare the tenant host, its
sites, and the lists to ingest. Field descriptors are resolved into
``FieldDescriptor`` values here so the ingest path never inspects raw
configuration shapes. A malformed site or list entry is kept with its
error and rejected later by validation, so one bad entry never blocks
a whole run. Only a malformed settings root fails the load.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping, Sequence, cast

import yaml

from core.constants import DEFAULT_SLUG_FIELD_NAME, SUPPORTED_FIELD_TYPES
from core.errors import SourceConfigError
from core.types import FieldDescriptor, FieldType, ListConfig, SiteConfig, SlugConfig, SourceSettings


def load_source_settings(settings_path: str, default_host: str | None = None) -> SourceSettings:
    """Load and validate a YAML settings file from disk.

    Args:
        settings_path: File path to the YAML settings.
        default_host: Host used when the file does not declare one.

    Returns:
        Fully parsed settings.

    Raises:
        SourceConfigError: If the file is unreadable or has an invalid shape.
    """
    payload = _load_yaml_payload(settings_path)
    return parse_source_settings(payload, default_host)


def parse_source_settings(payload: object, default_host: str | None = None) -> SourceSettings:
    """Parse an already-decoded settings payload.

    Args:
        payload: Decoded settings mapping.
        default_host: Host used when the payload does not declare one.

    Returns:
        Fully parsed settings.

    Raises:
        SourceConfigError: If the payload has an invalid shape.
    """
    root_mapping = _expect_mapping(payload, "settings root")
    host = _optional_string(root_mapping, "host", "settings root") or default_host
    if not host:
        raise SourceConfigError(
            "Settings missing 'host'. Add host: <tenant>.sharepoint.com or set SHAREPOINT_HOST."
        )
    raw_sites = root_mapping.get("sites")
    if raw_sites is None:
        raise SourceConfigError("Settings missing required field 'sites'. Add a list of sites.")
    site_rows = _expect_sequence(raw_sites, "settings sites")
    sites = tuple(_parse_site(row, index) for index, row in enumerate(site_rows))
    return SourceSettings(host=host, sites=sites)


def parse_field_descriptor(value: object, context: str) -> FieldDescriptor:
    """Resolve one configured field into a descriptor.

    Args:
        value: Bare field name or ``{fieldName, fieldType}`` mapping.
        context: Location used in error messages.

    Returns:
        Parsed field descriptor.

    Raises:
        SourceConfigError: If the shape or field type is unsupported.
    """
    if isinstance(value, str):
        name = _expand(value).strip()
        if not name:
            raise SourceConfigError(f"Invalid {context}: field name must not be empty.")
        return FieldDescriptor(name=name)
    if isinstance(value, Mapping):
        mapping = _expect_mapping(value, context)
        name = _optional_string(mapping, "fieldName", context)
        if not name:
            raise SourceConfigError(f"Invalid {context}: 'fieldName' is required.")
        field_type = _optional_string(mapping, "fieldType", context) or "plain"
        if field_type not in SUPPORTED_FIELD_TYPES:
            supported_rows = ", ".join(SUPPORTED_FIELD_TYPES)
            raise SourceConfigError(
                f"Unsupported fieldType '{field_type}' in {context}. Use one of: {supported_rows}."
            )
        return FieldDescriptor(name=name, field_type=cast(FieldType, field_type))
    raise SourceConfigError(
        f"Invalid {context}: expected field name or mapping, got {type(value).__name__}."
    )


def _load_yaml_payload(settings_path: str) -> object:
    settings_file = Path(settings_path).expanduser().resolve()
    if not settings_file.exists():
        raise SourceConfigError(
            f"Settings file does not exist at {settings_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(settings_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise SourceConfigError(
            f"Failed to read settings at {settings_file}: {error}. Check file permissions."
        ) from error
    except yaml.YAMLError as error:
        raise SourceConfigError(
            f"Failed to parse YAML settings at {settings_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        raise SourceConfigError(f"Settings at {settings_file} are empty. Define 'host' and 'sites'.")
    return payload


def _parse_site(value: object, site_index: int) -> SiteConfig:
    context = f"site #{site_index + 1}"
    name = _display_name(value, f"site-{site_index + 1}")
    try:
        mapping = _expect_mapping(value, context)
        relative_path = _optional_string(mapping, "relativePath", context)
        if relative_path is None:
            raise SourceConfigError(f"Invalid {context}: field 'relativePath' is required.")
        raw_lists = mapping.get("lists")
        list_rows = _expect_sequence(raw_lists, f"{context} lists") if raw_lists is not None else ()
    except SourceConfigError as error:
        # Kept so the run reports this site and still ingests its siblings.
        return SiteConfig(name=name, relative_path="", error=str(error))
    lists = tuple(
        _parse_list(row, f"{context} list #{list_index + 1}")
        for list_index, row in enumerate(list_rows)
    )
    return SiteConfig(name=name, relative_path=relative_path.strip("/"), lists=lists)


def _parse_list(value: object, context: str) -> ListConfig:
    if not isinstance(value, Mapping):
        return ListConfig(
            title="",
            raw={"value": value},
            error=f"Invalid {context}: expected object mapping, got {type(value).__name__}.",
        )
    try:
        return _parse_list_mapping(_expect_mapping(value, context), context)
    except SourceConfigError as error:
        raw_title = value.get("title")
        return ListConfig(
            title=str(raw_title).strip() if raw_title is not None else "",
            raw=dict(value),
            error=str(error),
        )


def _parse_list_mapping(mapping: Mapping[str, Any], context: str) -> ListConfig:
    raw_fields = mapping.get("fields")
    field_rows = _expect_sequence(raw_fields, f"{context} fields") if raw_fields is not None else ()
    fields = tuple(
        parse_field_descriptor(row, f"{context} field #{field_index + 1}")
        for field_index, row in enumerate(field_rows)
    )
    return ListConfig(
        title=_optional_string(mapping, "title", context) or "",
        custom_node_name=_optional_string(mapping, "customNodeName", context),
        fields=fields,
        slug=_parse_slug(mapping, context),
        raw=dict(mapping),
    )


def _parse_slug(mapping: Mapping[str, object], context: str) -> SlugConfig | None:
    create_slugs = mapping.get("createSlugs", False)
    if not isinstance(create_slugs, bool):
        raise SourceConfigError(f"Invalid {context}: 'createSlugs' must be true or false.")
    if not create_slugs:
        return None
    raw_template = mapping.get("slugTemplate")
    template_rows = (
        _expect_sequence(raw_template, f"{context} slugTemplate") if raw_template is not None else ()
    )
    template = tuple(_expand(str(token)) for token in template_rows)
    if not template:
        raise SourceConfigError(
            f"Invalid {context}: 'createSlugs' requires a non-empty 'slugTemplate'."
        )
    field_name = _optional_string(mapping, "slugFieldName", context) or DEFAULT_SLUG_FIELD_NAME
    return SlugConfig(template=template, field_name=field_name)


def _expect_mapping(value: object, context: str) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        normalized_mapping = {}
        for key, payload in value.items():
            if not isinstance(key, str):
                raise SourceConfigError(
                    f"Invalid {context}: expected string keys, got {type(key).__name__}."
                )
            normalized_mapping[key] = payload
        return normalized_mapping
    raise SourceConfigError(
        f"Invalid {context}: expected object mapping, got {type(value).__name__}."
    )


def _expect_sequence(value: object, context: str) -> Sequence[object]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return value
    raise SourceConfigError(f"Invalid {context}: expected list, got {type(value).__name__}.")


def _optional_string(mapping: Mapping[str, object], field_name: str, context: str) -> str | None:
    raw_value = mapping.get(field_name)
    if raw_value is None:
        return None
    if isinstance(raw_value, str):
        normalized_value = _expand(raw_value).strip()
        return normalized_value if normalized_value else None
    raise SourceConfigError(f"Invalid {context}: field '{field_name}' must be a string.")


def _expand(value: str) -> str:
    """Expand ``$VAR`` and ``${VAR}`` references from the environment."""
    return os.path.expandvars(value)


def _display_name(value: object, fallback: str) -> str:
    if isinstance(value, Mapping):
        raw_name = value.get("name")
        if isinstance(raw_name, str) and raw_name.strip():
            return _expand(raw_name).strip()
    return fallback
