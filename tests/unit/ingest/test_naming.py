"""Unit tests for list validation and naming."""

from __future__ import annotations

from core.diagnostics import Diagnostics
from core.types import ListConfig, SiteConfig
from ingest.naming import (
    canonical_node_type,
    image_field_name,
    normalize_list_name,
    validate_list,
    validate_site,
)


def test_validate_list_accepts_titled_list() -> None:
    """A titled list is valid and produces no diagnostics."""
    diagnostics = Diagnostics()

    assert validate_list(ListConfig(title="Pages"), diagnostics) is True
    assert len(diagnostics) == 0


def test_validate_list_rejects_missing_title_once() -> None:
    """An untitled list is reported exactly once without raising."""
    diagnostics = Diagnostics()
    untitled = ListConfig(title="", raw={"customNodeName": "Untitled"})

    assert validate_list(untitled, diagnostics) is False
    events = diagnostics.events("invalid_list_config")
    assert len(events) == 1
    assert events[0].context["list_config"] == {"customNodeName": "Untitled"}


def test_validate_list_rejects_list_with_settings_error() -> None:
    """A titled list that failed settings parsing is reported with its error."""
    diagnostics = Diagnostics()
    broken = ListConfig(title="Pages", error="Unsupported fieldType 'video'.")

    assert validate_list(broken, diagnostics) is False
    events = diagnostics.events("invalid_list_config")
    assert [event.message for event in events] == ["Unsupported fieldType 'video'."]


def test_validate_site_reports_malformed_site_once() -> None:
    """Malformed sites are reported and well-formed ones pass silently."""
    diagnostics = Diagnostics()
    broken = SiteConfig(name="Careers", relative_path="", error="relativePath is required.")

    assert validate_site(SiteConfig(name="Hub", relative_path="sites/hub"), diagnostics) is True
    assert validate_site(broken, diagnostics) is False
    events = diagnostics.events()
    assert [event.kind for event in events] == ["invalid_site_config"]
    assert events[0].context == {"site": "Careers"}


def test_validate_list_rejects_other_resource_types() -> None:
    """Only list resources can be validated as lists."""
    diagnostics = Diagnostics()

    assert validate_list(ListConfig(title="Pages"), diagnostics, resource_type="drive") is False


def test_normalize_list_name_removes_only_first_space() -> None:
    """Only the first space of the name is removed."""
    assert normalize_list_name(ListConfig(title="Team Member Bios")) == "TeamMember Bios"


def test_normalize_list_name_prefers_custom_node_name() -> None:
    """Custom node names override the list title."""
    config = ListConfig(title="Open Vacancies", custom_node_name="Jobs")

    assert normalize_list_name(config) == "Jobs"


def test_canonical_node_type_is_stable() -> None:
    """Node types wrap the list name and repeat identically."""
    assert canonical_node_type("Pages") == "SharePointPagesList"
    assert canonical_node_type("Pages") == canonical_node_type("Pages")


def test_image_field_name_appends_suffix() -> None:
    """Image link fields carry the Image suffix."""
    assert image_field_name("SEOImage") == "SEOImageImage"
