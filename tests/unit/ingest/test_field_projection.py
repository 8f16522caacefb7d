"""Unit tests for field projection."""

from __future__ import annotations

from core.types import FieldDescriptor
from ingest.field_projection import project_fields


def test_project_fields_names_every_descriptor() -> None:
    """Plain and typed descriptors both reduce to their field name."""
    clause = project_fields([FieldDescriptor("Title"), FieldDescriptor("Subtitle", "plain")])

    assert clause == "fields($select=Title,Subtitle)"


def test_project_fields_includes_image_fields() -> None:
    """Image fields are selected like any other field."""
    clause = project_fields([FieldDescriptor("Title"), FieldDescriptor("SEOImage", "image")])

    assert clause == "fields($select=Title,SEOImage)"


def test_project_fields_selects_all_when_empty() -> None:
    """No declared fields means all fields, never an empty select."""
    assert project_fields([]) == "fields"
    assert project_fields(None) == "fields"
