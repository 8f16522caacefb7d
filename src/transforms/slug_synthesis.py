"""Slug synthesis transform.

This module builds URL-safe slugs from templated record field values.
It runs before node emission so the slug is part of the node digest.
"""

from __future__ import annotations

import re
from typing import Any, Mapping, Sequence

_NON_SLUG_CHARACTERS = re.compile(r"[^\w\s-]", re.ASCII)
_SEPARATOR_RUNS = re.compile(r"[\s_-]+", re.ASCII)
_EDGE_HYPHENS = re.compile(r"^-+|-+$")


def build_slug(fields: Mapping[str, Any], template: Sequence[str]) -> str:
    """Build a slug from record fields named by a template.

    Args:
        fields: Record field mapping.
        template: Ordered field names; a missing or empty field
            contributes the template token itself.

    Returns:
        Slug-cased identifier.
    """
    parts = [_template_value(fields, token) for token in template]
    return slugify("-".join(parts))


def slugify(text: str) -> str:
    """Convert free text into a lower-case hyphenated slug.

    Args:
        text: Raw text.

    Returns:
        ASCII-only text with other characters removed and separators
        collapsed.
    """
    slug = text.lower().strip()
    slug = _NON_SLUG_CHARACTERS.sub("", slug)
    slug = _SEPARATOR_RUNS.sub("-", slug)
    return _EDGE_HYPHENS.sub("", slug)


def _template_value(fields: Mapping[str, Any], token: str) -> str:
    value = fields.get(token)
    if value is None or value == "":
        return token
    return str(value)
