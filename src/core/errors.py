"""SharePoint source exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each stage of an ingestion run raises a specific error type.
"""

from __future__ import annotations


class SourceError(Exception):
    """Base exception for all SharePoint source failures."""


class SourceConfigError(SourceError):
    """Raised for invalid runtime configuration or settings files."""


class SourceTransportError(SourceError):
    """Raised when a remote list or asset request fails."""


class SourceParseError(SourceError):
    """Raised when a record field value cannot be decoded."""


class SourceStoreError(SourceError):
    """Raised for node and file persistence failures."""
