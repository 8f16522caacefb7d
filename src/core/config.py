"""Runtime configuration model for the SharePoint source.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from dotenv import load_dotenv

from core.constants import (
    DEFAULT_ASSET_TIMEOUT_SECONDS,
    DEFAULT_DATA_ROOT,
    DEFAULT_ENV_NAME,
    DEFAULT_GRAPH_BASE_URL,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
)
from core.errors import SourceConfigError


@dataclass(frozen=True)
class SourceConfig:
    """Validated runtime configuration.

    Attributes:
        data_root: Local root directory for the persisted content graph.
        graph_base_url: Base URL of the Microsoft Graph REST API.
        access_token: Optional pre-issued bearer token sent with every request.
        host: Default SharePoint host used when the settings file omits one.
        request_timeout: Upper bound in seconds for one list fetch.
        asset_timeout: Upper bound in seconds for one asset download.
    """

    data_root: Path
    graph_base_url: str
    access_token: str | None
    host: str | None
    request_timeout: float
    asset_timeout: float

    @classmethod
    def from_env(cls) -> "SourceConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            SourceConfigError: If environment values are invalid.
        """
        data_root_value = os.getenv("SHAREPOINT_SOURCE_DATA_ROOT", str(DEFAULT_DATA_ROOT))
        graph_base_url = os.getenv("SHAREPOINT_GRAPH_BASE_URL", DEFAULT_GRAPH_BASE_URL)
        return cls(
            data_root=Path(data_root_value).expanduser().resolve(),
            graph_base_url=graph_base_url.rstrip("/"),
            access_token=_optional_env("SHAREPOINT_ACCESS_TOKEN"),
            host=_optional_env("SHAREPOINT_HOST"),
            request_timeout=_parse_timeout(
                "SHAREPOINT_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT_SECONDS
            ),
            asset_timeout=_parse_timeout("SHAREPOINT_ASSET_TIMEOUT", DEFAULT_ASSET_TIMEOUT_SECONDS),
        )


def load_env_files(env_name: str | None = None) -> None:
    """Load ``.env.<name>`` then ``.env`` into the process environment.

    Values already present in the environment are never overridden.

    Args:
        env_name: Environment name; defaults to ``SHAREPOINT_SOURCE_ENV``
            or ``development``.
    """
    resolved_name = env_name or os.getenv("SHAREPOINT_SOURCE_ENV", DEFAULT_ENV_NAME)
    load_dotenv(Path(f".env.{resolved_name}"))
    load_dotenv(Path(".env"))


def _optional_env(name: str) -> str | None:
    raw_value = os.getenv(name, "").strip()
    return raw_value or None


def _parse_timeout(name: str, default: float) -> float:
    """Parse a positive timeout environment value.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset.

    Returns:
        Timeout in seconds.

    Raises:
        SourceConfigError: If value is not a positive number.
    """
    raw_value = os.getenv(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise SourceConfigError(
            f"Invalid {name} value: expected number of seconds, got '{raw_value}'. "
            f"Set {name} to a positive number."
        ) from error
    if timeout <= 0:
        raise SourceConfigError(
            f"Invalid {name} value: expected a positive number, got '{raw_value}'."
        )
    return timeout
