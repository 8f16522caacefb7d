"""Core constants used across SharePoint source modules.

This module centralizes naming conventions, defaults, and file layout.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_DATA_ROOT = Path(".sharepoint-source")
DEFAULT_GRAPH_BASE_URL = "https://graph.microsoft.com/v1.0"
DEFAULT_ENV_NAME = "development"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
DEFAULT_ASSET_TIMEOUT_SECONDS = 60.0
NODES_DIR_NAME = "nodes"
NODES_FILE_NAME = "nodes.jsonl"
FILES_DIR_NAME = "files"
HASH_ALGORITHM = "sha256"
LIST_RESOURCE_TYPE = "list"
SITE_ASSETS_LIST_TITLE = "Site Assets"
NODE_TYPE_PREFIX = "SharePoint"
NODE_TYPE_SUFFIX = "List"
IMAGE_FIELD_SUFFIX = "Image"
FILE_NODE_TYPE = "File"
DEFAULT_SLUG_FIELD_NAME = "slug"
SELECT_ALL_FIELDS_CLAUSE = "fields"
FIELD_EXPAND_PARAM = "$expand"
PLAIN_FIELD_TYPE = "plain"
IMAGE_FIELD_TYPE = "image"
SUPPORTED_FIELD_TYPES = (PLAIN_FIELD_TYPE, IMAGE_FIELD_TYPE)
DEFAULT_FILE_EXTENSION = ".bin"
