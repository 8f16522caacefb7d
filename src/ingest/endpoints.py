"""Graph resource paths for SharePoint lists and assets."""

from __future__ import annotations

from urllib.parse import quote

from core.constants import SITE_ASSETS_LIST_TITLE
from core.types import ListConfig, SiteConfig

# Characters JavaScript's encodeURI leaves untouched beyond quote()'s defaults.
_ENCODE_URI_SAFE = ";,/?:@&=+$!*'()#"


def list_items_endpoint(site: SiteConfig, list_config: ListConfig, host: str) -> str:
    """Return the items collection path of a list."""
    return f"{_site_base(site, host)}/lists/{encode_uri(list_config.title)}/items"


def asset_content_endpoint(site: SiteConfig, asset_item_id: str, host: str) -> str:
    """Return the drive item content path of a Site Assets item."""
    assets_title = encode_uri(SITE_ASSETS_LIST_TITLE)
    return f"{_site_base(site, host)}/lists/{assets_title}/items/{asset_item_id}/driveItem/content"


def encode_uri(value: str) -> str:
    """Percent-encode a path segment the way ``encodeURI`` does."""
    return quote(value, safe=_ENCODE_URI_SAFE)


def _site_base(site: SiteConfig, host: str) -> str:
    return f"/sites/{host}:/{site.relative_path}:"
