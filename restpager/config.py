"""Shared restpager constants and environment-backed settings.

This module centralizes the media type, header names and page size defaults
used by the resolver and the REST transport so the paging runtime can stay
small and focused.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Media type sent as Accept/Content-Type when the caller gives no version
DEFAULT_VERSION = "application/json"

# A page size at or below this value means "let the server decide"
DEFAULT_PAGE_SIZE = 0

# Used when the server does not advertise x-max-page-size
DEFAULT_MAX_PAGE_SIZE = 500

HDR_X_TOTAL_COUNT = "x-total-count"
HDR_X_MAX_PAGE_SIZE = "x-max-page-size"
HDR_CONTENT_TYPE = "Content-Type"
HDR_ACCEPT = "Accept"
HDR_AUTHORIZATION = "Authorization"

# Path prefixes for the proxy and query APIs
API_PATH = "/api"
QAPI_PATH = "/qapi"

DEFAULT_BASE_URL = "https://integrate.example.com"
DEFAULT_TIMEOUT = 30.0


class PagerSettings(BaseSettings):
    """Client settings read from ``RESTPAGER_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="RESTPAGER_", frozen=True)

    base_url: str = DEFAULT_BASE_URL
    api_token: str | None = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    default_version: str = DEFAULT_VERSION
