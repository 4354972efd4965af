"""Configuration for the order tracking links service."""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

import voluptuous as vol

from .const import (
    CONF_ACCESS_TOKEN,
    CONF_API_VERSION,
    CONF_CORS_ALLOWED_ORIGINS,
    CONF_HOST,
    CONF_LOG_LEVEL,
    CONF_PORT,
    CONF_REQUEST_TIMEOUT,
    CONF_STORE_DOMAIN,
    DEFAULT_CORS_ALLOWED_ORIGINS,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
    ENV_VARS,
    SHOPIFY_DEFAULT_API_VERSION,
)
from .exceptions import InvalidConfig

_LOGGER = logging.getLogger(__name__)


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _comma_list(value: Any) -> Tuple[str, ...]:
    if isinstance(value, str):
        value = value.split(",")
    return tuple(item.strip() for item in value if item and item.strip())


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_STORE_DOMAIN, default=None): _blank_to_none,
        vol.Optional(CONF_ACCESS_TOKEN, default=None): _blank_to_none,
        vol.Optional(CONF_API_VERSION, default=SHOPIFY_DEFAULT_API_VERSION): vol.All(
            str, vol.Strip, vol.Length(min=1)
        ),
        vol.Optional(CONF_REQUEST_TIMEOUT, default=DEFAULT_REQUEST_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional(CONF_HOST, default=DEFAULT_HOST): vol.All(str, vol.Strip, vol.Length(min=1)),
        vol.Optional(CONF_PORT, default=DEFAULT_PORT): vol.All(
            vol.Coerce(int), vol.Range(min=1, max=65535)
        ),
        vol.Optional(
            CONF_CORS_ALLOWED_ORIGINS, default=list(DEFAULT_CORS_ALLOWED_ORIGINS)
        ): _comma_list,
        vol.Optional(CONF_LOG_LEVEL, default=DEFAULT_LOG_LEVEL): vol.All(
            str,
            vol.Strip,
            vol.Upper,
            vol.In(["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]),
        ),
    }
)


@dataclass(frozen=True)
class TrackerConfig:
    """Validated service settings."""

    store_domain: Optional[str] = None
    access_token: Optional[str] = None
    api_version: str = SHOPIFY_DEFAULT_API_VERSION
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_allowed_origins: Tuple[str, ...] = DEFAULT_CORS_ALLOWED_ORIGINS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_credentials(self) -> bool:
        """Whether both Shopify credentials are configured."""
        return bool(self.store_domain and self.access_token)


def validate_config(data: Dict[str, Any]) -> TrackerConfig:
    """Validate raw settings against CONFIG_SCHEMA.

    Raises:
        InvalidConfig: If any value fails validation
    """
    try:
        validated = CONFIG_SCHEMA(data)
    except vol.Invalid as err:
        raise InvalidConfig(f"Invalid configuration: {err}") from err
    return TrackerConfig(**validated)


def load_config(environ: Optional[Mapping[str, str]] = None) -> TrackerConfig:
    """Load settings from environment variables.

    Credentials may be missing; lookups then fail with ProviderError.
    """
    environ = os.environ if environ is None else environ
    data = {key: environ[var] for key, var in ENV_VARS.items() if var in environ}
    config = validate_config(data)
    if not config.has_credentials:
        _LOGGER.warning("Shopify credentials are not configured; lookups will fail")
    return config
