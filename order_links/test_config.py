"""Tests for configuration loading."""

import pytest

from order_links.config import TrackerConfig, load_config, validate_config
from order_links.exceptions import InvalidConfig


def test_defaults():
    config = load_config({})

    assert config == TrackerConfig()
    assert config.api_version == "2024-07"
    assert config.request_timeout == 15
    assert config.port == 3000
    assert config.cors_allowed_origins == ("zendesk.com", "localhost", "github.io")
    assert not config.has_credentials


def test_from_environment():
    config = load_config(
        {
            "SHOPIFY_STORE_DOMAIN": " example.myshopify.com ",
            "SHOPIFY_ADMIN_ACCESS_TOKEN": "shpat_test",
            "REQUEST_TIMEOUT": "7.5",
            "PORT": "8080",
            "CORS_ALLOWED_ORIGINS": "zendesk.com, support.example.com,",
            "LOG_LEVEL": "debug",
            "UNRELATED": "ignored",
        }
    )

    assert config.store_domain == "example.myshopify.com"
    assert config.access_token == "shpat_test"
    assert config.has_credentials
    assert config.request_timeout == 7.5
    assert config.port == 8080
    assert config.cors_allowed_origins == ("zendesk.com", "support.example.com")
    assert config.log_level == "DEBUG"


def test_blank_credentials_are_unset():
    config = load_config({"SHOPIFY_STORE_DOMAIN": "  ", "SHOPIFY_ADMIN_ACCESS_TOKEN": ""})
    assert config.store_domain is None
    assert config.access_token is None


@pytest.mark.parametrize(
    "data",
    [
        {"port": "not-a-port"},
        {"port": 70000},
        {"request_timeout": 0},
        {"log_level": "LOUD"},
        {"unexpected": True},
    ],
)
def test_invalid_values(data):
    with pytest.raises(InvalidConfig):
        validate_config(data)
