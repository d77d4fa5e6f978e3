"""Tests for BridgeConfig."""

import os
from unittest.mock import patch

from passenger_bridge.config import DEFAULT_ALLOWED_ORIGINS, BridgeConfig


class TestBridgeConfig:
    """Test configuration loading and origin resolution."""

    def test_defaults(self):
        config = BridgeConfig()

        assert config.allowed_origins == DEFAULT_ALLOWED_ORIGINS
        assert config.timeout is None
        assert config.log_level == "INFO"
        assert not config.is_complete()

    @patch.dict(os.environ, {
        "ODOO_URL": "https://odoo.test",
        "ODOO_DB": "tours",
        "ODOO_USERNAME": "bridge@example.com",
        "ODOO_API_KEY": "secret-key",
        "ALLOWED_ORIGINS": "https://a.example.com/, https://b.example.com",
        "ODOO_TIMEOUT": "12.5",
        "LOG_LEVEL": "debug",
    }, clear=True)
    def test_from_env(self):
        config = BridgeConfig.from_env()

        assert config.url == "https://odoo.test"
        assert config.db == "tours"
        assert config.username == "bridge@example.com"
        assert config.api_key == "secret-key"
        assert config.allowed_origins == ("https://a.example.com", "https://b.example.com")
        assert config.timeout == 12.5
        assert config.log_level == "DEBUG"
        assert config.is_complete()

    @patch.dict(os.environ, {"ODOO_URL": "https://odoo.test", "ODOO_API_KEY": ""}, clear=True)
    def test_from_env_incomplete(self):
        config = BridgeConfig.from_env()

        assert config.api_key is None
        assert not config.is_complete()

    def test_resolve_origin(self):
        config = BridgeConfig(allowed_origins=("https://a.example.com", "https://b.example.com"))

        assert config.resolve_origin("https://b.example.com") == "https://b.example.com"
        assert config.resolve_origin("https://b.example.com/") == "https://b.example.com"
        assert config.resolve_origin("https://c.example.com") == "https://a.example.com"
        assert config.resolve_origin(None) == "https://a.example.com"

    @patch.dict(os.environ, {
        "ODOO_URL": "https://odoo.test",
        "ODOO_DB": "tours",
        "ODOO_USERNAME": "bridge@example.com",
        "ODOO_API_KEY": "secret-key",
        "ODOO_TIMEOUT": "ten seconds",
    }, clear=True)
    def test_from_env_bad_timeout(self):
        config = BridgeConfig.from_env()

        assert config.timeout is None
        assert config.invalid == ("ODOO_TIMEOUT",)
        assert not config.is_complete()
