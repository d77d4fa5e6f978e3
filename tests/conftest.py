"""Shared fixtures for the passenger bridge tests."""

from unittest.mock import MagicMock

import pytest

from passenger_bridge import BridgeConfig, PassengerHandler


@pytest.fixture
def config():
    return BridgeConfig(
        url="https://odoo.test",
        db="tours",
        username="bridge@example.com",
        api_key="secret-key",
        allowed_origins=("https://forms.example.com", "https://www.example.com"),
    )


@pytest.fixture
def client():
    """Odoo client double that authenticates as uid 7 and finds nothing."""
    mock = MagicMock()
    mock.authenticate.return_value = 7
    mock.search_read.return_value = []
    mock.write.return_value = True
    return mock


@pytest.fixture
def handler(config, client):
    return PassengerHandler(config, client)
