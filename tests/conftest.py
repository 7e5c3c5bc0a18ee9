"""
Pytest configuration and shared fixtures
"""

import pytest

from goshippo import ShippoClient
from goshippo.config import Config
from tests.test_helpers import create_test_config


@pytest.fixture
def test_config():
    """Config object with the default Shippo settings"""
    return Config(create_test_config())


@pytest.fixture
def make_client(test_config):
    """
    Build a ShippoClient around a mock agent.

    Usage:
        def test_something(make_client):
            client = make_client(agent, version="2018-02-08")
    """

    def _make(agent, **kwargs):
        kwargs.setdefault("config_obj", test_config)
        return ShippoClient(token="test-token-123", agent=agent, **kwargs)

    return _make


@pytest.fixture
def sample_address():
    """Sample address payload"""
    return {
        "name": "Shawn Ippotle",
        "street1": "215 Clayton St.",
        "city": "San Francisco",
        "state": "CA",
        "zip": "94117",
        "country": "US",
        "email": "shippotle@goshippo.com",
    }
