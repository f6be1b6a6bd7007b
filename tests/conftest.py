"""
Pytest configuration and shared fixtures.

Provides a mocked provider client, key providers with and without a key, and
handlers/registry built on top of them, so no test touches the network.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from tests.utils.factories import TEST_API_KEY


# ============================================================================
# Credential Fixtures
# ============================================================================


@pytest.fixture
def api_key_provider():
    """Key provider reading from a fixed mapping that holds a key."""
    from stock_market_mcp.credentials import ApiKeyProvider

    return ApiKeyProvider(environ={"ALPHA_VANTAGE_API_KEY": TEST_API_KEY})


@pytest.fixture
def missing_api_key_provider():
    """Key provider reading from an empty mapping."""
    from stock_market_mcp.credentials import ApiKeyProvider

    return ApiKeyProvider(environ={})


# ============================================================================
# Mock Provider Client Fixtures
# ============================================================================


@pytest.fixture
def mock_provider_client() -> MagicMock:
    """Mock Alpha Vantage client; tests set query.return_value / side_effect."""
    from stock_market_mcp.providers.alpha_vantage import AlphaVantageClient

    mock_client = MagicMock(spec=AlphaVantageClient)
    mock_client.query = AsyncMock(return_value={})
    mock_client.close = AsyncMock()
    return mock_client


# ============================================================================
# Handler / Registry Fixtures
# ============================================================================


@pytest.fixture
def handlers(mock_provider_client, api_key_provider):
    """Market-data handlers wired to the mock client."""
    from stock_market_mcp.tools.handlers import MarketDataHandlers

    return MarketDataHandlers(mock_provider_client, api_key_provider)


@pytest.fixture
def handlers_without_key(mock_provider_client, missing_api_key_provider):
    """Handlers whose key provider has no key."""
    from stock_market_mcp.tools.handlers import MarketDataHandlers

    return MarketDataHandlers(mock_provider_client, missing_api_key_provider)


@pytest.fixture
def registry(handlers):
    """Registry with all seven tools registered."""
    from stock_market_mcp.tools.handlers import build_registry

    return build_registry(handlers)
