"""Market-data provider clients and payload models."""

from stock_market_mcp.providers.alpha_vantage import (
    AlphaVantageClient,
    AlphaVantageConnectionError,
    AlphaVantageError,
    AlphaVantageResponseError,
    AlphaVantageStatusError,
    AlphaVantageTimeoutError,
)
from stock_market_mcp.providers.schemas import ProviderData, parse_payload

__all__ = [
    "AlphaVantageClient",
    "AlphaVantageError",
    "AlphaVantageConnectionError",
    "AlphaVantageTimeoutError",
    "AlphaVantageStatusError",
    "AlphaVantageResponseError",
    "ProviderData",
    "parse_payload",
]
