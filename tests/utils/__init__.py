"""Test utilities and helpers for stock_market_mcp tests."""

from tests.utils.factories import PayloadFactory, query_by_symbol

__all__ = [
    "PayloadFactory",
    "query_by_symbol",
]
