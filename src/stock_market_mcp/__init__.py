"""
mcp-stock-market: Alpha Vantage market-data tools for AI assistants.

Exposes stock price, news, company overview, dividend history, intraday,
currency conversion and portfolio valuation tools over the Model Context
Protocol.
"""

__version__ = "1.0.0"
