"""Allow ``python -m stock_market_mcp``."""

from stock_market_mcp.server import run

run()
