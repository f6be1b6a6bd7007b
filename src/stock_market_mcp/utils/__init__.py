"""Utility modules."""

from stock_market_mcp.utils.logging import audit_logger, setup_logging

__all__ = [
    "audit_logger",
    "setup_logging",
]
