"""
Tools module for the market-data MCP server.

Provides the tool descriptors, the registry that validates and dispatches
invocations, and the Alpha Vantage backed handlers.
"""

from stock_market_mcp.tools.definitions import AVAILABLE_TOOLS, ToolDescriptor, ToolParameter
from stock_market_mcp.tools.handlers import MarketDataHandlers, build_registry
from stock_market_mcp.tools.registry import (
    TextContent,
    ToolInvocation,
    ToolRegistry,
    ToolResult,
)

__all__ = [
    "AVAILABLE_TOOLS",
    "ToolDescriptor",
    "ToolParameter",
    "MarketDataHandlers",
    "build_registry",
    "TextContent",
    "ToolInvocation",
    "ToolRegistry",
    "ToolResult",
]
