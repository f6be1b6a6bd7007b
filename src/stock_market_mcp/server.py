"""
MCP Server

Main entry point. Attaches the tool registry to an MCP stdio channel and runs
until the host closes it.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from stock_market_mcp.config import SERVER
from stock_market_mcp.credentials import ApiKeyProvider
from stock_market_mcp.providers.alpha_vantage import AlphaVantageClient
from stock_market_mcp.tools.handlers import MarketDataHandlers, build_registry
from stock_market_mcp.tools.registry import ToolInvocation, ToolRegistry
from stock_market_mcp.utils.logging import setup_logging

logger = logging.getLogger(__name__)


class ToolCallFailed(RuntimeError):
    """Raised to make the SDK report a failed tool result (isError=True)."""


def list_mcp_tools(registry: ToolRegistry) -> list[types.Tool]:
    """Registered descriptors in MCP listing form."""
    return [descriptor.to_mcp_tool() for descriptor in registry.descriptors]


async def handle_call_tool(
    registry: ToolRegistry, name: str, arguments: dict[str, Any] | None
) -> list[types.TextContent]:
    """
    Dispatch one MCP tools/call request.

    Raises:
        ToolCallFailed: If the registry produced a failed result. The SDK turns
            the exception message into an error result for the host.
    """
    result = await registry.dispatch(ToolInvocation(tool_name=name, arguments=arguments or {}))
    if result.is_error:
        raise ToolCallFailed(result.text)
    return [types.TextContent(type="text", text=block.text) for block in result.content]


def create_server(registry: ToolRegistry) -> Server:
    """Build the MCP server around a populated registry."""
    server: Server = Server(SERVER.NAME, version=SERVER.VERSION)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return list_mcp_tools(registry)

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any]) -> list[types.TextContent]:
        return await handle_call_tool(registry, name, arguments)

    return server


async def serve() -> None:
    """Run the server on stdio until the host disconnects."""
    async with AlphaVantageClient() as client:
        registry = build_registry(MarketDataHandlers(client, ApiKeyProvider()))
        server = create_server(registry)
        logger.info(f"Starting {SERVER.NAME} {SERVER.VERSION} with {len(registry)} tools")

        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )

    logger.info("Channel closed, shutting down")


def run() -> None:
    """Console script entry point."""
    setup_logging()
    asyncio.run(serve())


if __name__ == "__main__":
    run()
