"""
Integration tests for the MCP server.

Drives the real server through the SDK's in-memory client session with the
provider client mocked out.
"""

import pytest
from mcp import types
from mcp.shared.memory import create_connected_server_and_client_session

from stock_market_mcp.server import ToolCallFailed, create_server, handle_call_tool, list_mcp_tools
from stock_market_mcp.tools.definitions import AVAILABLE_TOOLS
from stock_market_mcp.tools.handlers import MarketDataHandlers, build_registry
from tests.utils.factories import PayloadFactory, query_by_symbol


class TestServerHelpers:
    def test_create_server_registers_tool_handlers(self, registry):
        server = create_server(registry)

        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    def test_list_mcp_tools(self, registry):
        tools = list_mcp_tools(registry)

        assert [t.name for t in tools] == [t.name for t in AVAILABLE_TOOLS]
        assert all(t.inputSchema["type"] == "object" for t in tools)

    @pytest.mark.asyncio
    async def test_handle_call_tool_success(self, registry, mock_provider_client):
        mock_provider_client.query.return_value = PayloadFactory.quote()

        content = await handle_call_tool(registry, "getStockPrice", {"symbol": "AAPL"})

        assert len(content) == 1
        assert content[0].type == "text"
        assert content[0].text.startswith("Stock: AAPL")

    @pytest.mark.asyncio
    async def test_handle_call_tool_failure_raises(self, registry, mock_provider_client):
        mock_provider_client.query.return_value = PayloadFactory.empty_quote()

        with pytest.raises(ToolCallFailed) as exc_info:
            await handle_call_tool(registry, "getStockPrice", {"symbol": "ZZZZ"})

        assert str(exc_info.value) == "No price data found for ZZZZ"

    @pytest.mark.asyncio
    async def test_handle_call_tool_none_arguments(self, registry):
        with pytest.raises(ToolCallFailed) as exc_info:
            await handle_call_tool(registry, "getStockPrice", None)

        assert "symbol" in str(exc_info.value)


class TestMcpSession:
    """End-to-end over the MCP protocol."""

    @pytest.mark.asyncio
    async def test_list_tools(self, registry):
        async with create_connected_server_and_client_session(create_server(registry)) as client:
            listed = await client.list_tools()

        names = {t.name for t in listed.tools}
        assert names == {t.name for t in AVAILABLE_TOOLS}

    @pytest.mark.asyncio
    async def test_call_tool(self, registry, mock_provider_client):
        mock_provider_client.query.return_value = PayloadFactory.news(1)

        async with create_connected_server_and_client_session(create_server(registry)) as client:
            result = await client.call_tool("getStockNews", {"symbol": "nvda"})

        assert result.isError is False
        assert result.content[0].text == (
            "Latest news for NVDA:\n\n1. Headline 1\nhttps://news.example.com/1"
        )

    @pytest.mark.asyncio
    async def test_portfolio_partial_failure(self, registry, mock_provider_client):
        mock_provider_client.query.side_effect = query_by_symbol(
            {"AAPL": PayloadFactory.quote(price="123.4")}
        )

        async with create_connected_server_and_client_session(create_server(registry)) as client:
            result = await client.call_tool(
                "calculatePortfolioValue",
                {"holdings": [{"symbol": "AAPL", "shares": 3}, {"symbol": "BAD", "shares": 5}]},
            )

        assert result.isError is False
        text = result.content[0].text
        assert "3 shares of AAPL at $123.40 = $370.20" in text
        assert "BAD" not in text
        assert text.endswith("Total Estimated Value: $370.20")

    @pytest.mark.asyncio
    async def test_missing_key_is_error_result(self, mock_provider_client, missing_api_key_provider):
        registry = build_registry(MarketDataHandlers(mock_provider_client, missing_api_key_provider))

        async with create_connected_server_and_client_session(create_server(registry)) as client:
            result = await client.call_tool("getCompanyOverview", {"symbol": "AAPL"})
            # The server keeps serving after a failed invocation
            listed = await client.list_tools()

        assert result.isError is True
        assert "ALPHA_VANTAGE_API_KEY" in result.content[0].text
        assert len(listed.tools) == len(AVAILABLE_TOOLS)
        mock_provider_client.query.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_tool_is_error_result(self, registry):
        async with create_connected_server_and_client_session(create_server(registry)) as client:
            result = await client.call_tool("getCryptoPrice", {"symbol": "BTC"})

        assert result.isError is True
        assert "getCryptoPrice" in result.content[0].text
