"""
Tool definitions for the market-data MCP server.

Each ToolDescriptor is an immutable description of one tool: its name, a
human title, a description for the assistant, and its parameters. The JSON
schema published to the host and used for argument validation is derived
from the parameters.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from mcp import types

ParameterType = Literal["string", "number", "integer", "boolean", "array", "object"]


@dataclass(frozen=True)
class ToolParameter:
    """Definition of a tool parameter."""

    name: str
    type: ParameterType
    description: str = ""
    required: bool = True
    # For arrays of objects: the fields of each element
    items: tuple[ToolParameter, ...] = field(default_factory=tuple)

    def to_schema(self) -> dict[str, Any]:
        """JSON schema fragment for this parameter."""
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.type == "array":
            schema["items"] = _object_schema(self.items) if self.items else {}
        return schema


def _object_schema(parameters: tuple[ToolParameter, ...]) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {param.name: param.to_schema() for param in parameters},
        "required": [param.name for param in parameters if param.required],
    }


@dataclass(frozen=True)
class ToolDescriptor:
    """Definition of a tool the host can call."""

    name: str
    title: str
    description: str
    parameters: tuple[ToolParameter, ...] = field(default_factory=tuple)

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema for the tool's argument object."""
        return _object_schema(self.parameters)

    def to_mcp_tool(self) -> types.Tool:
        """Convert to the MCP SDK tool listing type."""
        return types.Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.input_schema,
        )


SYMBOL_PARAMETER = ToolParameter(
    name="symbol",
    type="string",
    description="The stock ticker symbol, e.g., AAPL, MSFT",
)

GET_STOCK_PRICE = ToolDescriptor(
    name="getStockPrice",
    title="Stock Price Tool",
    description="Get the latest stock price for a given ticker symbol using Alpha Vantage API",
    parameters=(SYMBOL_PARAMETER,),
)

GET_STOCK_NEWS = ToolDescriptor(
    name="getStockNews",
    title="Stock News Tool",
    description="Get the latest news for a stock ticker symbol using Alpha Vantage API",
    parameters=(SYMBOL_PARAMETER,),
)

GET_COMPANY_OVERVIEW = ToolDescriptor(
    name="getCompanyOverview",
    title="Company Overview Tool",
    description="Get company information for a given stock ticker symbol using Alpha Vantage API",
    parameters=(SYMBOL_PARAMETER,),
)

GET_DIVIDEND_HISTORY = ToolDescriptor(
    name="getDividendHistory",
    title="Dividend History Tool",
    description="Get recent dividend payout history for a ticker symbol using Alpha Vantage API",
    parameters=(SYMBOL_PARAMETER,),
)

GET_INTRADAY = ToolDescriptor(
    name="getIntraday",
    title="Intraday Price Tool",
    description=(
        "Get recent intraday stock prices (5-minute intervals) for a ticker symbol "
        "using Alpha Vantage API"
    ),
    parameters=(SYMBOL_PARAMETER,),
)

CONVERT_CURRENCY = ToolDescriptor(
    name="convertCurrency",
    title="Currency Conversion Tool",
    description="Convert an amount from one currency to another using latest exchange rate",
    parameters=(
        ToolParameter(
            name="amount",
            type="number",
            description="Amount of money to convert",
        ),
        ToolParameter(
            name="from_currency",
            type="string",
            description="Currency to convert from, e.g., USD",
        ),
        ToolParameter(
            name="to_currency",
            type="string",
            description="Currency to convert to, e.g., EUR",
        ),
    ),
)

CALCULATE_PORTFOLIO_VALUE = ToolDescriptor(
    name="calculatePortfolioValue",
    title="Portfolio Value Calculator",
    description="Calculate total value of a portfolio given holdings",
    parameters=(
        ToolParameter(
            name="holdings",
            type="array",
            description="Array of stock holdings with symbol and shares",
            items=(
                ToolParameter(name="symbol", type="string"),
                ToolParameter(name="shares", type="number"),
            ),
        ),
    ),
)

# All available tools, in listing order
AVAILABLE_TOOLS: tuple[ToolDescriptor, ...] = (
    GET_STOCK_PRICE,
    GET_STOCK_NEWS,
    GET_COMPANY_OVERVIEW,
    GET_DIVIDEND_HISTORY,
    GET_INTRADAY,
    CONVERT_CURRENCY,
    CALCULATE_PORTFOLIO_VALUE,
)
