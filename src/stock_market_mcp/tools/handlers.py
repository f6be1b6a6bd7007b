"""
Market-data tool handlers.

Each handler checks its input, fetches the API key, issues the provider
request, parses the payload into a typed model and renders text. The
credential accessor and HTTP client are injected; handlers hold no other
state.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from stock_market_mcp.config import PROVIDER
from stock_market_mcp.credentials import ApiKeyProvider
from stock_market_mcp.errors import (
    InvalidInputError,
    NoDataFoundError,
    UpstreamRequestFailedError,
)
from stock_market_mcp.providers.alpha_vantage import AlphaVantageClient, AlphaVantageError
from stock_market_mcp.providers.schemas import (
    CompanyOverview,
    DividendHistoryResponse,
    ExchangeRateResponse,
    GlobalQuoteResponse,
    IntradayResponse,
    NewsResponse,
    ProviderData,
    ProviderResponse,
    parse_payload,
)
from stock_market_mcp.tools import definitions
from stock_market_mcp.tools.formatting import (
    format_conversion,
    format_dividends,
    format_intraday,
    format_news,
    format_overview,
    format_quote,
)
from stock_market_mcp.tools.portfolio import Holding, PortfolioValuation
from stock_market_mcp.tools.registry import ToolRegistry, ToolResult
from stock_market_mcp.utils.logging import audit_logger

logger = logging.getLogger(__name__)


def _require_symbol(params: dict[str, Any]) -> str:
    symbol = params.get("symbol")
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidInputError("symbol is required")
    return symbol.strip()


class MarketDataHandlers:
    """The seven market-data tools, bound to one client and key provider."""

    def __init__(
        self,
        client: AlphaVantageClient,
        credentials: ApiKeyProvider,
    ) -> None:
        """
        Initialize handlers.

        Args:
            client: Provider HTTP client.
            credentials: API key accessor, consulted on every invocation.
        """
        self._client = client
        self._credentials = credentials

    async def _fetch(
        self,
        function: str,
        model: type[ProviderResponse],
        failure: str,
        api_key: str,
        **params: str,
    ) -> ProviderData[Any]:
        """
        Run one provider query and parse it.

        Raises:
            UpstreamRequestFailedError: With ``failure`` as the message.
        """
        try:
            payload = await self._client.query(function, api_key, **params)
        except AlphaVantageError as e:
            raise UpstreamRequestFailedError(failure) from e

        data = parse_payload(model, payload)
        if data.notice and not data.present:
            audit_logger.log_provider_notice(function, data.notice)
        return data

    async def get_stock_price(self, params: dict[str, Any]) -> ToolResult:
        """Handle getStockPrice."""
        symbol = _require_symbol(params)
        api_key = self._credentials.get_api_key()

        data = await self._fetch(
            "GLOBAL_QUOTE",
            GlobalQuoteResponse,
            f"Failed to get stock price for {symbol}",
            api_key,
            symbol=symbol,
        )
        if not data.present:
            raise NoDataFoundError(f"No price data found for {symbol}")

        return ToolResult.from_text(
            definitions.GET_STOCK_PRICE.name, format_quote(symbol, data.value)
        )

    async def get_stock_news(self, params: dict[str, Any]) -> ToolResult:
        """Handle getStockNews. An empty feed is an answer, not an error."""
        symbol = _require_symbol(params)
        api_key = self._credentials.get_api_key()

        data = await self._fetch(
            "NEWS_SENTIMENT",
            NewsResponse,
            f"Failed to get news for {symbol}",
            api_key,
            tickers=symbol,
        )
        name = definitions.GET_STOCK_NEWS.name
        if not data.present:
            return ToolResult.from_text(name, f"No recent news found for {symbol}")

        return ToolResult.from_text(name, format_news(symbol, data.value))

    async def get_company_overview(self, params: dict[str, Any]) -> ToolResult:
        """Handle getCompanyOverview."""
        symbol = _require_symbol(params)
        api_key = self._credentials.get_api_key()

        data = await self._fetch(
            "OVERVIEW",
            CompanyOverview,
            f"Failed to get company overview for {symbol}",
            api_key,
            symbol=symbol,
        )
        if not data.present:
            raise NoDataFoundError(f"No overview data found for {symbol}")

        return ToolResult.from_text(
            definitions.GET_COMPANY_OVERVIEW.name, format_overview(data.value)
        )

    async def get_dividend_history(self, params: dict[str, Any]) -> ToolResult:
        """Handle getDividendHistory. No history is an answer, not an error."""
        symbol = _require_symbol(params)
        api_key = self._credentials.get_api_key()

        data = await self._fetch(
            "DIVIDEND_HISTORY",
            DividendHistoryResponse,
            f"Failed to get dividend history for {symbol}",
            api_key,
            symbol=symbol,
        )
        name = definitions.GET_DIVIDEND_HISTORY.name
        if not data.present:
            return ToolResult.from_text(name, f"No dividend history found for {symbol}")

        return ToolResult.from_text(name, format_dividends(symbol, data.value))

    async def get_intraday(self, params: dict[str, Any]) -> ToolResult:
        """Handle getIntraday."""
        symbol = _require_symbol(params)
        api_key = self._credentials.get_api_key()

        data = await self._fetch(
            "TIME_SERIES_INTRADAY",
            IntradayResponse,
            f"Failed to get intraday data for {symbol}",
            api_key,
            symbol=symbol,
            interval=PROVIDER.INTRADAY_INTERVAL,
        )
        if not data.present:
            raise NoDataFoundError(f"No intraday data found for {symbol}")

        return ToolResult.from_text(
            definitions.GET_INTRADAY.name, format_intraday(symbol, data.value)
        )

    async def convert_currency(self, params: dict[str, Any]) -> ToolResult:
        """
        Handle convertCurrency.

        Arguments are checked before the credential so malformed input never
        reaches the network.
        """
        amount = params.get("amount")
        if (
            isinstance(amount, bool)
            or not isinstance(amount, (int, float))
            or not math.isfinite(amount)
        ):
            raise InvalidInputError("Amount must be a number")

        from_currency = params.get("from_currency")
        to_currency = params.get("to_currency")
        if not from_currency or not to_currency:
            raise InvalidInputError("from_currency and to_currency are required")

        api_key = self._credentials.get_api_key()

        data = await self._fetch(
            "CURRENCY_EXCHANGE_RATE",
            ExchangeRateResponse,
            f"Failed to get exchange rate from {from_currency} to {to_currency}",
            api_key,
            from_currency=from_currency,
            to_currency=to_currency,
        )
        rate = data.value.rate_value if data.present else None
        if rate is None:
            raise NoDataFoundError("No exchange rate data found")

        return ToolResult.from_text(
            definitions.CONVERT_CURRENCY.name,
            format_conversion(amount, from_currency, to_currency, rate, data.value),
        )

    async def calculate_portfolio_value(self, params: dict[str, Any]) -> ToolResult:
        """
        Handle calculatePortfolioValue.

        Quotes are fetched one holding at a time, in input order. A holding
        that is malformed, fails upstream, or has no price is skipped and the
        rest are still valued.
        """
        api_key = self._credentials.get_api_key()

        holdings = params.get("holdings")
        if not isinstance(holdings, list) or not holdings:
            raise InvalidInputError("holdings must be a non-empty array")

        valuation = PortfolioValuation()
        for raw in holdings:
            valuation = await self._value_holding(valuation, raw, api_key)

        for skipped in valuation.skipped:
            audit_logger.log_holding_skipped(skipped.symbol, skipped.reason)

        return ToolResult.from_text(
            definitions.CALCULATE_PORTFOLIO_VALUE.name, valuation.render()
        )

    async def _value_holding(
        self, valuation: PortfolioValuation, raw: Any, api_key: str
    ) -> PortfolioValuation:
        holding = Holding.from_argument(raw)
        if holding is None:
            symbol = raw.get("symbol") if isinstance(raw, dict) else None
            return valuation.skip(symbol, "missing symbol or shares")

        try:
            data = await self._fetch(
                "GLOBAL_QUOTE",
                GlobalQuoteResponse,
                f"Failed to get stock price for {holding.symbol}",
                api_key,
                symbol=holding.symbol,
            )
        except UpstreamRequestFailedError as e:
            return valuation.skip(holding.symbol, str(e))

        price = data.value.price_value if data.present else None
        if price is None:
            return valuation.skip(holding.symbol, "no price data")

        return valuation.add(holding, price)


def build_registry(handlers: MarketDataHandlers) -> ToolRegistry:
    """Register every market-data tool against its handler."""
    registry = ToolRegistry()
    registry.register(definitions.GET_STOCK_PRICE, handlers.get_stock_price)
    registry.register(definitions.GET_STOCK_NEWS, handlers.get_stock_news)
    registry.register(definitions.GET_COMPANY_OVERVIEW, handlers.get_company_overview)
    registry.register(definitions.GET_DIVIDEND_HISTORY, handlers.get_dividend_history)
    registry.register(definitions.GET_INTRADAY, handlers.get_intraday)
    registry.register(definitions.CONVERT_CURRENCY, handlers.convert_currency)
    registry.register(
        definitions.CALCULATE_PORTFOLIO_VALUE, handlers.calculate_portfolio_value
    )
    return registry
