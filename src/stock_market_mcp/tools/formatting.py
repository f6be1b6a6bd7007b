"""Text rendering for provider data."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from stock_market_mcp.config import LIMITS, PROVIDER
from stock_market_mcp.providers.schemas import (
    CompanyOverview,
    DividendRecord,
    ExchangeRate,
    GlobalQuote,
    IntradayPoint,
    NewsArticle,
)


def format_number(value: Any) -> str:
    """Render a number without a trailing ``.0`` for whole values."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_money(value: float) -> str:
    """Two-decimal rendering used for every monetary figure."""
    return f"{value:.2f}"


def format_quote(symbol: str, quote: GlobalQuote) -> str:
    return (
        f"Stock: {symbol.upper()}\n"
        f"Price: ${quote.price}\n"
        f"Change: {quote.change} ({quote.change_percent})"
    )


def format_news(symbol: str, articles: Sequence[NewsArticle], limit: int | None = None) -> str:
    top = articles[: limit or LIMITS.MAX_NEWS_ITEMS]
    items = "\n\n".join(
        f"{i}. {article.title or ''}\n{article.url or ''}"
        for i, article in enumerate(top, start=1)
    )
    return f"Latest news for {symbol.upper()}:\n\n{items}"


def truncate_description(description: str | None, max_chars: int | None = None) -> str:
    """Cut to ``max_chars`` characters and always append ``...``."""
    return f"{(description or '')[: max_chars or LIMITS.DESCRIPTION_MAX_CHARS]}..."


def format_overview(overview: CompanyOverview, max_chars: int | None = None) -> str:
    return (
        f"Company: {overview.name}\n"
        f"Sector: {overview.sector}\n"
        f"Industry: {overview.industry}\n"
        f"Description: {truncate_description(overview.description, max_chars)}"
    )


def format_dividends(
    symbol: str, records: Sequence[DividendRecord], limit: int | None = None
) -> str:
    # Provider lists most recent first
    recent = records[: limit or LIMITS.MAX_DIVIDENDS]
    lines = "\n".join(f"{r.date}: ${format_number(r.dividend)}" for r in recent)
    return f"Recent dividends for {symbol.upper()}:\n{lines}"


def format_intraday(
    symbol: str, series: Mapping[str, IntradayPoint], limit: int | None = None
) -> str:
    """Render the first points of the series in provider order (newest first)."""
    times = list(series)[: limit or LIMITS.MAX_INTRADAY_POINTS]
    lines = "\n".join(
        f"{ts}: Open ${series[ts].open}, Close ${series[ts].close}" for ts in times
    )
    return (
        f"Recent intraday ({PROVIDER.INTRADAY_INTERVAL}) prices for {symbol.upper()}:\n{lines}"
    )


def format_conversion(
    amount: float,
    from_currency: str,
    to_currency: str,
    rate: float,
    exchange_rate: ExchangeRate,
) -> str:
    converted = amount * rate
    return (
        f"{format_number(amount)} {from_currency.upper()} = "
        f"{format_money(converted)} {to_currency.upper()}\n"
        f"Exchange Rate: {format_number(rate)}\n"
        f"Last Refreshed: {exchange_rate.last_refreshed}"
    )
