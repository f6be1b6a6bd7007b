"""
Typed views over Alpha Vantage JSON payloads.

Field names on the wire are kept as aliases ("05. price", "Global Quote", ...).
Every response model exposes ``content()``, returning the useful part of the
payload or None when the provider's "data present" indicator is missing.
``parse_payload`` is the single place where that absence becomes a typed
ProviderData outcome.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def parse_float(value: Any) -> float | None:
    """Parse a provider number (usually sent as a string) or return None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class ProviderModel(BaseModel):
    """Base for provider payload fragments."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", coerce_numbers_to_str=True)


class ProviderResponse(ProviderModel):
    """Top-level payload, including the fields Alpha Vantage uses for notices."""

    note: str | None = Field(None, alias="Note")
    information: str | None = Field(None, alias="Information")
    error_message: str | None = Field(None, alias="Error Message")

    @property
    def notice(self) -> str | None:
        """Provider-side message such as a rate-limit warning."""
        return self.error_message or self.note or self.information

    def content(self) -> Any:
        raise NotImplementedError


# GLOBAL_QUOTE


class GlobalQuote(ProviderModel):
    symbol: str | None = Field(None, alias="01. symbol")
    price: str | None = Field(None, alias="05. price")
    change: str | None = Field(None, alias="09. change")
    change_percent: str | None = Field(None, alias="10. change percent")

    @property
    def price_value(self) -> float | None:
        return parse_float(self.price)


class GlobalQuoteResponse(ProviderResponse):
    quote: GlobalQuote | None = Field(None, alias="Global Quote")

    def content(self) -> GlobalQuote | None:
        if self.quote is None or not self.quote.price:
            return None
        return self.quote


# NEWS_SENTIMENT


class NewsArticle(ProviderModel):
    title: str | None = None
    url: str | None = None


class NewsResponse(ProviderResponse):
    feed: list[NewsArticle] = Field(default_factory=list)

    def content(self) -> list[NewsArticle] | None:
        return self.feed or None


# OVERVIEW


class CompanyOverview(ProviderResponse):
    """OVERVIEW puts the company fields at the top level of the payload."""

    name: str | None = Field(None, alias="Name")
    sector: str | None = Field(None, alias="Sector")
    industry: str | None = Field(None, alias="Industry")
    description: str | None = Field(None, alias="Description")

    def content(self) -> CompanyOverview | None:
        return self if self.name else None


# DIVIDEND_HISTORY


class DividendRecord(ProviderModel):
    date: str = ""
    dividend: float | str | None = None


class DividendHistoryResponse(ProviderResponse):
    historical: list[DividendRecord] = Field(default_factory=list)

    def content(self) -> list[DividendRecord] | None:
        return self.historical or None


# TIME_SERIES_INTRADAY


class IntradayPoint(ProviderModel):
    open: str | None = Field(None, alias="1. open")
    high: str | None = Field(None, alias="2. high")
    low: str | None = Field(None, alias="3. low")
    close: str | None = Field(None, alias="4. close")
    volume: str | None = Field(None, alias="5. volume")


class IntradayResponse(ProviderResponse):
    # Key embeds the interval; only 5min is requested
    series: dict[str, IntradayPoint] | None = Field(None, alias="Time Series (5min)")

    def content(self) -> dict[str, IntradayPoint] | None:
        return self.series or None


# CURRENCY_EXCHANGE_RATE


class ExchangeRate(ProviderModel):
    from_code: str | None = Field(None, alias="1. From_Currency Code")
    to_code: str | None = Field(None, alias="3. To_Currency Code")
    rate: str | None = Field(None, alias="5. Exchange Rate")
    last_refreshed: str | None = Field(None, alias="6. Last Refreshed")

    @property
    def rate_value(self) -> float | None:
        return parse_float(self.rate)


class ExchangeRateResponse(ProviderResponse):
    exchange_rate: ExchangeRate | None = Field(None, alias="Realtime Currency Exchange Rate")

    def content(self) -> ExchangeRate | None:
        return self.exchange_rate


@dataclass(frozen=True)
class ProviderData(Generic[T]):
    """Outcome of parsing one provider payload."""

    value: T | None
    notice: str | None = None

    @property
    def present(self) -> bool:
        return self.value is not None


def parse_payload(model: type[ProviderResponse], payload: dict[str, Any]) -> ProviderData[Any]:
    """
    Validate a payload against a response model.

    A payload whose shape does not match the model (e.g. ``feed`` is not a
    list) is treated the same as one where the data is absent.

    Args:
        model: ProviderResponse subclass for the called function.
        payload: Decoded JSON object.

    Returns:
        ProviderData with the extracted content, or value=None.
    """
    try:
        response = model.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Unexpected {model.__name__} payload shape: {e.error_count()} error(s)")
        return ProviderData(value=None)

    return ProviderData(value=response.content(), notice=response.notice)
