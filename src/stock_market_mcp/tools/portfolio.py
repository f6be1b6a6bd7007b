"""
Portfolio valuation as an explicit skip-and-continue fold.

``PortfolioValuation`` is immutable; ``add`` and ``skip`` return a new
valuation. Skipped holdings contribute neither a line nor a value. The total
is the sum of unrounded per-holding values and is rounded only when rendered.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from stock_market_mcp.tools.formatting import format_money, format_number


@dataclass(frozen=True)
class Holding:
    """A position supplied by the caller."""

    symbol: str
    shares: float

    @classmethod
    def from_argument(cls, raw: Any) -> Holding | None:
        """
        Build a holding from one element of the ``holdings`` argument.

        Returns None when the symbol is missing/blank or shares is missing,
        zero or not a number.
        """
        if not isinstance(raw, Mapping):
            return None

        symbol = raw.get("symbol")
        shares = raw.get("shares")

        if not isinstance(symbol, str) or not symbol.strip():
            return None
        if isinstance(shares, bool) or not isinstance(shares, (int, float)) or not shares:
            return None

        return cls(symbol=symbol.strip(), shares=shares)


@dataclass(frozen=True)
class HoldingValuation:
    holding: Holding
    price: float

    @property
    def value(self) -> float:
        return self.price * self.holding.shares

    def render(self) -> str:
        return (
            f"{format_number(self.holding.shares)} shares of {self.holding.symbol.upper()} "
            f"at ${format_money(self.price)} = ${format_money(self.value)}"
        )


@dataclass(frozen=True)
class SkippedHolding:
    symbol: str | None
    reason: str


@dataclass(frozen=True)
class PortfolioValuation:
    valued: tuple[HoldingValuation, ...] = field(default_factory=tuple)
    skipped: tuple[SkippedHolding, ...] = field(default_factory=tuple)

    def add(self, holding: Holding, price: float) -> PortfolioValuation:
        return replace(self, valued=self.valued + (HoldingValuation(holding, price),))

    def skip(self, symbol: str | None, reason: str) -> PortfolioValuation:
        return replace(self, skipped=self.skipped + (SkippedHolding(symbol, reason),))

    @property
    def total(self) -> float:
        return sum(v.value for v in self.valued)

    def render(self) -> str:
        details = "\n".join(v.render() for v in self.valued)
        return f"Portfolio Value:\n{details}\n\nTotal Estimated Value: ${format_money(self.total)}"
