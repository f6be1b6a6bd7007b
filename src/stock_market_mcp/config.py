"""
Configuration module with frozen dataclasses and hard minimums.

Immutable config with semantic grouping and environment variable overrides.
The upstream API key itself is deliberately not stored here: it is read at
invocation time through stock_market_mcp.credentials.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


def _env_str(name: str, default: str) -> str:
    """Load string from environment variable."""
    return os.getenv(name, default)


def _env_int(name: str, default: int, min_val: int | None = None) -> int:
    """Load int from env with optional hard minimum."""
    try:
        value = int(os.getenv(name, str(default)))
    except ValueError:
        value = default

    if min_val is not None:
        return max(value, min_val)
    return value


def _env_float(name: str, default: float, min_val: float | None = None) -> float:
    """Load float from env with optional hard minimum."""
    try:
        value = float(os.getenv(name, str(default)))
    except ValueError:
        value = default

    if min_val is not None:
        return max(value, min_val)
    return value


@dataclass(frozen=True)
class ProviderConfig:
    """Upstream market-data provider settings."""

    BASE_URL: str = _env_str("ALPHA_VANTAGE_BASE_URL", "https://www.alphavantage.co/query")

    # Name of the variable holding the key, not the key
    API_KEY_ENV: str = "ALPHA_VANTAGE_API_KEY"

    REQUEST_TIMEOUT: float = _env_float("ALPHA_VANTAGE_TIMEOUT", 30.0, min_val=1.0)
    CONNECT_TIMEOUT: float = _env_float("ALPHA_VANTAGE_CONNECT_TIMEOUT", 10.0, min_val=1.0)

    INTRADAY_INTERVAL: str = "5min"


@dataclass(frozen=True)
class OutputLimits:
    """How much of each provider response ends up in tool output."""

    MAX_NEWS_ITEMS: int = 3
    MAX_DIVIDENDS: int = 3
    MAX_INTRADAY_POINTS: int = 3
    DESCRIPTION_MAX_CHARS: int = _env_int("DESCRIPTION_MAX_CHARS", 300, min_val=50)


@dataclass(frozen=True)
class ServerConfig:
    """MCP server configuration."""

    NAME: str = _env_str("MCP_SERVER_NAME", "mcp-stock-market")
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = _env_str("LOG_LEVEL", "INFO")
    LOG_JSON: bool = _env_str("LOG_JSON", "true").lower() == "true"


# Module-level singletons (immutable)
PROVIDER = ProviderConfig()
LIMITS = OutputLimits()
SERVER = ServerConfig()


@lru_cache(maxsize=1)
def get_all_config() -> dict[str, object]:
    """Return all configuration as a dictionary for debugging."""
    return {
        "provider": PROVIDER,
        "limits": LIMITS,
        "server": SERVER,
    }
