"""
Structured logging utilities.

Provides JSON logging with invocation ID propagation. Logs always go to
stderr: stdout is the MCP stdio channel and must carry protocol frames only.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

from stock_market_mcp.config import SERVER

# Context variable for invocation ID propagation
invocation_id_var: ContextVar[str] = ContextVar("invocation_id", default="")


def generate_invocation_id() -> str:
    """Generate a unique invocation ID."""
    return str(uuid.uuid4())


class JSONFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        invocation_id = invocation_id_var.get()
        if invocation_id:
            log_data["invocation_id"] = invocation_id

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str | None = None,
    json_format: bool | None = None,
) -> None:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config.
        json_format: Whether to use JSON formatting. Defaults to config.
    """
    log_level = getattr(logging, (level or SERVER.LOG_LEVEL).upper(), logging.INFO)
    use_json = SERVER.LOG_JSON if json_format is None else json_format

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)

    if use_json:
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
        )

    root_logger.addHandler(console_handler)

    # Set third-party loggers to WARNING
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class AuditLogger:
    """
    Logger for tool and upstream events.

    Every event is emitted as a structured record under
    ``stock_market_mcp.audit``. The API key never appears in any field.
    """

    def __init__(self) -> None:
        """Initialize audit logger."""
        self._logger = logging.getLogger("stock_market_mcp.audit")

    def log_tool_execution(
        self,
        tool_name: str,
        success: bool,
        duration_ms: float,
        error_code: str | None = None,
    ) -> None:
        """
        Log completion of a tool invocation.

        Args:
            tool_name: Name of the tool executed.
            success: Whether the invocation succeeded.
            duration_ms: Wall time spent in the handler.
            error_code: ToolError code if it failed.
        """
        self._logger.info(
            "Tool executed",
            extra={
                "extra_data": {
                    "event": "tool_execution",
                    "tool_name": tool_name,
                    "success": success,
                    "duration_ms": round(duration_ms, 2),
                    "error_code": error_code,
                }
            },
        )

    def log_upstream_call(
        self,
        operation: str,
        params: dict[str, Any],
        status_code: int | None,
        duration_ms: float,
        success: bool,
        error: str | None = None,
    ) -> None:
        """
        Log one HTTP call to the market-data provider.

        Args:
            operation: Provider function code (GLOBAL_QUOTE, OVERVIEW, ...).
            params: Query parameters excluding the API key.
            status_code: HTTP status, or None if no response arrived.
            duration_ms: Call duration in milliseconds.
            success: Whether a JSON object was obtained.
            error: Error message if failed.
        """
        self._logger.info(
            "Upstream call completed",
            extra={
                "extra_data": {
                    "event": "upstream_call",
                    "operation": operation,
                    "params": params,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                    "success": success,
                    "error": error,
                }
            },
        )

    def log_holding_skipped(self, symbol: str | None, reason: str) -> None:
        """Log a portfolio holding excluded from valuation."""
        self._logger.info(
            "Holding skipped",
            extra={
                "extra_data": {
                    "event": "holding_skipped",
                    "symbol": symbol,
                    "reason": reason,
                }
            },
        )

    def log_provider_notice(self, operation: str, notice: str) -> None:
        """
        Log an informational message returned by the provider.

        Alpha Vantage answers throttled or malformed calls with HTTP 200 and a
        ``Note``/``Information``/``Error Message`` field instead of data.
        """
        self._logger.warning(
            "Provider notice",
            extra={
                "extra_data": {
                    "event": "provider_notice",
                    "operation": operation,
                    "notice": notice[:300],
                }
            },
        )


# Module-level audit logger instance
audit_logger = AuditLogger()
