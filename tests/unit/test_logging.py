"""Tests for logging utilities."""

import json
import logging
import sys

from stock_market_mcp.utils.logging import (
    AuditLogger,
    JSONFormatter,
    generate_invocation_id,
    invocation_id_var,
    setup_logging,
)


def _record(message: str = "hello", **attrs) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, message, None, None)
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "hello"
        assert "timestamp" in data
        assert "invocation_id" not in data

    def test_includes_invocation_id(self):
        token = invocation_id_var.set("inv-1")
        try:
            data = json.loads(JSONFormatter().format(_record()))
        finally:
            invocation_id_var.reset(token)

        assert data["invocation_id"] == "inv-1"

    def test_merges_extra_data(self):
        data = json.loads(JSONFormatter().format(_record(extra_data={"event": "x", "n": 2})))

        assert data["event"] == "x"
        assert data["n"] == 2


def test_generate_invocation_id_unique():
    assert generate_invocation_id() != generate_invocation_id()


def test_setup_logging_writes_to_stderr():
    """stdout is reserved for the MCP channel."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        setup_logging(level="DEBUG", json_format=False)

        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr
        assert root.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)


class TestAuditLogger:
    def test_tool_execution_event(self, caplog):
        with caplog.at_level("INFO", logger="stock_market_mcp.audit"):
            AuditLogger().log_tool_execution("getStockPrice", False, 12.345, "no_data_found")

        record = caplog.records[-1]
        assert record.extra_data["event"] == "tool_execution"
        assert record.extra_data["error_code"] == "no_data_found"
        assert record.extra_data["duration_ms"] == 12.35

    def test_holding_skipped_event(self, caplog):
        with caplog.at_level("INFO", logger="stock_market_mcp.audit"):
            AuditLogger().log_holding_skipped("BAD", "no price data")

        assert caplog.records[-1].extra_data == {
            "event": "holding_skipped",
            "symbol": "BAD",
            "reason": "no price data",
        }
