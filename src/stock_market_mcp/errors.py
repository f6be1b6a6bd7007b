"""
Tool-level exception hierarchy.

Every failure a handler can report to the host is a ToolError subclass with a
stable code. The registry turns these into failed tool results; nothing here is
ever process-fatal.
"""

from __future__ import annotations


class ToolError(RuntimeError):
    """Base exception for tool invocation failures."""

    code: str = "tool_error"


class MissingCredentialError(ToolError):
    """The upstream API key is not configured."""

    code: str = "missing_credential"


class InvalidInputError(ToolError):
    """Malformed or missing tool arguments."""

    code: str = "invalid_input"


class UpstreamRequestFailedError(ToolError):
    """Non-success HTTP status or network failure talking to the provider."""

    code: str = "upstream_request_failed"


class NoDataFoundError(ToolError):
    """The provider answered but the expected fields were absent."""

    code: str = "no_data_found"


class DuplicateToolError(ValueError):
    """A tool name was registered twice."""
