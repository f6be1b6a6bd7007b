"""
Tool registry: registration, argument validation and dispatch.

Handlers are async callables taking the validated argument mapping and
returning a ToolResult. The registry never lets a handler failure escape:
every invocation produces a ToolResult, successful or not.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from jsonschema import Draft7Validator

from stock_market_mcp.errors import DuplicateToolError, InvalidInputError, ToolError
from stock_market_mcp.tools.definitions import ToolDescriptor
from stock_market_mcp.utils.logging import (
    audit_logger,
    generate_invocation_id,
    invocation_id_var,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolInvocation:
    """One request to run a tool."""

    tool_name: str
    arguments: Mapping[str, Any] = field(default_factory=dict)
    invocation_id: str = field(default_factory=generate_invocation_id)


@dataclass(frozen=True)
class TextContent:
    """A text block of a tool result."""

    text: str
    type: Literal["text"] = "text"


@dataclass(frozen=True)
class ToolResult:
    """Result of executing a tool."""

    tool_name: str
    content: tuple[TextContent, ...]
    is_error: bool = False
    error_code: str | None = None

    def __post_init__(self) -> None:
        if not self.content:
            raise ValueError("ToolResult content must not be empty")

    @classmethod
    def from_text(cls, tool_name: str, text: str) -> ToolResult:
        """Successful result with a single text block."""
        return cls(tool_name=tool_name, content=(TextContent(text=text),))

    @classmethod
    def failure(cls, tool_name: str, message: str, error_code: str | None = None) -> ToolResult:
        """Failed result carrying a human-readable message."""
        return cls(
            tool_name=tool_name,
            content=(TextContent(text=message),),
            is_error=True,
            error_code=error_code,
        )

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)


ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolResult]]


@dataclass(frozen=True)
class RegisteredTool:
    descriptor: ToolDescriptor
    handler: ToolHandler
    validator: Draft7Validator


class ToolRegistry:
    """
    Holds the invocable tools and dispatches invocations to them.

    Registration happens once at startup; a duplicate name raises immediately.
    """

    def __init__(self) -> None:
        self._tools: dict[str, RegisteredTool] = {}

    def register(self, descriptor: ToolDescriptor, handler: ToolHandler) -> None:
        """
        Register a handler under the descriptor's name.

        Raises:
            DuplicateToolError: If the name is already registered.
        """
        if descriptor.name in self._tools:
            raise DuplicateToolError(f"Tool already registered: {descriptor.name}")

        schema = descriptor.input_schema
        Draft7Validator.check_schema(schema)
        self._tools[descriptor.name] = RegisteredTool(
            descriptor=descriptor,
            handler=handler,
            validator=Draft7Validator(schema),
        )
        logger.debug(f"Registered tool {descriptor.name}")

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    @property
    def descriptors(self) -> tuple[ToolDescriptor, ...]:
        """Registered descriptors in registration order."""
        return tuple(tool.descriptor for tool in self._tools.values())

    def validate(self, name: str, arguments: Mapping[str, Any]) -> list[str]:
        """
        Check arguments against a registered tool's input schema.

        Args:
            name: Registered tool name.
            arguments: Argument object supplied by the caller.

        Returns:
            Human-readable error messages; empty when valid.
        """
        validator = self._tools[name].validator
        errors = []
        found = validator.iter_errors(dict(arguments))
        for err in sorted(found, key=lambda e: [str(p) for p in e.path]):
            path = ".".join(str(p) for p in err.path)
            if path:
                errors.append(f"Invalid value for '{path}': {err.message}")
            else:
                errors.append(err.message)
        return errors

    async def dispatch(self, invocation: ToolInvocation) -> ToolResult:
        """
        Validate and run one invocation.

        Args:
            invocation: Tool name and arguments.

        Returns:
            The handler's result, or a failed result for unknown tools,
            invalid arguments and handler errors.
        """
        token = invocation_id_var.set(invocation.invocation_id)
        start_time = time.time()
        try:
            result = await self._dispatch(invocation)
            audit_logger.log_tool_execution(
                tool_name=invocation.tool_name,
                success=not result.is_error,
                duration_ms=(time.time() - start_time) * 1000,
                error_code=result.error_code,
            )
            return result
        finally:
            invocation_id_var.reset(token)

    async def _dispatch(self, invocation: ToolInvocation) -> ToolResult:
        name = invocation.tool_name
        tool = self._tools.get(name)

        if tool is None:
            logger.warning(f"Unknown tool called: {name}")
            return ToolResult.failure(name, f"Unknown tool: {name}", error_code="unknown_tool")

        errors = self.validate(name, invocation.arguments)
        if errors:
            message = f"Invalid arguments for {name}: " + "; ".join(errors)
            return ToolResult.failure(name, message, error_code=InvalidInputError.code)

        try:
            return await tool.handler(dict(invocation.arguments))
        except ToolError as e:
            logger.info(f"Tool {name} failed ({e.code}): {e}")
            return ToolResult.failure(name, str(e), error_code=e.code)
        except Exception as e:
            logger.exception(f"Error executing tool {name}: {e}")
            return ToolResult.failure(name, f"Error executing tool: {e}", error_code="internal_error")
