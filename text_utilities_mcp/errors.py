"""Error taxonomy for tool invocations.

``UnknownToolError`` is the only hard failure: it escapes the dispatcher and
becomes a JSON-RPC error. Every other ``ToolError`` is reported inside a
``success: false`` envelope.
"""
from typing import Iterable


class ToolError(Exception):
    """Base class for failures tied to a named tool."""

    def __init__(self, message: str, tool: str):
        super().__init__(message)
        self.tool = tool


class ToolNotFound(LookupError):
    """Raised by the registry when a name has no handler."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name


class UnknownToolError(ToolError):
    def __init__(self, name, available: Iterable[str]):
        self.available = list(available)
        super().__init__(
            f"Unknown tool: {name}. Available tools: {', '.join(self.available)}",
            tool=str(name),
        )


class InvalidTypeError(ToolError):
    def __init__(self, tool: str, got: str):
        super().__init__(f"Invalid input type for {tool}: expected string, got {got}", tool)


class InputTooLargeError(ToolError):
    def __init__(self, tool: str, length: int, maximum: int):
        self.length = length
        self.maximum = maximum
        super().__init__(
            f"Input too large for {tool}: {length} characters exceeds maximum of {maximum}",
            tool,
        )


class ToolTimeoutError(ToolError):
    def __init__(self, tool: str, timeout_ms: int):
        self.timeout_ms = timeout_ms
        super().__init__(f"Tool {tool} timed out after {timeout_ms}ms", tool)
