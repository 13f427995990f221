"""Per-call tool execution: lookup, validation, timeout, envelope.

Two failure tiers: an unknown tool name raises ``UnknownToolError`` to the
caller (it becomes a protocol error), while anything that goes wrong after
lookup is returned as a ``success: false`` envelope with ``isError`` set.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from .config import Settings
from .errors import ToolError, ToolNotFound, UnknownToolError
from .registry import ToolRegistry, default_registry
from .timeout import with_timeout
from .validation import validate_input

logger = logging.getLogger(__name__)


def text_content(payload: Dict[str, Any]) -> Dict[str, Any]:
    # ASCII escapes keep lone surrogates encodable on every transport
    return {"type": "text", "text": json.dumps(payload)}


def success_result(tool: str, fields: Dict[str, Any]) -> Dict[str, Any]:
    return {"content": [text_content({"success": True, "tool": tool, **fields})]}


def error_result(tool: str, message: str) -> Dict[str, Any]:
    return {
        "content": [text_content({"success": False, "tool": tool, "error": message})],
        "isError": True,
    }


class ToolDispatcher:
    def __init__(self, registry: Optional[ToolRegistry] = None, settings: Optional[Settings] = None):
        self.registry = registry or default_registry()
        self.settings = settings or Settings()

    def list_tools(self):
        return [definition.to_dict() for definition in self.registry.list_tools()]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        logger.info("Tool invoked: %s", name)
        try:
            handler = self.registry.resolve(name)
        except ToolNotFound:
            error = UnknownToolError(name, self.registry.names())
            logger.error("Error: %s", error)
            raise error from None

        try:
            raw = (arguments or {}).get("text")
            text = validate_input("" if raw is None else raw, name, self.settings.max_input_length)
            fields = await with_timeout(
                asyncio.to_thread(handler, text),
                self.settings.tool_timeout_ms,
                name,
            )
        except Exception as exc:
            # validation, timeout and unexpected handler faults all land here
            logger.error("Tool %s failed: %s", name, exc, exc_info=not isinstance(exc, ToolError))
            return error_result(name, str(exc))

        logger.info("Tool %s completed successfully", name)
        return success_result(name, fields)
