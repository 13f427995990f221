"""JSON-RPC 2.0 method routing shared by the stdio and HTTP/SSE transports."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from . import SERVER_NAME, __version__
from .dispatcher import ToolDispatcher
from .errors import UnknownToolError

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
SERVER_ERROR = -32000

# Dotted and alternate verbs normalize to the canonical slash names.
METHOD_ALIASES = {
    "capabilities.list": "capabilities/list",
    "capability.list": "capabilities/list",
    "tools.list": "tools/list",
    "tools.call": "tools/call",
    "tools.invoke": "tools/call",
    "tools.execute": "tools/call",
}


class InvalidParams(ValueError):
    pass


def response(_id, result) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": _id, "result": result}


def error_response(_id, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": _id, "error": {"code": code, "message": message}}


def list_capabilities() -> Dict[str, Any]:
    return {"tools": {"listChanged": False}}


class JsonRpcHandler:
    def __init__(self, dispatcher: Optional[ToolDispatcher] = None, debug: bool = False):
        self.dispatcher = dispatcher or ToolDispatcher()
        self.debug = debug

    def initialize(self, params):
        requested = (params or {}).get("protocolVersion")
        return {
            "protocolVersion": requested if isinstance(requested, str) else PROTOCOL_VERSION,
            "capabilities": list_capabilities(),
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }

    def shutdown(self, _params):
        return {"ok": True}

    def tools_list(self, _params):
        return {"tools": self.dispatcher.list_tools()}

    async def tools_call(self, params):
        if not isinstance(params, dict):
            raise InvalidParams("Missing params for tools/call")
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise InvalidParams("Missing required parameter: 'name'")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            raise InvalidParams("'arguments' must be an object")
        return await self.dispatcher.call_tool(name, arguments)

    async def handle_line(self, line: str) -> Optional[Dict[str, Any]]:
        try:
            msg = json.loads(line)
        except json.JSONDecodeError:
            return error_response(None, PARSE_ERROR, "Parse error")
        return await self.handle(msg)

    async def handle(self, msg: Any) -> Optional[Dict[str, Any]]:
        """Route one decoded message; returns ``None`` for notifications."""
        if not isinstance(msg, dict) or not isinstance(msg.get("method"), str):
            _id = msg.get("id") if isinstance(msg, dict) else None
            return error_response(_id, INVALID_REQUEST, "Invalid Request")

        original_method = msg["method"]
        method = METHOD_ALIASES.get(original_method, original_method)
        params = msg.get("params")
        is_notification = "id" not in msg
        _id = msg.get("id")
        if self.debug:
            logger.debug("received=%s normalized=%s", original_method, method)

        if is_notification:
            # notifications/initialized, notifications/cancelled, ...
            logger.debug("Notification ignored: %s", method)
            return None

        try:
            if method == "initialize":
                return response(_id, self.initialize(params))
            if method == "shutdown":
                return response(_id, self.shutdown(params))
            if method == "ping":
                return response(_id, {})
            if method == "capabilities/list":
                return response(_id, list_capabilities())
            if method == "tools/list":
                return response(_id, self.tools_list(params))
            if method == "tools/call":
                return response(_id, await self.tools_call(params))
            return error_response(_id, METHOD_NOT_FOUND, f"Method not found: {original_method}")
        except (UnknownToolError, InvalidParams) as exc:
            return error_response(_id, INVALID_PARAMS, str(exc))
        except Exception as exc:
            logger.exception("Request %s failed", method)
            return error_response(_id, SERVER_ERROR, str(exc))
