"""Subprocess JSON-RPC client for the stdio server.

Spawns ``python -m text_utilities_mcp`` and keeps it running for several
calls; each call writes one request line and reads stdout until the reply
with the matching id shows up.

    with StdioClient() as client:
        client.initialize()
        client.call_tool("reverse_text", "Hello World")
"""
from __future__ import annotations

import json
import subprocess
import sys
from typing import Any, Dict, List, Optional, Sequence


class JsonRpcError(RuntimeError):
    def __init__(self, error: Dict[str, Any]):
        super().__init__(error.get("message"))
        self.code = error.get("code")
        self.error = error


class StdioClient:
    def __init__(self, command: Optional[Sequence[str]] = None, env: Optional[Dict[str, str]] = None):
        self.command = list(command or [sys.executable, "-m", "text_utilities_mcp"])
        self.env = env
        self.proc: Optional[subprocess.Popen] = None
        self._next_id = 0

    def start(self) -> "StdioClient":
        self.proc = subprocess.Popen(
            self.command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            env=self.env,
        )
        return self

    def __enter__(self) -> "StdioClient":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def send_raw(self, line: str) -> None:
        assert self.proc is not None and self.proc.stdin is not None, "client not started"
        self.proc.stdin.write(line + "\n")
        self.proc.stdin.flush()

    def notify(self, method: str, params: Optional[Dict[str, Any]] = None) -> None:
        msg: Dict[str, Any] = {"jsonrpc": "2.0", "method": method}
        if params is not None:
            msg["params"] = params
        self.send_raw(json.dumps(msg))

    def read_response(self, want_id=None) -> Dict[str, Any]:
        """Read lines until a JSON-RPC response (with ``want_id`` if given) arrives."""
        assert self.proc is not None and self.proc.stdout is not None, "client not started"
        while True:
            line = self.proc.stdout.readline()
            if not line:
                raise RuntimeError("Server terminated unexpectedly")
            try:
                msg = json.loads(line)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict) or msg.get("jsonrpc") != "2.0":
                continue
            if "result" not in msg and "error" not in msg:
                continue
            if want_id is None or msg.get("id") == want_id:
                return msg

    def request(self, method: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Send a request and return the raw response message."""
        self._next_id += 1
        _id = self._next_id
        msg: Dict[str, Any] = {"jsonrpc": "2.0", "id": _id, "method": method}
        if params is not None:
            msg["params"] = params
        self.send_raw(json.dumps(msg))
        return self.read_response(_id)

    def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        resp = self.request(method, params)
        if "error" in resp:
            raise JsonRpcError(resp["error"])
        return resp.get("result")

    def initialize(self) -> Dict[str, Any]:
        result = self.call("initialize", {"protocolVersion": "2024-11-05", "capabilities": {}})
        self.notify("notifications/initialized")
        return result

    def list_tools(self) -> List[Dict[str, Any]]:
        return self.call("tools/list")["tools"]

    def call_tool(self, name: str, text: Any) -> Dict[str, Any]:
        """Invoke a tool and return the decoded envelope plus ``isError``."""
        result = self.call("tools/call", {"name": name, "arguments": {"text": text}})
        envelope = json.loads(result["content"][0]["text"])
        envelope["isError"] = bool(result.get("isError"))
        return envelope

    def close(self) -> None:
        if self.proc is None:
            return
        proc, self.proc = self.proc, None
        try:
            if proc.stdin and not proc.stdin.closed:
                proc.stdin.close()
            proc.wait(timeout=5)
        except subprocess.TimeoutExpired:
            proc.terminate()
            proc.wait(timeout=5)
        finally:
            if proc.stdout:
                proc.stdout.close()
