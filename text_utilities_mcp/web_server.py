"""HTTP/SSE transport for the text utilities server, built on FastAPI.

Endpoints:
  GET  /health              -> {"status": "ok", "name": ..., "activeSessions": n}
  GET  /sse                 -> event stream; first event "endpoint" carries the
                               message URL with the new session id
  POST /message?sessionId=  -> JSON-RPC message for that session (202); the
                               reply is pushed on the session's stream

Plain REST helpers (no JSON-RPC wrapping), handy for demos and curl:
  GET  /                    -> server name, version, endpoints
  GET  /capabilities        -> capabilities as advertised by initialize
  GET  /tools               -> tool definitions
  POST /invoke              -> body: {"name": "reverse_text", "arguments": {"text": "hi"}}
  POST /tools/{name}        -> body: {"arguments": {"text": "hi"}}

Run:
  text-utilities-mcp-http  (uses uvicorn programmatically) OR
  uvicorn text_utilities_mcp.web_server:app
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse
from pydantic import BaseModel, Field

from . import SERVER_NAME, __version__
from .config import Settings, load_settings
from .dispatcher import ToolDispatcher
from .errors import UnknownToolError
from .logging_config import configure_logging
from .protocol import JsonRpcHandler, list_capabilities

logger = logging.getLogger(__name__)

MESSAGE_PATH = "/message"


class Session:
    def __init__(self, session_id: str):
        self.id = session_id
        self.queue: asyncio.Queue = asyncio.Queue()

    async def send(self, message: Dict[str, Any]) -> None:
        await self.queue.put(message)

    def close(self) -> None:
        # None ends the event stream
        self.queue.put_nowait(None)


class SessionTable:
    """Live SSE sessions keyed by id; entries exist only while their stream is open."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def is_active(self, session: Session) -> bool:
        return self._sessions.get(session.id) is session

    @asynccontextmanager
    async def open(self) -> AsyncIterator[Session]:
        session = Session(uuid.uuid4().hex)
        self._sessions[session.id] = session
        logger.info("Session created: %s", session.id)
        try:
            yield session
        finally:
            self._sessions.pop(session.id, None)
            logger.info("Session closed: %s", session.id)

    def close_all(self) -> None:
        for session in list(self._sessions.values()):
            session.close()


def format_sse(event: str, data: str) -> str:
    return f"event: {event}\ndata: {data}\n\n"


async def event_stream(sessions: SessionTable, endpoint: str = MESSAGE_PATH) -> AsyncIterator[str]:
    async with sessions.open() as session:
        yield format_sse("endpoint", f"{endpoint}?sessionId={session.id}")
        while True:
            message = await session.queue.get()
            if message is None:
                break
            yield format_sse("message", json.dumps(message))


class InvokeRequest(BaseModel):
    name: str = Field(..., description="Tool name to invoke")
    arguments: Dict[str, Any] = Field(default_factory=dict, description="Tool arguments matching the tool input schema")


class ToolInvokeRequest(BaseModel):
    arguments: Dict[str, Any] = Field(default_factory=dict)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    dispatcher = ToolDispatcher(settings=settings)
    handler = JsonRpcHandler(dispatcher, debug=settings.debug)
    sessions = SessionTable()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("Available tools: %s", ", ".join(dispatcher.registry.names()))
        yield
        logger.info("Shutting down %s, closing %d session(s)", SERVER_NAME, len(sessions))
        sessions.close_all()

    app = FastAPI(title="Text Utilities MCP Server", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.dispatcher = dispatcher
    app.state.sessions = sessions

    @app.get("/health")
    def health() -> Dict[str, Any]:
        return {"status": "ok", "name": SERVER_NAME, "activeSessions": len(sessions)}

    @app.get("/sse")
    async def sse():
        logger.info("New SSE connection established")
        return StreamingResponse(
            event_stream(sessions),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    @app.post(MESSAGE_PATH)
    async def post_message(request: Request, session_id: Optional[str] = Query(None, alias="sessionId")):
        if not session_id:
            return JSONResponse({"error": "sessionId query parameter required"}, status_code=400)
        session = sessions.get(session_id)
        if session is None:
            return JSONResponse({"error": "No active session found"}, status_code=400)
        try:
            msg = await request.json()
        except ValueError:
            return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

        reply = await handler.handle(msg)
        if reply is not None:
            if sessions.is_active(session):
                await session.send(reply)
            else:
                logger.warning("Session %s closed before reply could be delivered", session_id)
        return Response("Accepted", status_code=202)

    @app.get("/capabilities")
    def get_capabilities():
        return list_capabilities()

    @app.get("/tools")
    def list_tools():
        return dispatcher.list_tools()

    async def _invoke(name: str, arguments: Dict[str, Any]):
        try:
            return await dispatcher.call_tool(name, arguments)
        except UnknownToolError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.post("/invoke")
    async def invoke(req: InvokeRequest):
        return await _invoke(req.name, req.arguments)

    @app.post("/tools/{name}")
    async def invoke_tool(name: str, req: ToolInvokeRequest):
        return await _invoke(name, req.arguments)

    @app.get("/")
    def root():
        return {
            "name": SERVER_NAME,
            "version": __version__,
            "endpoints": [
                "/", "/health", "/sse", "POST /message", "/capabilities", "/tools",
                "POST /invoke", "POST /tools/{name}",
            ],
        }

    return app


_app: Optional[FastAPI] = None


def __getattr__(name: str):
    # built on first access so importing the module never reads the environment
    if name == "app":
        global _app
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def run():
    """Programmatic entrypoint for the ``text-utilities-mcp-http`` script."""
    settings = load_settings()
    configure_logging("DEBUG" if settings.debug else settings.log_level, quiet=settings.quiet)
    logger.info("%s running on port %s (health: /health, sse: /sse)", SERVER_NAME, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":  # pragma: no cover
    run()
