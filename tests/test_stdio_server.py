"""Tests for the stdio transport, spawned as a subprocess and driven in-process."""

import asyncio
import io
import json

import pytest

from text_utilities_mcp.client import JsonRpcError, StdioClient
from text_utilities_mcp.protocol import INVALID_PARAMS, PARSE_ERROR, JsonRpcHandler
from text_utilities_mcp.server import serve

from conftest import TOOL_NAMES


@pytest.fixture
def client(subprocess_env):
    with StdioClient(env=subprocess_env) as c:
        c.initialize()
        yield c


def test_should_list_available_tools(client):
    tools = client.list_tools()
    assert len(tools) == 6
    assert [t["name"] for t in tools] == TOOL_NAMES


def test_tool_execution(client):
    assert client.call_tool("reverse_text", "Hello World")["result"] == "dlroW olleH"
    assert client.call_tool("uppercase_text", "Hello World")["result"] == "HELLO WORLD"
    assert client.call_tool("lowercase_text", "Hello World")["result"] == "hello world"
    assert client.call_tool("word_count", "Hello World, this is a test")["word_count"] == 6

    counts = client.call_tool("character_count", "Hello World")
    assert counts["total_characters"] == 11
    assert counts["characters_without_spaces"] == 10

    shuffled = client.call_tool("shuffle_text", "abcdefghij")
    assert shuffled["success"] is True
    assert len(shuffled["result"]) == 10


def test_empty_text_input(client):
    body = client.call_tool("word_count", "")
    assert body["success"] is True
    assert body["word_count"] == 0


def test_unknown_tool_is_a_protocol_error(client):
    with pytest.raises(JsonRpcError) as info:
        client.call_tool("nonexistent_tool", "test")
    assert info.value.code == INVALID_PARAMS
    assert "reverse_text" in str(info.value)


def test_invalid_input_is_flagged_not_raised(client):
    body = client.call_tool("reverse_text", 42)
    assert body["success"] is False
    assert body["isError"] is True


def test_server_survives_malformed_lines(client):
    client.send_raw("this is not json")
    reply = client.read_response()
    assert reply["error"]["code"] == PARSE_ERROR
    assert client.call("ping") == {}


def test_shutdown(client):
    assert client.call("shutdown") == {"ok": True}


def test_serve_answers_requests_and_skips_notifications():
    stdin = io.StringIO(
        '{"jsonrpc": "2.0", "id": 1, "method": "ping"}\n'
        "\n"
        '{"jsonrpc": "2.0", "method": "notifications/initialized"}\n'
        "not json\n"
    )
    stdout = io.StringIO()
    with asyncio.Runner() as runner:
        serve(JsonRpcHandler(), stdin, stdout, runner)
    replies = [json.loads(line) for line in stdout.getvalue().splitlines()]
    assert replies == [
        {"jsonrpc": "2.0", "id": 1, "result": {}},
        {"jsonrpc": "2.0", "id": None, "error": {"code": PARSE_ERROR, "message": "Parse error"}},
    ]
