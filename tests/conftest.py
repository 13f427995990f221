"""Shared fixtures for the text utilities server tests."""

import os
import sys

import pytest

# Ensure project root is on sys.path so the package imports without installation
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from text_utilities_mcp.config import Settings  # noqa: E402
from text_utilities_mcp.dispatcher import ToolDispatcher  # noqa: E402

TOOL_NAMES = [
    "reverse_text",
    "uppercase_text",
    "lowercase_text",
    "word_count",
    "character_count",
    "shuffle_text",
]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def dispatcher(settings):
    return ToolDispatcher(settings=settings)


@pytest.fixture
def subprocess_env():
    """Environment for spawning the stdio server from a source checkout."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [PROJECT_ROOT, env.get("PYTHONPATH")]))
    env["TEXT_UTILS_QUIET"] = "1"
    return env
