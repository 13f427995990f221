"""Closed table of the tools this server exposes.

Each tool has a definition (what ``tools/list`` advertises) and a handler
that turns validated text into the tool-specific envelope fields. The table
is built once and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Tuple

from . import text_ops
from .errors import ToolNotFound

Handler = Callable[[str], Dict[str, Any]]


class ToolKind(str, Enum):
    REVERSE_TEXT = "reverse_text"
    UPPERCASE_TEXT = "uppercase_text"
    LOWERCASE_TEXT = "lowercase_text"
    WORD_COUNT = "word_count"
    CHARACTER_COUNT = "character_count"
    SHUFFLE_TEXT = "shuffle_text"


def text_input_schema(description: str) -> Dict[str, Any]:
    return {
        "type": "object",
        "properties": {"text": {"type": "string", "description": description}},
        "required": ["text"],
    }


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: Dict[str, Any] = field(hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


@dataclass(frozen=True)
class Tool:
    definition: ToolDefinition
    handler: Handler = field(hash=False)

    @property
    def name(self) -> str:
        return self.definition.name


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _reverse(text: str) -> Dict[str, Any]:
    return {"input_length": len(text), "result": text_ops.reverse_text(text)}


def _uppercase(text: str) -> Dict[str, Any]:
    return {"input_length": len(text), "result": text_ops.uppercase_text(text)}


def _lowercase(text: str) -> Dict[str, Any]:
    return {"input_length": len(text), "result": text_ops.lowercase_text(text)}


def _word_count(text: str) -> Dict[str, Any]:
    count = text_ops.word_count(text)
    return {
        "input_length": len(text),
        "word_count": count,
        "result": _plural(count, "word"),
    }


def _character_count(text: str) -> Dict[str, Any]:
    counts = text_ops.character_count(text)
    return {
        "total_characters": counts.total,
        "characters_without_spaces": counts.without_spaces,
        "result": f"{_plural(counts.total, 'total character')} ({counts.without_spaces} without spaces)",
    }


def _shuffle(text: str) -> Dict[str, Any]:
    return {"input_length": len(text), "result": text_ops.shuffle_text(text)}


# kind -> (description, text parameter description, handler); order is listing order
TOOL_TABLE: Tuple[Tuple[ToolKind, str, str, Handler], ...] = (
    (ToolKind.REVERSE_TEXT, "Reverses the order of characters in the given text",
     "The text to reverse", _reverse),
    (ToolKind.UPPERCASE_TEXT, "Converts text to uppercase",
     "The text to convert to uppercase", _uppercase),
    (ToolKind.LOWERCASE_TEXT, "Converts text to lowercase",
     "The text to convert to lowercase", _lowercase),
    (ToolKind.WORD_COUNT, "Counts the number of words in the given text",
     "The text to count words in", _word_count),
    (ToolKind.CHARACTER_COUNT, "Counts the number of characters (including spaces) in the given text",
     "The text to count characters in", _character_count),
    (ToolKind.SHUFFLE_TEXT, "Randomly shuffles the characters in the given text using Fisher-Yates algorithm",
     "The text to shuffle", _shuffle),
)


class ToolRegistry:
    """Read-only name -> tool mapping, iterated in registration order."""

    def __init__(self, tools: Iterable[Tool]):
        table: Dict[str, Tool] = {}
        for tool in tools:
            if tool.name in table:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            table[tool.name] = tool
        self._tools = MappingProxyType(table)

    def list_tools(self) -> List[ToolDefinition]:
        return [tool.definition for tool in self._tools.values()]

    def names(self) -> List[str]:
        return list(self._tools)

    def resolve(self, name: str) -> Handler:
        try:
            return self._tools[name].handler
        except (KeyError, TypeError):
            raise ToolNotFound(name) from None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def default_registry() -> ToolRegistry:
    return ToolRegistry(
        Tool(ToolDefinition(kind.value, description, text_input_schema(param)), handler)
        for kind, description, param, handler in TOOL_TABLE
    )
