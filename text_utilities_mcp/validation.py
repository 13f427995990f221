from typing import Any

from .errors import InputTooLargeError, InvalidTypeError

MAX_INPUT_LENGTH = 1_000_000


def validate_input(text: Any, tool_name: str, max_length: int = MAX_INPUT_LENGTH) -> str:
    """Check that ``text`` is a string no longer than ``max_length``.

    The value is returned unchanged; nothing is stripped or normalized.
    """
    if not isinstance(text, str):
        raise InvalidTypeError(tool_name, type(text).__name__)
    if len(text) > max_length:
        raise InputTooLargeError(tool_name, len(text), max_length)
    return text
