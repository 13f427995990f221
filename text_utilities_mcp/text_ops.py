r"""Pure text transformations backing the six tools.

Strings are handled as sequences of Unicode code points; no grapheme
clustering or normalization is attempted. Whitespace follows Python's
Unicode rules (``str.split`` and ``\s``): the separators ``\x1c``-``\x1f``
count as whitespace, the byte order mark ``\ufeff`` does not. JavaScript's
``\s`` classifies both the other way round.
"""
import random
import re
from typing import NamedTuple, Optional

_WHITESPACE = re.compile(r"\s")


class CharacterCount(NamedTuple):
    total: int
    without_spaces: int


def reverse_text(text: str) -> str:
    return text[::-1]


def uppercase_text(text: str) -> str:
    return text.upper()


def lowercase_text(text: str) -> str:
    return text.lower()


def word_count(text: str) -> int:
    # str.split() with no separator trims and collapses whitespace runs
    return len(text.split())


def character_count(text: str) -> CharacterCount:
    return CharacterCount(total=len(text), without_spaces=len(_WHITESPACE.sub("", text)))


def shuffle_text(text: str, rng: Optional[random.Random] = None) -> str:
    """Return a uniformly random permutation of ``text`` (Fisher-Yates).

    Uses the non-cryptographic ``random`` module; never use the output for
    anything security sensitive.
    """
    rng = rng or random
    chars = list(text)
    for i in range(len(chars) - 1, 0, -1):
        j = rng.randint(0, i)
        chars[i], chars[j] = chars[j], chars[i]
    return "".join(chars)
