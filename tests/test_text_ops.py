"""Tests for the pure text transformations."""

import random

import pytest

from text_utilities_mcp import text_ops

SAMPLES = [
    "",
    "a",
    "Hello World",
    "  leading and trailing  ",
    "tabs\tand\nnewlines\r\n",
    "Ünïcödé ß straße ΣΑΣ",
    "emoji 🎉 mixed 漢字",
]


@pytest.mark.parametrize("text", SAMPLES)
def test_reverse_is_an_involution(text):
    assert text_ops.reverse_text(text_ops.reverse_text(text)) == text


def test_reverse_hello_world():
    assert text_ops.reverse_text("Hello World") == "dlroW olleH"


def test_reverse_keeps_whitespace_and_multibyte():
    assert text_ops.reverse_text(" a\tб🎉") == "🎉б\ta "


@pytest.mark.parametrize("text", SAMPLES)
def test_uppercase_after_lowercase(text):
    assert text_ops.uppercase_text(text_ops.lowercase_text(text)) == text_ops.uppercase_text(text)


# "ß" upper-cases to "SS", so the reverse direction only holds without it
@pytest.mark.parametrize("text", [s for s in SAMPLES if "ß" not in s])
def test_lowercase_after_uppercase(text):
    assert text_ops.lowercase_text(text_ops.uppercase_text(text)) == text_ops.lowercase_text(text)


def test_full_unicode_case_mapping():
    assert text_ops.uppercase_text("straße") == "STRASSE"


def test_case_mapping():
    assert text_ops.uppercase_text("Hello World") == "HELLO WORLD"
    assert text_ops.lowercase_text("Hello World") == "hello world"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", 0),
        ("   \t\n ", 0),
        ("a b  c", 3),
        ("Hello World, this is a test", 6),
        ("  padded\twords\nacross lines  ", 4),
        ("single", 1),
    ],
)
def test_word_count(text, expected):
    assert text_ops.word_count(text) == expected


def test_character_count_hello_world():
    counts = text_ops.character_count("Hello World")
    assert counts.total == 11
    assert counts.without_spaces == 10


def test_character_count_excludes_all_whitespace_kinds():
    counts = text_ops.character_count("a\tb\nc d e")
    assert counts == text_ops.CharacterCount(total=9, without_spaces=5)


@pytest.mark.parametrize("text", SAMPLES)
def test_shuffle_is_a_permutation(text):
    shuffled = text_ops.shuffle_text(text)
    assert len(shuffled) == len(text)
    assert sorted(shuffled) == sorted(text)


def test_shuffle_with_seeded_rng_is_reproducible():
    text = "abcdefghijklmnopqrstuvwxyz"
    first = text_ops.shuffle_text(text, random.Random(42))
    second = text_ops.shuffle_text(text, random.Random(42))
    assert first == second
    assert sorted(first) == sorted(text)


def test_shuffle_reaches_every_permutation_of_three():
    rng = random.Random(7)
    seen = {text_ops.shuffle_text("abc", rng) for _ in range(600)}
    assert seen == {"abc", "acb", "bac", "bca", "cab", "cba"}


def test_information_separators_are_whitespace():
    assert text_ops.word_count("a\x1cb\x1fc") == 3
    assert text_ops.character_count("a\x1cb").without_spaces == 2


def test_byte_order_mark_is_not_whitespace():
    assert text_ops.word_count("a\ufeffb") == 1
    assert text_ops.character_count("\ufeff").without_spaces == 1
