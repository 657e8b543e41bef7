# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Identifier case conversion.

Identifiers are first split into words and then rejoined in the requested
style. A word boundary is placed where a lowercase letter is followed by an
uppercase letter or a digit, and where a digit is followed by a letter. Any
character that is neither a letter nor a digit separates words and is dropped.

    >>> to_camel_case("FOO_BAR_BAZ", True)
    'FooBarBaz'
    >>> to_lower_dash("FooBarBaz")
    'foo-bar-baz'
"""

from __future__ import annotations

from enum import Enum

# ###############
# Public Interface
# ###############


def split_words(text: str) -> list[str]:
    """Split an identifier into its words.

    Args:
        text: The identifier to split, in any casing style.

    Returns:
        The words in order of appearance, never containing empty strings.
    """
    words: list[str] = []
    current: list[str] = []
    last = _CharClass.UPPER

    for char in text:
        char_class = _classify(char)
        if last is _CharClass.LOWER and char_class in (_CharClass.UPPER, _CharClass.NUMERIC):
            _flush(current, words)
            current.append(char)
        elif last is _CharClass.NUMERIC and char_class in (_CharClass.UPPER, _CharClass.LOWER):
            _flush(current, words)
            current.append(char)
        elif char_class is not _CharClass.OTHER:
            current.append(char)
        else:
            _flush(current, words)
        last = char_class

    _flush(current, words)
    return words


def to_camel_case(text: str, first_upper: bool) -> str:
    """Join the words of *text* in camel case.

    The first character of the first word is upper-cased when *first_upper* is
    set and lower-cased otherwise. Every following word starts upper-case. The
    remaining characters of each word are lower-cased.
    """
    parts: list[str] = []
    for word in split_words(text):
        head = word[0].upper() if first_upper or parts else word[0].lower()
        parts.append(head + word[1:].lower())
    return "".join(parts)


def to_type_name(text: str) -> str:
    """Return the type-name form of *text* (camel case, leading capital)."""
    return to_camel_case(text, True)


def to_upper_underscore(text: str) -> str:
    """Join the words of *text* as an upper-snake constant name."""
    return "_".join(word.upper() for word in split_words(text))


def to_lower_dash(text: str) -> str:
    """Join the words of *text* as a lower-dash slug."""
    return "-".join(word.lower() for word in split_words(text))


def to_lower_underscore(text: str) -> str:
    """Join the words of *text* as a lower-snake module or function name."""
    return "_".join(word.lower() for word in split_words(text))


def make_version(version: str) -> str:
    """Return the identifier for a dotted version, e.g. ``"1.0"`` -> ``"v1_0"``."""
    return "v" + version.replace(".", "_")


# ################
# Implementation
# ################


class _CharClass(Enum):
    UPPER = "upper"
    LOWER = "lower"
    NUMERIC = "numeric"
    OTHER = "other"


def _classify(char: str) -> _CharClass:
    if char.isupper():
        return _CharClass.UPPER
    if char.isdigit():
        return _CharClass.NUMERIC
    if char.isalpha():
        return _CharClass.LOWER
    return _CharClass.OTHER


def _flush(current: list[str], words: list[str]) -> None:
    if current:
        words.append("".join(current))
        current.clear()
