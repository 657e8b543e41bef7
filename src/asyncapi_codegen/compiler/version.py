# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Dotted-integer version values."""

from __future__ import annotations

import functools
from dataclasses import dataclass

# ###############
# Public Interface
# ###############


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Version:
    """A version made of non-negative integer segments, e.g. ``1.0.2``.

    Versions of unequal length compare as if the shorter one was padded with
    zeros, so ``Version.parse("2")`` equals ``Version.parse("2.0")``. Equal
    versions also hash equally.

    Attributes:
        segments: The numeric segments in order of significance.
    """

    segments: tuple[int, ...]

    def __post_init__(self) -> None:
        if not self.segments:
            raise ValueError("A version requires at least one segment")
        for segment in self.segments:
            if not isinstance(segment, int) or segment < 0:
                raise ValueError(f"Invalid version segment: {segment!r}")

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse a dotted version string.

        Raises:
            ValueError: If a segment is not a non-negative decimal integer.
        """
        tokens = text.split(".")
        for token in tokens:
            if not (token.isascii() and token.isdigit()):
                raise ValueError(f"Invalid version '{text}'")
        return cls(tuple(int(token) for token in tokens))

    def compare(self, other: Version) -> int:
        """Return a negative number, zero, or a positive number as *self* is
        lower than, equal to, or greater than *other*."""
        width = max(len(self.segments), len(other.segments))
        for index in range(width):
            mine = self.segments[index] if index < len(self.segments) else 0
            theirs = other.segments[index] if index < len(other.segments) else 0
            if mine != theirs:
                return -1 if mine < theirs else 1
        return 0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __hash__(self) -> int:
        return hash(_strip_trailing_zeros(self.segments))

    def __str__(self) -> str:
        return ".".join(str(segment) for segment in self.segments)


def compare(left: str | Version, right: str | Version) -> int:
    """Compare two versions given either as strings or as Version values."""
    return _coerce(left).compare(_coerce(right))


# ################
# Implementation
# ################


def _coerce(value: str | Version) -> Version:
    if isinstance(value, Version):
        return value
    return Version.parse(value)


def _strip_trailing_zeros(segments: tuple[int, ...]) -> tuple[int, ...]:
    end = len(segments)
    while end > 1 and segments[end - 1] == 0:
        end -= 1
    return segments[:end]
