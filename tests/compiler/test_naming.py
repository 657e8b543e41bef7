# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for identifier case conversion."""

import pytest

from asyncapi_codegen.compiler.naming import (
    make_version,
    split_words,
    to_camel_case,
    to_lower_dash,
    to_lower_underscore,
    to_type_name,
    to_upper_underscore,
)

# ###############
# Word Splitting
# ###############


class TestSplitWords:
    def test_empty_text_has_no_words(self) -> None:
        assert split_words("") == []

    def test_lower_to_upper_starts_word(self) -> None:
        assert split_words("fooBarBaz") == ["foo", "Bar", "Baz"]

    def test_separators_are_dropped(self) -> None:
        assert split_words("foo-bar_baz.qux") == ["foo", "bar", "baz", "qux"]

    def test_consecutive_separators_yield_no_empty_words(self) -> None:
        assert split_words("__foo--bar__") == ["foo", "bar"]

    def test_digit_boundaries(self) -> None:
        """A digit after a lowercase letter and a letter after a digit both start a new word."""
        assert split_words("sensor1reading") == ["sensor", "1", "reading"]

    def test_digit_after_uppercase_stays_in_word(self) -> None:
        assert split_words("V1") == ["V1"]


# ###############
# Camel Case
# ###############


class TestCamelCase:
    @pytest.mark.parametrize(
        ("text", "first_upper", "expected"),
        [
            ("", True, ""),
            ("Foo", True, "Foo"),
            ("foo", True, "Foo"),
            ("Foo", False, "foo"),
            ("foo", False, "foo"),
            ("FooBarBaz", False, "fooBarBaz"),
            ("FOO_BAR_BAZ", True, "FooBarBaz"),
            ("foo-bar-baz", True, "FooBarBaz"),
            ("foo-bar-baz", False, "fooBarBaz"),
        ],
    )
    def test_conversion(self, text: str, first_upper: bool, expected: str) -> None:
        assert to_camel_case(text, first_upper) == expected

    @pytest.mark.parametrize("text", ["fooBarBaz", "FOO_BAR_BAZ", "sensor1Reading", "devices.update"])
    def test_idempotent_on_camel_case(self, text: str) -> None:
        once = to_camel_case(text, True)
        assert to_camel_case(once, True) == once

    def test_type_name_has_leading_capital(self) -> None:
        assert to_type_name("publish.devices.1.event") == "PublishDevices1Event"


# ###############
# All Styles
# ###############


@pytest.mark.parametrize("text", ["FOO_BAR_BAZ", "FooBarBaz", "foo-bar-baz"])
def test_all_styles_agree(text: str) -> None:
    """Every spelling of the same words converts to the same identifiers."""
    assert to_camel_case(text, False) == "fooBarBaz"
    assert to_camel_case(text, True) == "FooBarBaz"
    assert to_lower_dash(text) == "foo-bar-baz"
    assert to_upper_underscore(text) == "FOO_BAR_BAZ"
    assert to_lower_underscore(text) == "foo_bar_baz"


def test_make_version() -> None:
    assert make_version("1.0") == "v1_0"
    assert make_version("2") == "v2"
