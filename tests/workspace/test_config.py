# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the generator options and the options file."""

from pathlib import Path

import pytest

from asyncapi_codegen.workspace import (
    OPTIONS_FILE_NAME,
    ConfigurationError,
    GeneratorOptions,
    check_options,
    effective_base_package,
    is_valid_package_name,
    load_generator_options,
)

# ###############
# Helpers
# ###############


def _write_options(tmp_path: Path, content: str) -> Path:
    """Write an options file and return its path."""
    options_file = tmp_path / OPTIONS_FILE_NAME
    options_file.write_text(content, encoding="utf-8")
    return options_file


# ###############
# Normal Cases
# ###############


def test_all_options(tmp_path: Path) -> None:
    """Every known key is mapped onto its GeneratorOptions field."""
    content = """\
target-path: /tmp/generated
base-package: acme.home
character-set: latin-1
validate-topic-syntax: false
keep-original-literal-values: true
"""
    options = load_generator_options(_write_options(tmp_path, content))

    assert options == GeneratorOptions(
        target_path=Path("/tmp/generated"),
        base_package="acme.home",
        character_set="latin-1",
        validate_topic_syntax=False,
        keep_original_literal_values=True,
    )


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    """An empty options file leaves every option at its default."""
    assert load_generator_options(_write_options(tmp_path, "")) == GeneratorOptions()


def test_relative_target_path(tmp_path: Path) -> None:
    """A relative target path is resolved against the directory of the options file."""
    options = load_generator_options(_write_options(tmp_path, "target-path: out/python\n"))
    assert options.target_path == tmp_path / "out" / "python"


def test_with_overrides_ignores_none() -> None:
    options = GeneratorOptions(base_package="acme").with_overrides(base_package=None, validate_topic_syntax=False)
    assert options.base_package == "acme"
    assert not options.validate_topic_syntax


def test_effective_base_package() -> None:
    assert effective_base_package(GeneratorOptions(base_package="acme"), "smarthome") == "acme"
    assert effective_base_package(GeneratorOptions(), "smarthome") == "smarthome"
    assert effective_base_package(GeneratorOptions()) == ""


@pytest.mark.parametrize(
    ("name", "valid"),
    [
        ("acme", True),
        ("acme.home_v2", True),
        ("acme..home", False),
        ("acme.class", False),
        ("2acme", False),
        ("acme-home", False),
    ],
)
def test_is_valid_package_name(name: str, valid: bool) -> None:
    assert is_valid_package_name(name) is valid


def test_check_options_accepts_complete_options(tmp_path: Path) -> None:
    check_options(GeneratorOptions(target_path=tmp_path), "smarthome")


# ###############
# Error Cases
# ###############


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Options file not found"):
        load_generator_options(tmp_path / OPTIONS_FILE_NAME)


def test_invalid_yaml(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Invalid YAML"):
        load_generator_options(_write_options(tmp_path, "target-path: [unclosed\n"))


def test_not_a_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="must be a YAML mapping"):
        load_generator_options(_write_options(tmp_path, "- out\n"))


def test_all_file_errors_are_collected(tmp_path: Path) -> None:
    """Unknown keys and wrongly typed values are reported together."""
    content = """\
target-path: 42
output: somewhere
validate-topic-syntax: "true"
"""
    with pytest.raises(ConfigurationError) as exc_info:
        load_generator_options(_write_options(tmp_path, content))

    errors = exc_info.value.errors
    assert len(errors) == 3
    assert "unknown option 'output'" in errors[0]
    assert "'target-path' must be a string" in errors[1]
    assert "'validate-topic-syntax' must be a boolean" in errors[2]
    assert "  - " in str(exc_info.value)


def test_check_options_collects_errors() -> None:
    options = GeneratorOptions(base_package="acme.class", character_set="no-such-charset")
    with pytest.raises(ConfigurationError) as exc_info:
        check_options(options)

    assert exc_info.value.errors == [
        "target path is not set",
        "unknown character set 'no-such-charset'",
        "base package 'acme.class' is not a valid dotted package name",
    ]


def test_check_options_validates_base_topic_fallback(tmp_path: Path) -> None:
    """Without a base package, the base topic must be a valid package name."""
    with pytest.raises(ConfigurationError, match="base package 'smart-home'"):
        check_options(GeneratorOptions(target_path=tmp_path), "smart-home")
