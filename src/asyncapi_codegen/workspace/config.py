# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generator options and the YAML parser for the options file.

Misconfigurations are never reported one at a time: both the options check and
the file parser collect every problem and raise a single
:class:`ConfigurationError` listing all of them.
"""

from __future__ import annotations

import codecs
import keyword
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

OPTIONS_FILE_NAME = ".asyncapi-codegen.yaml"


class ConfigurationError(Exception):
    """Raised when generator options are missing or invalid.

    Attributes:
        errors: Every problem found, in the order they were detected.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Invalid generator configuration:\n" + "\n".join(f"  - {e}" for e in self.errors))


@dataclass(frozen=True)
class GeneratorOptions:
    """Settings of one generation run.

    Attributes:
        target_path: Directory the generated package tree is written to.
        base_package: Package prefix of all generated names. Falls back to the
            schema's base topic, then to no prefix.
        character_set: Encoding of the written source files.
        validate_topic_syntax: Fail on topics outside the topic grammar instead
            of classifying them by fallback.
        keep_original_literal_values: Use schema literals as enum values
            instead of the generated constant names.
    """

    target_path: Path | None = None
    base_package: str | None = None
    character_set: str = "utf-8"
    validate_topic_syntax: bool = True
    keep_original_literal_values: bool = False

    def with_overrides(self, **changes: object) -> GeneratorOptions:
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{key: value for key, value in changes.items() if value is not None})


def effective_base_package(options: GeneratorOptions, base_topic: str | None = None) -> str:
    """Return the configured base package, else *base_topic*, else the empty prefix."""
    return options.base_package or base_topic or ""


def check_options(options: GeneratorOptions, base_topic: str | None = None) -> None:
    """Verify that *options* can drive a generation run.

    Args:
        options: The options to check.
        base_topic: The schema's base topic, used when no base package is set.

    Raises:
        ConfigurationError: Listing every problem found.
    """
    errors = _option_errors(options, effective_base_package(options, base_topic))
    if errors:
        raise ConfigurationError(errors)


def is_valid_package_name(name: str) -> bool:
    """Return True if *name* is a dotted sequence of non-keyword identifiers."""
    return all(segment.isidentifier() and not keyword.iskeyword(segment) for segment in name.split("."))


def load_generator_options(path: Path) -> GeneratorOptions:
    """Load generator options from a YAML options file.

    A relative ``target-path`` is resolved against the directory of the file.

    Args:
        path: Path to the options file.

    Returns:
        The options read from the file. They are not checked for completeness;
        use :func:`check_options` once command-line overrides are applied.

    Raises:
        ConfigurationError: If the file cannot be read or holds invalid entries.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError([f"Options file not found: {path}"]) from None
    except OSError as exc:
        raise ConfigurationError([f"Cannot read options file: {exc}"]) from exc

    return _parse_generator_options(text, source_label=str(path), base_directory=path.parent)


# ################
# Implementation
# ################

_KNOWN_KEYS = (
    "target-path",
    "base-package",
    "character-set",
    "validate-topic-syntax",
    "keep-original-literal-values",
)


def _parse_generator_options(
    text: str,
    source_label: str = "<string>",
    base_directory: Path | None = None,
) -> GeneratorOptions:
    """Parse options YAML text into GeneratorOptions.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).
        base_directory: Directory relative target paths are resolved against.

    Raises:
        ConfigurationError: If the YAML is invalid or any entry has the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError([f"Invalid YAML in {source_label}: {exc}"]) from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError([f"{source_label}: options file must be a YAML mapping"])

    errors: list[str] = []
    for key in data:
        if key not in _KNOWN_KEYS:
            errors.append(f"{source_label}: unknown option '{key}'")

    target_path_text = _optional_string(data, "target-path", source_label, errors)
    base_package = _optional_string(data, "base-package", source_label, errors)
    character_set = _optional_string(data, "character-set", source_label, errors)
    validate_topic_syntax = _optional_bool(data, "validate-topic-syntax", source_label, errors)
    keep_original = _optional_bool(data, "keep-original-literal-values", source_label, errors)

    if errors:
        raise ConfigurationError(errors)

    target_path: Path | None = None
    if target_path_text is not None:
        target_path = Path(target_path_text)
        if base_directory is not None and not target_path.is_absolute():
            target_path = base_directory / target_path

    return GeneratorOptions().with_overrides(
        target_path=target_path,
        base_package=base_package,
        character_set=character_set,
        validate_topic_syntax=validate_topic_syntax,
        keep_original_literal_values=keep_original,
    )


def _optional_string(mapping: dict[str, object], key: str, source_label: str, errors: list[str]) -> str | None:
    """Extract an optional string field, recording an error if it has another type."""
    if key not in mapping or mapping[key] is None:
        return None
    value = mapping[key]
    if not isinstance(value, str):
        errors.append(f"{source_label}: '{key}' must be a string")
        return None
    return value


def _optional_bool(mapping: dict[str, object], key: str, source_label: str, errors: list[str]) -> bool | None:
    """Extract an optional boolean field, recording an error if it has another type."""
    if key not in mapping or mapping[key] is None:
        return None
    value = mapping[key]
    if not isinstance(value, bool):
        errors.append(f"{source_label}: '{key}' must be a boolean")
        return None
    return value


def _option_errors(options: GeneratorOptions, base_package: str) -> list[str]:
    errors: list[str] = []
    if options.target_path is None or not str(options.target_path):
        errors.append("target path is not set")
    try:
        codecs.lookup(options.character_set)
    except LookupError:
        errors.append(f"unknown character set '{options.character_set}'")
    if base_package and not is_valid_package_name(base_package):
        errors.append(f"base package '{base_package}' is not a valid dotted package name")
    return errors
