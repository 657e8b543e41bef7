# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Loader for AsyncAPI 1.0.0 documents encoded as YAML.

The loader performs a structural decode of the document into the schema model.
It does not resolve references: ``$ref`` entries become
:class:`~asyncapi_codegen.model.types.TypeReference` and
:class:`~asyncapi_codegen.model.entities.MessageReference` values that the
generator resolves through the registry.

Inline types are named after their position in the document. A property's type
is named after the property and nested under its enclosing object; array items
are named after the array with an ``Item`` suffix; a message payload is named
``payload`` and nested under its message.
"""

from __future__ import annotations

import re
from pathlib import Path

import yaml

from asyncapi_codegen.model.entities import Information, Message, MessageRef, MessageReference, Schema, Topic
from asyncapi_codegen.model.registry import MESSAGES_NAMESPACE, TYPES_NAMESPACE
from asyncapi_codegen.model.types import (
    ArrayType,
    EnumType,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    Property,
    Type,
    TypeRef,
    TypeReference,
)

# ###############
# Public Interface
# ###############

SUPPORTED_VERSION = "1.0.0"


class ParserError(Exception):
    """Raised when a document cannot be read or does not describe a valid API."""


def load_schema(path: Path) -> Schema:
    """Load and decode an AsyncAPI document.

    Args:
        path: Path to the YAML document.

    Returns:
        The decoded Schema.

    Raises:
        ParserError: If the file cannot be read or the document is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ParserError(f"Document not found: {path}") from None
    except OSError as exc:
        raise ParserError(f"Cannot read document: {exc}") from exc

    return parse_schema(text, source_label=str(path))


def parse_schema(text: str, source_label: str = "<string>") -> Schema:
    """Decode AsyncAPI YAML text into a Schema.

    Args:
        text: Raw YAML content.
        source_label: Human-readable label used in error messages (e.g. the file path).

    Raises:
        ParserError: If the YAML is invalid or the document is not a supported AsyncAPI description.
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParserError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(document, dict):
        raise ParserError(f"{source_label}: document must be a YAML mapping")

    return _DocumentParser(source_label).parse(document)


# ################
# Implementation
# ################

_REFERENCE_SEPARATOR = re.compile(r"/+")


class _DocumentParser:
    """Decodes one document, labelling errors with the path of the offending entry."""

    def __init__(self, source_label: str) -> None:
        self._source = source_label

    def parse(self, document: dict) -> Schema:
        version = self._require_string(document, "asyncapi", "")
        if version != SUPPORTED_VERSION:
            raise ParserError(
                f"{self._source}: only version '{SUPPORTED_VERSION}' is supported, this is version '{version}'"
            )

        components = self._optional_mapping(document, "components", "") or {}
        messages = self._optional_mapping(components, "messages", "components") or {}
        schemas = self._optional_mapping(components, "schemas", "components") or {}

        return Schema(
            base_topic=self._optional_string(document, "baseTopic", ""),
            host=self._require_string(document, "host", ""),
            schemes=tuple(self._optional_string_list(document, "schemes", "")),
            information=self._parse_info(self._require_mapping(document, "info", "")),
            topics=tuple(
                self._parse_topic(name, value)
                for name, value in self._require_mapping(document, "topics", "").items()
            ),
            messages=tuple(
                self._parse_message(str(name), self._as_mapping(value, f"components.messages.{name}"))
                for name, value in messages.items()
            ),
            types=tuple(
                self._parse_explicit_type(
                    TYPES_NAMESPACE, (), str(name), self._as_mapping(value, f"components.schemas.{name}")
                )
                for name, value in schemas.items()
            ),
        )

    def _parse_info(self, info: dict) -> Information:
        version = info.get("version")
        # An unquoted version such as 1.0 is read as a number.
        if isinstance(version, (int, float)) and not isinstance(version, bool):
            info = {**info, "version": str(version)}
        return Information(
            title=self._optional_string(info, "title", "info"),
            version=self._require_string(info, "version", "info"),
            description=self._optional_string(info, "description", "info"),
        )

    def _parse_topic(self, name: object, value: object) -> Topic:
        name = str(name)
        location = f"topics.{name}"
        entry = self._as_mapping(value, location)
        publish = self._optional_mapping(entry, "publish", location)
        subscribe = self._optional_mapping(entry, "subscribe", location)
        return Topic(
            name=name,
            publish=None if publish is None else self._parse_message_ref(f"Publish.{name}", publish, location),
            subscribe=(
                None if subscribe is None else self._parse_message_ref(f"Subscribe.{name}", subscribe, location)
            ),
        )

    def _parse_message_ref(self, name: str, entry: dict, location: str) -> MessageRef:
        ref = self._optional_string(entry, "$ref", location)
        if ref is not None:
            return MessageReference(name=self._reference_tokens(ref, location)[-1])
        return self._parse_message(name, entry)

    def _parse_message(self, name: str, entry: dict) -> Message:
        location = f"message '{name}'"
        deprecated = entry.get("deprecated", False)
        if not isinstance(deprecated, bool):
            raise ParserError(f"{self._source}: {location}: 'deprecated' must be a boolean")
        return Message(
            name=name,
            summary=self._optional_string(entry, "summary", location),
            description=self._optional_string(entry, "description", location),
            deprecated=deprecated,
            payload=self._parse_type(
                MESSAGES_NAMESPACE, (name,), "payload", self._require_mapping(entry, "payload", location)
            ),
        )

    def _parse_type(self, namespace: str, parents: tuple[str, ...], name: str, entry: dict) -> TypeRef:
        location = ".".join((namespace, *parents, name))
        ref = self._optional_string(entry, "$ref", location)
        if ref is not None:
            tokens = self._reference_tokens(ref, location)
            if len(tokens) < 2:
                raise ParserError(f"{self._source}: {location}: type reference '{ref}' names no namespace")
            return TypeReference(namespace=_map_namespace(tokens[-2]), name=tokens[-1])
        return self._parse_explicit_type(namespace, parents, name, entry)

    def _parse_explicit_type(self, namespace: str, parents: tuple[str, ...], name: str, entry: dict) -> Type:
        location = ".".join((namespace, *parents, name))
        type_name = self._require_string(entry, "type", location)
        common = {
            "title": self._optional_string(entry, "title", location),
            "description": self._optional_string(entry, "description", location),
        }

        if type_name == "boolean":
            return PrimitiveType(name=name, primitive=PrimitiveKind.BOOLEAN, **common)
        if type_name == "integer":
            return PrimitiveType(name=name, primitive=PrimitiveKind.INTEGER, **common)
        if type_name == "number":
            return PrimitiveType(name=name, primitive=PrimitiveKind.NUMBER, **common)
        if type_name == "string":
            if "enum" in entry:
                literals = entry["enum"]
                if not isinstance(literals, list) or not all(isinstance(lit, str) for lit in literals):
                    raise ParserError(f"{self._source}: {location}: 'enum' must be a list of strings")
                return EnumType(namespace=namespace, parents=parents, name=name, literals=tuple(literals), **common)
            return PrimitiveType(name=name, primitive=self._string_kind(entry, location), **common)
        if type_name == "array":
            unique = entry.get("uniqueItems", False)
            if not isinstance(unique, bool):
                raise ParserError(f"{self._source}: {location}: 'uniqueItems' must be a boolean")
            items = self._require_mapping(entry, "items", location)
            return ArrayType(
                name=name,
                item_type=self._parse_type(namespace, parents, f"{name}Item", items),
                unique=unique,
                **common,
            )
        if type_name == "object":
            return self._parse_object(namespace, parents, name, entry, location, common)
        raise ParserError(f"{self._source}: {location}: unsupported type '{type_name}'")

    def _parse_object(
        self,
        namespace: str,
        parents: tuple[str, ...],
        name: str,
        entry: dict,
        location: str,
        common: dict,
    ) -> ObjectType:
        required = set(self._optional_string_list(entry, "required", location))
        properties = self._optional_mapping(entry, "properties", location) or {}
        nested_parents = (*parents, name)

        parsed: list[Property] = []
        for property_name, value in properties.items():
            property_name = str(property_name)
            values = self._as_mapping(value, f"{location}.{property_name}")
            parsed.append(
                Property(
                    name=property_name,
                    description=self._optional_string(values, "description", f"{location}.{property_name}"),
                    required=property_name in required,
                    type=self._parse_type(namespace, nested_parents, property_name, values),
                )
            )
        return ObjectType(namespace=namespace, parents=parents, name=name, properties=tuple(parsed), **common)

    def _string_kind(self, entry: dict, location: str) -> PrimitiveKind:
        data_format = self._optional_string(entry, "format", location)
        if data_format is None:
            return PrimitiveKind.STRING
        if data_format == "date-time":
            return PrimitiveKind.DATETIME
        raise ParserError(f"{self._source}: {location}: unknown data format '{data_format}'")

    def _reference_tokens(self, ref: str, location: str) -> list[str]:
        tokens = [token for token in _REFERENCE_SEPARATOR.split(ref) if token]
        if not tokens:
            raise ParserError(f"{self._source}: {location}: empty reference")
        return tokens

    # Field access helpers

    def _label(self, location: str) -> str:
        return f"{self._source}: {location}" if location else self._source

    def _as_mapping(self, value: object, location: str) -> dict:
        if not isinstance(value, dict):
            raise ParserError(f"{self._label(location)} must be a YAML mapping")
        return value

    def _require_mapping(self, mapping: dict, key: str, location: str) -> dict:
        if key not in mapping:
            raise ParserError(f"{self._label(location)}: missing required field '{key}'")
        return self._as_mapping(mapping[key], f"{location}.{key}" if location else key)

    def _optional_mapping(self, mapping: dict, key: str, location: str) -> dict | None:
        if mapping.get(key) is None:
            return None
        return self._as_mapping(mapping[key], f"{location}.{key}" if location else key)

    def _require_string(self, mapping: dict, key: str, location: str) -> str:
        if key not in mapping:
            raise ParserError(f"{self._label(location)}: missing required field '{key}'")
        value = mapping[key]
        if not isinstance(value, str):
            raise ParserError(f"{self._label(location)}: '{key}' must be a string")
        return value

    def _optional_string(self, mapping: dict, key: str, location: str) -> str | None:
        if mapping.get(key) is None:
            return None
        return self._require_string(mapping, key, location)

    def _optional_string_list(self, mapping: dict, key: str, location: str) -> list[str]:
        value = mapping.get(key)
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            raise ParserError(f"{self._label(location)}: '{key}' must be a list of strings")
        return list(dict.fromkeys(value))


def _map_namespace(segment: str) -> str:
    if segment == "schemas":
        return TYPES_NAMESPACE
    return segment
