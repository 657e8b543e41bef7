# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Immutable lookup tables for the types and messages declared by a schema.

A Registry is built once per generation run from a complete Schema and is then
shared by reference with every stage that needs to follow a TypeReference or a
MessageReference.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import assert_never

from asyncapi_codegen.model.entities import Message, MessageRef, MessageReference, Schema
from asyncapi_codegen.model.types import (
    ArrayType,
    EnumType,
    ObjectType,
    PrimitiveType,
    Type,
    TypeRef,
    TypeReference,
)

# ###############
# Public Interface
# ###############

TYPES_NAMESPACE = "types"
MESSAGES_NAMESPACE = "messages"


class UnknownReferenceError(Exception):
    """Raised when a reference does not resolve to a declared definition."""

    def __init__(self, message: str, reference: str) -> None:
        super().__init__(message)
        self.reference = reference


class UnknownTypeError(UnknownReferenceError):
    """Raised when a TypeReference names no registered type."""


class UnknownMessageError(UnknownReferenceError):
    """Raised when a MessageReference names no component message."""


class DuplicateDefinitionError(Exception):
    """Raised when two definitions are registered under the same key."""


class Registry:
    """Read-only index of a schema's types and component messages."""

    def __init__(self, types: Mapping[tuple[str, str], Type], messages: Mapping[str, Message]) -> None:
        self._types: Mapping[tuple[str, str], Type] = MappingProxyType(dict(types))
        self._messages: Mapping[str, Message] = MappingProxyType(dict(messages))

    @classmethod
    def from_schema(cls, schema: Schema) -> Registry:
        """Index the component types and messages of *schema*.

        Object and enum types are keyed by their own namespace; primitive and
        array components live in the ``types`` namespace.

        Raises:
            DuplicateDefinitionError: If two types or two messages share a key.
        """
        types: dict[tuple[str, str], Type] = {}
        for declared in schema.types:
            key = (_namespace_of(declared), declared.name)
            if key in types:
                raise DuplicateDefinitionError(f"Duplicate type '{key[0]}.{key[1]}'")
            types[key] = declared

        messages: dict[str, Message] = {}
        for message in schema.messages:
            if message.name in messages:
                raise DuplicateDefinitionError(f"Duplicate message '{message.name}'")
            messages[message.name] = message

        return cls(types, messages)

    @property
    def types(self) -> Mapping[tuple[str, str], Type]:
        return self._types

    @property
    def messages(self) -> Mapping[str, Message]:
        return self._messages

    def lookup_type(self, reference: TypeReference) -> Type:
        """Return the type registered under the reference's ``(namespace, name)``.

        Raises:
            UnknownTypeError: If nothing is registered under that key.
        """
        found = self._types.get((reference.namespace, reference.name))
        if found is None:
            label = f"{reference.namespace}.{reference.name}"
            raise UnknownTypeError(f"Unknown type '{label}' referenced", label)
        return found

    def resolve_type(self, type_ref: TypeRef) -> Type:
        """Return *type_ref* itself, or the registered type it points to."""
        if isinstance(type_ref, TypeReference):
            return self.lookup_type(type_ref)
        return type_ref

    def lookup_message(self, message_ref: MessageRef) -> Message:
        """Return the message itself, or the component message a reference names.

        Raises:
            UnknownMessageError: If a reference names no component message.
        """
        if isinstance(message_ref, MessageReference):
            found = self._messages.get(message_ref.name)
            if found is None:
                raise UnknownMessageError(
                    f"Unknown message '{message_ref.name}' referenced", message_ref.name
                )
            return found
        return message_ref


# ################
# Implementation
# ################


def _namespace_of(declared: Type) -> str:
    match declared:
        case ObjectType() | EnumType():
            return declared.namespace
        case PrimitiveType() | ArrayType():
            return TYPES_NAMESPACE
        case _:
            assert_never(declared)
