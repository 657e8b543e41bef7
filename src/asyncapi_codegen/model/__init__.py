# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Schema model for API descriptions (types, messages, topics)."""

from asyncapi_codegen.model.entities import (
    Information,
    Message,
    MessageRef,
    MessageReference,
    Schema,
    Topic,
)
from asyncapi_codegen.model.registry import (
    MESSAGES_NAMESPACE,
    TYPES_NAMESPACE,
    DuplicateDefinitionError,
    Registry,
    UnknownMessageError,
    UnknownReferenceError,
    UnknownTypeError,
)
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

__all__ = [
    # Type system
    "PrimitiveKind",
    "PrimitiveType",
    "ObjectType",
    "EnumType",
    "ArrayType",
    "TypeReference",
    "Type",
    "TypeRef",
    "Property",
    # Entities
    "Message",
    "MessageReference",
    "MessageRef",
    "Topic",
    "Information",
    "Schema",
    # Registry
    "TYPES_NAMESPACE",
    "MESSAGES_NAMESPACE",
    "Registry",
    "UnknownReferenceError",
    "UnknownTypeError",
    "UnknownMessageError",
    "DuplicateDefinitionError",
]
