# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type system representations for the schema model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class PrimitiveKind(Enum):
    """Primitive value kinds a schema may declare."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    DATETIME = "datetime"


class PrimitiveType(BaseModel):
    """A named primitive value, e.g. a string payload or an integer property."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["primitive"] = "primitive"
    name: str
    primitive: PrimitiveKind
    title: str | None = None
    description: str | None = None


class ObjectType(BaseModel):
    """A structured type with named properties.

    Attributes:
        namespace: Output namespace the type belongs to (``types`` or ``messages``).
        parents: Names of the enclosing types or messages, outermost first.
        name: The type's own name as written in the document.
        properties: The type's properties in declaration order.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["object"] = "object"
    namespace: str
    parents: tuple[str, ...] = ()
    name: str
    properties: tuple[Property, ...] = ()
    title: str | None = None
    description: str | None = None


class EnumType(BaseModel):
    """An enumeration of string literals, kept in declaration order without duplicates."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["enum"] = "enum"
    namespace: str
    parents: tuple[str, ...] = ()
    name: str
    literals: tuple[str, ...] = ()
    title: str | None = None
    description: str | None = None

    @field_validator("literals")
    @classmethod
    def _unique_literals(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(dict.fromkeys(value))


class ArrayType(BaseModel):
    """A collection of items; ``unique`` selects set semantics over sequence semantics."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["array"] = "array"
    name: str
    item_type: TypeRef
    unique: bool = False
    title: str | None = None
    description: str | None = None


class TypeReference(BaseModel):
    """An unresolved pointer to a type registered under ``(namespace, name)``."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["reference"] = "reference"
    namespace: str
    name: str


# A declared type: one of the concrete variants.
Type = Annotated[
    PrimitiveType | ObjectType | EnumType | ArrayType,
    _Field(discriminator="kind"),
]

# Anything that may stand where a type is expected: a declared type or a reference.
TypeRef = Annotated[
    PrimitiveType | ObjectType | EnumType | ArrayType | TypeReference,
    _Field(discriminator="kind"),
]


class Property(BaseModel):
    """A named, typed member of an ObjectType."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: TypeRef
    required: bool = False
    description: str | None = None


# Resolve forward references for models that use TypeRef.
ObjectType.model_rebuild()
ArrayType.model_rebuild()
Property.model_rebuild()
