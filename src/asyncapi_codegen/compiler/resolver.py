# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Resolution of schema types into fully-qualified output names and type expressions.

Declared object and enum types become :class:`QualifiedName` values composed of
the base package, the type's namespace, the chain of enclosing type names and
the type's own name. Property types become :class:`TypeExpression` trees:
primitives map through a caller-supplied :class:`TypeTable`, arrays wrap their
recursively resolved item type in a set or sequence collection, and references
are followed through the schema's :class:`~asyncapi_codegen.model.registry.Registry`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import assert_never

from asyncapi_codegen.compiler.naming import to_type_name
from asyncapi_codegen.model.registry import Registry
from asyncapi_codegen.model.types import (
    ArrayType,
    EnumType,
    ObjectType,
    PrimitiveKind,
    PrimitiveType,
    TypeRef,
    TypeReference,
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class QualifiedName:
    """A fully-qualified output identifier.

    Attributes:
        package: Dotted package the type lives in; empty for built-in names.
        name: The type's own name.
        enclosing: Names of the enclosing types, outermost first.
        module: Module to import the name from, for names not generated by this
            tool (e.g. ``datetime``). Generated names derive their module from
            the package and the outermost enclosing type.
    """

    package: str
    name: str
    enclosing: tuple[str, ...] = ()
    module: str | None = None

    @classmethod
    def builtin(cls, name: str) -> QualifiedName:
        """Return the name of a built-in that needs no import."""
        return cls(package="", name=name)

    @classmethod
    def external(cls, module: str, name: str) -> QualifiedName:
        """Return a name imported from an existing module."""
        return cls(package=module, name=name, module=module)

    @property
    def is_builtin(self) -> bool:
        return not self.package and self.module is None

    @property
    def is_generated(self) -> bool:
        return bool(self.package) and self.module is None

    @property
    def top_level(self) -> str:
        """The outermost type name, which owns the module the name lives in."""
        return self.enclosing[0] if self.enclosing else self.name

    @property
    def local_name(self) -> str:
        """The dotted name relative to its module, e.g. ``Device.Location``."""
        return ".".join((*self.enclosing, self.name))

    def nested(self, name: str) -> QualifiedName:
        """Return the name of a type declared inside this one."""
        return QualifiedName(
            package=self.package,
            name=name,
            enclosing=(*self.enclosing, self.name),
            module=self.module,
        )

    def __str__(self) -> str:
        return ".".join(part for part in (self.package, self.local_name) if part)


@dataclass(frozen=True)
class TypeExpression:
    """A possibly generic reference to an output type, e.g. ``list[Device]``."""

    target: QualifiedName
    arguments: tuple[TypeExpression, ...] = ()

    def render(self, qualify: Callable[[QualifiedName], str] = str) -> str:
        """Render the expression, spelling each name with *qualify*."""
        head = qualify(self.target)
        if not self.arguments:
            return head
        return f"{head}[{', '.join(argument.render(qualify) for argument in self.arguments)}]"

    def references(self) -> Iterator[QualifiedName]:
        """Yield every qualified name the expression mentions, outermost first."""
        yield self.target
        for argument in self.arguments:
            yield from argument.references()

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class TypeTable:
    """Target-language names for primitives and collections.

    Attributes:
        boxed: Names used where a value may be absent (properties).
        unboxed: Names used where a value is always present.
        unique_collection: Collection wrapper for arrays with unique items.
        sequence_collection: Collection wrapper for ordered arrays.
    """

    boxed: Mapping[PrimitiveKind, QualifiedName]
    unboxed: Mapping[PrimitiveKind, QualifiedName]
    unique_collection: QualifiedName = field(default_factory=lambda: QualifiedName.builtin("set"))
    sequence_collection: QualifiedName = field(default_factory=lambda: QualifiedName.builtin("list"))


_PYTHON_PRIMITIVES = {
    PrimitiveKind.BOOLEAN: QualifiedName.builtin("bool"),
    PrimitiveKind.INTEGER: QualifiedName.builtin("int"),
    PrimitiveKind.NUMBER: QualifiedName.builtin("float"),
    PrimitiveKind.STRING: QualifiedName.builtin("str"),
    PrimitiveKind.DATETIME: QualifiedName.external("datetime", "datetime"),
}

# Python has no separate boxed representation; optionality is spelled by the emitter.
PYTHON_TYPE_TABLE = TypeTable(boxed=_PYTHON_PRIMITIVES, unboxed=_PYTHON_PRIMITIVES)


def join_package(*parts: str | None) -> str:
    """Join package segments with dots, skipping empty ones."""
    return ".".join(part for part in parts if part)


class TypeResolver:
    """Resolve schema types against a registry into output names and expressions.

    Args:
        registry: The schema's type registry, used to follow TypeReferences.
        base_package: Package prefix of all generated names; may be empty.
        type_table: Target names for primitives and collections.
    """

    def __init__(
        self,
        registry: Registry,
        base_package: str = "",
        type_table: TypeTable = PYTHON_TYPE_TABLE,
    ) -> None:
        self._registry = registry
        self._base_package = base_package
        self._type_table = type_table

    @property
    def base_package(self) -> str:
        return self._base_package

    @property
    def registry(self) -> Registry:
        return self._registry

    def package_name(self, local: str | None = None) -> str:
        """Return *local* qualified by the base package."""
        return join_package(self._base_package, local)

    def resolve_output_name(self, type_ref: TypeRef) -> QualifiedName:
        """Return the qualified output name of an object or enum type.

        References are followed through the registry first.

        Raises:
            UnknownTypeError: If a reference does not resolve.
            ValueError: If the type is a primitive or an array, which have no
                generated declaration of their own.
        """
        match type_ref:
            case TypeReference():
                return self.resolve_output_name(self._registry.lookup_type(type_ref))
            case ObjectType() | EnumType():
                return QualifiedName(
                    package=self.package_name(type_ref.namespace),
                    name=to_type_name(type_ref.name),
                    enclosing=tuple(to_type_name(parent) for parent in type_ref.parents),
                )
            case PrimitiveType() | ArrayType():
                raise ValueError(f"Type '{type_ref.name}' of kind '{type_ref.kind}' has no output name")
            case _:
                assert_never(type_ref)

    def resolve_property_type(self, type_ref: TypeRef) -> TypeExpression:
        """Return the type expression a property of type *type_ref* is declared with.

        Primitives always use the boxed table because properties may be absent.

        Raises:
            UnknownTypeError: If a reference, at any depth, does not resolve.
        """
        match type_ref:
            case PrimitiveType():
                return TypeExpression(self._type_table.boxed[type_ref.primitive])
            case ArrayType():
                collection = (
                    self._type_table.unique_collection if type_ref.unique else self._type_table.sequence_collection
                )
                return TypeExpression(collection, (self.resolve_property_type(type_ref.item_type),))
            case ObjectType() | EnumType():
                return TypeExpression(self.resolve_output_name(type_ref))
            case TypeReference():
                return self.resolve_property_type(self._registry.lookup_type(type_ref))
            case _:
                assert_never(type_ref)

    def resolve_native_type(self, primitive: PrimitiveKind, *, boxed: bool = False) -> TypeExpression:
        """Return the expression for a primitive in a context where it is always present."""
        table = self._type_table.boxed if boxed else self._type_table.unboxed
        return TypeExpression(table[primitive])
