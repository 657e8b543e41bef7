# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""The code builder protocol.

A :class:`TypeBuilder` is a handle on one declaration scope: either a package
or a type. Declaring a type returns a new handle scoped to that type, so nested
types, properties and methods are added by calling the same operations on the
child handle. How declarations are finally rendered is up to the implementation;
:mod:`asyncapi_codegen.compiler.tree` keeps them in memory for the emitter.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from asyncapi_codegen.compiler.resolver import QualifiedName, TypeExpression

# ###############
# Public Interface
# ###############


class BuilderScopeError(Exception):
    """Raised when a declaration is made in a scope that cannot hold it."""


class DuplicateDeclarationError(Exception):
    """Raised when a scope already declares a member with the same name."""


class TypeKind(Enum):
    """The kind of type a declaration introduces."""

    CLASS = "class"
    INTERFACE = "interface"


@dataclass(frozen=True)
class TypeInformation:
    """Name and documentation of a declared type."""

    name: str
    summary: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class Decorator:
    """A decorator applied to a declaration, e.g. ``dataclasses.dataclass(frozen=True)``."""

    target: QualifiedName
    arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class TypeCustomization:
    """Caller-supplied shape of a declared type.

    Attributes:
        kind: Whether the type is a concrete class or an interface.
        bases: Supertypes the declaration derives from.
        decorators: Decorators applied to the declaration.
    """

    kind: TypeKind = TypeKind.CLASS
    bases: tuple[TypeExpression, ...] = ()
    decorators: tuple[Decorator, ...] = ()


@dataclass(frozen=True)
class PropertyInformation:
    """A typed read/write field of a type."""

    type: TypeExpression
    name: str
    summary: str | None = None
    description: str | None = None
    required: bool = False


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeExpression


@dataclass(frozen=True)
class MethodInformation:
    """A method declared on a type.

    Attributes:
        name: The method name.
        return_type: Declared result type, or None for no result.
        parameters: Parameters after the implicit receiver.
        summary: One-line documentation.
        body: Statements of the method body; empty for abstract methods.
        decorators: Decorators applied to the method.
        delegate_to: Names of parameterless methods called in a chain on the
            receiver, whose result the method returns. Rendered after *body*.
    """

    name: str
    return_type: TypeExpression | None = None
    parameters: tuple[Parameter, ...] = ()
    summary: str | None = None
    body: tuple[str, ...] = ()
    decorators: tuple[Decorator, ...] = ()
    delegate_to: tuple[str, ...] = ()


@dataclass(frozen=True)
class RawContent:
    """Verbatim member content, already in target syntax."""

    lines: tuple[str, ...]
    references: tuple[QualifiedName, ...] = ()


BodyContent = MethodInformation | RawContent


@dataclass
class EnumLiteral:
    """One literal of a declared enumeration.

    Attributes:
        literal: The literal as written in the schema.
        name: The constant name it is declared under.
        value: The constant's value.
        metadata: Auxiliary per-literal data attached by literal customizers.
    """

    literal: str
    name: str
    value: str
    metadata: dict[str, str] = field(default_factory=dict)


LiteralCustomizer = Callable[[str, EnumLiteral], None]


class TypeBuilder(ABC):
    """A declaration scope of the generated output."""

    @property
    @abstractmethod
    def qualified_name(self) -> QualifiedName | None:
        """Name of the type this scope belongs to, or None at package scope."""

    @property
    @abstractmethod
    def package(self) -> str:
        """The dotted package this scope emits into."""

    @abstractmethod
    def create_type(
        self,
        info: TypeInformation,
        customization: TypeCustomization | None = None,
        body: Callable[[TypeBuilder], None] | None = None,
    ) -> TypeBuilder:
        """Declare a type in this scope.

        Args:
            info: Name and documentation of the type.
            customization: Kind, bases and decorators; a plain class if omitted.
            body: Called with the child builder once the type is declared.

        Returns:
            The builder scoped to the new type.
        """

    @abstractmethod
    def create_enum(
        self,
        info: TypeInformation,
        literals: Iterable[str],
        literal_customizer: LiteralCustomizer | None = None,
        keep_original_literal_value: bool = False,
    ) -> QualifiedName:
        """Declare an enumeration in this scope.

        Each literal becomes an upper-snake constant whose value is the literal
        itself when *keep_original_literal_value* is set and the constant name
        otherwise. *literal_customizer* is called once per literal with the
        schema literal and the created :class:`EnumLiteral`.

        Returns:
            The qualified name of the new enumeration.
        """

    @abstractmethod
    def create_property(self, info: PropertyInformation) -> None:
        """Declare a property on the type of this scope.

        Raises:
            BuilderScopeError: If this is a package scope.
        """

    @abstractmethod
    def create_body_content(self, content: BodyContent) -> None:
        """Add member content to the type of this scope.

        Raises:
            BuilderScopeError: If this is a package scope.
        """

    def create_method(self, method: MethodInformation) -> None:
        """Add a method to the type of this scope.

        Raises:
            BuilderScopeError: If this is a package scope.
        """
        self.create_body_content(method)


class PackageTypeBuilder(TypeBuilder):
    """A builder scoped to a package, which can also carry package metadata."""

    @abstractmethod
    def set_metadata(self, metadata: Mapping[str, str]) -> None:
        """Attach descriptive metadata (e.g. title, version) to the package."""


class OutputTarget(ABC):
    """Factory for package scopes of one generation run."""

    @abstractmethod
    def create_builder(self, package: str) -> PackageTypeBuilder:
        """Return a builder scoped to *package*, creating the package on first use."""
