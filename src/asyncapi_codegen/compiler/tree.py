# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""In-memory implementation of the code builder protocol.

Declarations are collected into a tree of packages, top-level units and their
members. The tree performs no I/O; the Python emitter renders it once the whole
generation run has succeeded.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from asyncapi_codegen.compiler.builder import (
    BodyContent,
    BuilderScopeError,
    DuplicateDeclarationError,
    EnumLiteral,
    LiteralCustomizer,
    MethodInformation,
    OutputTarget,
    PackageTypeBuilder,
    PropertyInformation,
    RawContent,
    TypeBuilder,
    TypeCustomization,
    TypeInformation,
)
from asyncapi_codegen.compiler.naming import to_upper_underscore
from asyncapi_codegen.compiler.resolver import QualifiedName

# ###############
# Public Interface
# ###############


@dataclass
class TypeNode:
    """A declared class or interface and its members in declaration order."""

    name: QualifiedName
    info: TypeInformation
    customization: TypeCustomization
    members: list[Member] = field(default_factory=list)

    @property
    def properties(self) -> list[PropertyInformation]:
        return [member for member in self.members if isinstance(member, PropertyInformation)]

    @property
    def methods(self) -> list[MethodInformation]:
        return [member for member in self.members if isinstance(member, MethodInformation)]

    @property
    def nested_types(self) -> list[TypeNode | EnumNode]:
        return [member for member in self.members if isinstance(member, (TypeNode, EnumNode))]


@dataclass
class EnumNode:
    """A declared enumeration."""

    name: QualifiedName
    info: TypeInformation
    literals: list[EnumLiteral] = field(default_factory=list)


Unit = TypeNode | EnumNode
Member = TypeNode | EnumNode | PropertyInformation | MethodInformation | RawContent


@dataclass
class PackageNode:
    """A package with its top-level units and descriptive metadata."""

    name: str
    units: list[Unit] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)


class SourceTree(OutputTarget):
    """The collected output of one generation run."""

    def __init__(self) -> None:
        self._packages: dict[str, PackageNode] = {}

    @property
    def packages(self) -> list[PackageNode]:
        """Packages in order of first use."""
        return list(self._packages.values())

    def create_builder(self, package: str) -> PackageBuilder:
        node = self._packages.get(package)
        if node is None:
            node = PackageNode(name=package)
            self._packages[package] = node
        return PackageBuilder(node)

    def package(self, name: str) -> PackageNode | None:
        return self._packages.get(name)

    def units(self) -> Iterator[tuple[PackageNode, Unit]]:
        """Yield every top-level unit together with its package."""
        for package in self._packages.values():
            for unit in package.units:
                yield package, unit

    def find(self, name: str | QualifiedName) -> Unit | None:
        """Return the type or enumeration declared under a dotted qualified name."""
        wanted = str(name)
        for _, unit in self.units():
            found = _find_in(unit, wanted)
            if found is not None:
                return found
        return None


class PackageBuilder(PackageTypeBuilder):
    """Builder scoped to a package of a SourceTree."""

    def __init__(self, node: PackageNode) -> None:
        self._node = node

    @property
    def qualified_name(self) -> QualifiedName | None:
        return None

    @property
    def package(self) -> str:
        return self._node.name

    def set_metadata(self, metadata: Mapping[str, str]) -> None:
        self._node.metadata.update(metadata)

    def create_type(
        self,
        info: TypeInformation,
        customization: TypeCustomization | None = None,
        body: Callable[[TypeBuilder], None] | None = None,
    ) -> TypeBuilder:
        name = QualifiedName(package=self._node.name, name=info.name)
        node = TypeNode(name=name, info=info, customization=customization or TypeCustomization())
        _declare(self._node.units, node, f"package '{self._node.name}'")
        child = TypeScopeBuilder(node)
        if body is not None:
            body(child)
        return child

    def create_enum(
        self,
        info: TypeInformation,
        literals: Iterable[str],
        literal_customizer: LiteralCustomizer | None = None,
        keep_original_literal_value: bool = False,
    ) -> QualifiedName:
        name = QualifiedName(package=self._node.name, name=info.name)
        node = _enum_node(name, info, literals, literal_customizer, keep_original_literal_value)
        _declare(self._node.units, node, f"package '{self._node.name}'")
        return name

    def create_property(self, info: PropertyInformation) -> None:
        raise BuilderScopeError(
            f"Unable to create property '{info.name}' on package level ('{self._node.name}')"
        )

    def create_body_content(self, content: BodyContent) -> None:
        raise BuilderScopeError(f"Unable to create method on package level ('{self._node.name}')")


class TypeScopeBuilder(TypeBuilder):
    """Builder scoped to a declared type."""

    def __init__(self, node: TypeNode) -> None:
        self._node = node

    @property
    def node(self) -> TypeNode:
        return self._node

    @property
    def qualified_name(self) -> QualifiedName | None:
        return self._node.name

    @property
    def package(self) -> str:
        return self._node.name.package

    def create_type(
        self,
        info: TypeInformation,
        customization: TypeCustomization | None = None,
        body: Callable[[TypeBuilder], None] | None = None,
    ) -> TypeBuilder:
        node = TypeNode(
            name=self._node.name.nested(info.name),
            info=info,
            customization=customization or TypeCustomization(),
        )
        _declare(self._node.members, node, f"type '{self._node.name}'")
        child = TypeScopeBuilder(node)
        if body is not None:
            body(child)
        return child

    def create_enum(
        self,
        info: TypeInformation,
        literals: Iterable[str],
        literal_customizer: LiteralCustomizer | None = None,
        keep_original_literal_value: bool = False,
    ) -> QualifiedName:
        name = self._node.name.nested(info.name)
        node = _enum_node(name, info, literals, literal_customizer, keep_original_literal_value)
        _declare(self._node.members, node, f"type '{self._node.name}'")
        return name

    def create_property(self, info: PropertyInformation) -> None:
        _declare(self._node.members, info, f"type '{self._node.name}'")

    def create_body_content(self, content: BodyContent) -> None:
        if isinstance(content, MethodInformation):
            _declare(self._node.members, content, f"type '{self._node.name}'")
        else:
            self._node.members.append(content)


def constant_name(literal: str) -> str:
    """Return the upper-snake constant an enum literal is declared under."""
    name = to_upper_underscore(literal)
    if not name or name[0].isdigit():
        name = f"VALUE_{name}" if name else "VALUE"
    return name


# ################
# Implementation
# ################


def _member_name(member: Member) -> str | None:
    if isinstance(member, (TypeNode, EnumNode)):
        return member.name.name
    if isinstance(member, (PropertyInformation, MethodInformation)):
        return member.name
    return None


def _declare(members: list, member: Member, scope: str) -> None:
    name = _member_name(member)
    if name is not None and any(_member_name(existing) == name for existing in members):
        raise DuplicateDeclarationError(f"Duplicate declaration of '{name}' in {scope}")
    members.append(member)


def _enum_node(
    name: QualifiedName,
    info: TypeInformation,
    literals: Iterable[str],
    literal_customizer: LiteralCustomizer | None,
    keep_original_literal_value: bool,
) -> EnumNode:
    node = EnumNode(name=name, info=info)
    seen: set[str] = set()
    for literal in literals:
        constant = constant_name(literal)
        if constant in seen:
            raise DuplicateDeclarationError(
                f"Enum literal '{literal}' of '{name}' collides with constant '{constant}'"
            )
        seen.add(constant)
        entry = EnumLiteral(
            literal=literal,
            name=constant,
            value=literal if keep_original_literal_value else constant,
        )
        if literal_customizer is not None:
            literal_customizer(literal, entry)
        node.literals.append(entry)
    return node


def _find_in(unit: Unit, wanted: str) -> Unit | None:
    if str(unit.name) == wanted:
        return unit
    if isinstance(unit, TypeNode):
        for nested in unit.nested_types:
            found = _find_in(nested, wanted)
            if found is not None:
                return found
    return None
