# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Renders a SourceTree as a tree of Python packages and modules.

Every package becomes a directory with an ``__init__.py``; the package that
carries metadata gets the API title as its docstring and the API version as
``__version__``. Every top-level type becomes its own module named after the
type in lower snake case. Generated names referenced from annotations are
imported under ``typing.TYPE_CHECKING`` and spelled fully qualified, so modules
never import each other at runtime.

All files are rendered in memory before the first one is written.
"""

from __future__ import annotations

import json
import keyword
import logging
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateError

from asyncapi_codegen.compiler.builder import (
    Decorator,
    MethodInformation,
    PropertyInformation,
    RawContent,
    TypeKind,
)
from asyncapi_codegen.compiler.naming import to_lower_underscore
from asyncapi_codegen.compiler.resolver import QualifiedName, TypeExpression
from asyncapi_codegen.compiler.tree import EnumNode, PackageNode, SourceTree, TypeNode, Unit
from asyncapi_codegen.emitter.templates import HEADER, TEMPLATES

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

WIRE_NAME_KEY = "wire_name"


class GenerationError(Exception):
    """Raised when the generated output cannot be rendered or written."""


class PythonEmitter:
    """Renders and writes Python sources.

    Args:
        character_set: Encoding of the written files.
    """

    def __init__(self, character_set: str = "utf-8") -> None:
        self._character_set = character_set
        self._env = Environment(
            loader=DictLoader(TEMPLATES),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, tree: SourceTree) -> dict[PurePosixPath, str]:
        """Render every file of *tree*, keyed by its path relative to the output root.

        Raises:
            GenerationError: If a name cannot be expressed in Python or two
                declarations map to the same file.
        """
        files: dict[PurePosixPath, str] = {}
        package_dirs: set[PurePosixPath] = set()

        for package in tree.packages:
            for directory in _package_directories(package.name):
                package_dirs.add(directory)
                files.setdefault(directory / "__init__.py", self._render_plain_package())
            init_path = _package_directory(package.name) / "__init__.py"
            if package.metadata:
                files[init_path] = self._render_package(package)
            else:
                files.setdefault(init_path, self._render_plain_package())

        for package, unit in tree.units():
            module = _module_name(unit.name)
            path = _package_directory(package.name) / f"{module.rsplit('.', 1)[-1]}.py"
            if path in files:
                raise GenerationError(f"Declaration '{unit.name}' collides with another declaration in '{path}'")
            if path.with_suffix("") in package_dirs:
                raise GenerationError(f"Declaration '{unit.name}' collides with package directory '{path.with_suffix('')}'")
            files[path] = _ModuleRenderer(self, module).render(unit)

        return files

    def write(self, tree: SourceTree, target: Path) -> list[Path]:
        """Render *tree* and write it below *target*.

        Returns:
            The written files, in rendering order.

        Raises:
            GenerationError: If rendering fails or a file cannot be written.
        """
        rendered = self.render(tree)
        written: list[Path] = []
        try:
            for relative, content in rendered.items():
                path = target.joinpath(*relative.parts)
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content, encoding=self._character_set)
                written.append(path)
        except OSError as exc:
            raise GenerationError(f"Cannot write generated sources to {target}: {exc}") from exc
        except UnicodeEncodeError as exc:
            raise GenerationError(f"Generated sources cannot be encoded as {self._character_set}: {exc}") from exc
        logger.info("Wrote %d file(s) to %s", len(written), target)
        return written

    def _render_template(self, template_name: str, /, **context: object) -> str:
        try:
            return self._env.get_template(template_name).render(**context)
        except TemplateError as exc:
            raise GenerationError(f"Failed to render template {template_name}: {exc}") from exc

    def _render_plain_package(self) -> str:
        return self._render_template("package.py.j2", header=HEADER, docstring=None, version=None)

    def _render_package(self, package: PackageNode) -> str:
        metadata = package.metadata
        version = metadata.get("version")
        return self._render_template(
            "package.py.j2",
            header=HEADER,
            docstring=_docstring(metadata.get("title"), metadata.get("description")),
            version=_string_literal(version) if version is not None else None,
        )


def python_identifier(name: str) -> str:
    """Return *name* as a valid Python identifier.

    Keywords get a trailing underscore and names starting with a digit a
    leading one.

    Raises:
        GenerationError: If *name* is empty or contains characters that are
            not valid in identifiers.
    """
    if not name:
        raise GenerationError("Cannot generate an empty identifier")
    if name[0].isdigit():
        name = f"_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"
    if not name.isidentifier():
        raise GenerationError(f"'{name}' is not a valid Python identifier")
    return name


def python_reference(name: QualifiedName) -> str:
    """Return how generated code spells *name*: fully qualified unless it is a built-in.

    Raises:
        GenerationError: If a part of the name is not a valid Python identifier.
    """
    if name.is_builtin:
        return name.name
    if not name.is_generated:
        return f"{name.module}.{_local_name(name)}"
    return f"{_module_name(name)}.{_local_name(name)}"


# ################
# Implementation
# ################


class _ModuleRenderer:
    """Renders the module of one top-level unit, collecting the imports it needs."""

    def __init__(self, emitter: PythonEmitter, module: str) -> None:
        self._emitter = emitter
        self._module = module
        self._runtime_imports: set[str] = set()
        self._checking_imports: set[str] = set()

    def render(self, unit: Unit) -> str:
        declaration = self._declaration(unit)
        checking = sorted(self._checking_imports - self._runtime_imports)
        runtime = set(self._runtime_imports)
        if checking:
            runtime.add("typing")
        return self._emitter._render_template(
            "module.py.j2",
            header=HEADER,
            runtime_imports=sorted(runtime),
            checking_imports=checking,
            declaration=declaration,
        )

    def _declaration(self, unit: Unit) -> str:
        if isinstance(unit, EnumNode):
            return self._enum(unit)
        if isinstance(unit, TypeNode):
            return self._class(unit)
        raise GenerationError(f"Unsupported declaration: {type(unit).__name__}")

    def _class(self, node: TypeNode) -> str:
        blocks: list[str] = []
        fields: list[str] = []
        for member in node.members:
            if isinstance(member, PropertyInformation):
                fields.append(self._field(member))
                continue
            if fields:
                blocks.append("\n".join(fields))
                fields = []
            blocks.append(self._member(member, node.customization.kind))
        if fields:
            blocks.append("\n".join(fields))

        return self._render(
            "class.py.j2",
            decorators=[self._decorator(decorator) for decorator in node.customization.decorators],
            name=python_identifier(node.name.name),
            bases=[self._runtime_type(base) for base in node.customization.bases],
            docstring=_docstring(node.info.summary, node.info.description),
            blocks=blocks,
        )

    def _member(self, member: object, kind: TypeKind) -> str:
        if isinstance(member, TypeNode):
            return self._class(member)
        if isinstance(member, EnumNode):
            return self._enum(member)
        if isinstance(member, MethodInformation):
            return self._method(member)
        if isinstance(member, RawContent):
            for reference in member.references:
                self._runtime_imports.update(_imports_of(reference))
            return "\n".join(member.lines)
        raise GenerationError(f"Unsupported member in {kind.value}: {type(member).__name__}")

    def _enum(self, node: EnumNode) -> str:
        self._runtime_imports.add("enum")
        wire_names = {
            literal.name: literal.metadata[WIRE_NAME_KEY]
            for literal in node.literals
            if WIRE_NAME_KEY in literal.metadata
        }
        return self._render(
            "enum.py.j2",
            name=python_identifier(node.name.name),
            docstring=_docstring(node.info.summary, node.info.description),
            literals=[
                {"name": python_identifier(literal.name), "value": _string_literal(literal.value)}
                for literal in node.literals
            ],
            wire_names=json.dumps(wire_names, ensure_ascii=False) if wire_names else None,
        )

    def _field(self, prop: PropertyInformation) -> str:
        return self._render(
            "field.py.j2",
            name=python_identifier(prop.name),
            type=self._annotation(prop.type),
            required=prop.required,
            docstring=_docstring(prop.summary, prop.description),
        )

    def _method(self, method: MethodInformation) -> str:
        return self._render(
            "method.py.j2",
            decorators=[self._decorator(decorator) for decorator in method.decorators],
            name=python_identifier(method.name),
            parameters=[
                f"{python_identifier(parameter.name)}: {self._annotation(parameter.type)}"
                for parameter in method.parameters
            ],
            return_type=self._annotation(method.return_type) if method.return_type is not None else None,
            docstring=_docstring(method.summary, None),
            body=self._body(method),
        )

    def _body(self, method: MethodInformation) -> list[str]:
        body = list(method.body)
        if method.delegate_to:
            calls = "".join(f".{python_identifier(name)}()" for name in method.delegate_to)
            body.append(f"return self{calls}")
        return body

    def _decorator(self, decorator: Decorator) -> str:
        self._runtime_imports.update(_imports_of(decorator.target))
        name = self._qualify(decorator.target)
        if decorator.arguments:
            return f"{name}({', '.join(decorator.arguments)})"
        return name

    def _annotation(self, expression: TypeExpression) -> str:
        for reference in expression.references():
            self._checking_imports.update(self._foreign_imports(reference))
        return expression.render(self._qualify)

    def _runtime_type(self, expression: TypeExpression) -> str:
        for reference in expression.references():
            self._runtime_imports.update(self._foreign_imports(reference))
        return expression.render(self._qualify)

    def _foreign_imports(self, name: QualifiedName) -> list[str]:
        return [module for module in _imports_of(name) if module != self._module]

    def _qualify(self, name: QualifiedName) -> str:
        if name.is_generated and _module_name(name) == self._module:
            return _local_name(name)
        return python_reference(name)

    def _render(self, template: str, /, **context: object) -> str:
        return self._emitter._render_template(template, **context).rstrip("\n")


def _imports_of(name: QualifiedName) -> list[str]:
    if name.is_builtin:
        return []
    if not name.is_generated:
        return [name.module]
    return [_module_name(name)]


def _local_name(name: QualifiedName) -> str:
    return ".".join(python_identifier(part) for part in (*name.enclosing, name.name))


def _module_name(name: QualifiedName) -> str:
    """The dotted module a generated name is declared in."""
    segments = [*name.package.split("."), to_lower_underscore(name.top_level)]
    return ".".join(python_identifier(segment) for segment in segments if segment)


def _package_directory(package: str) -> PurePosixPath:
    if not package:
        return PurePosixPath(".")
    return PurePosixPath(*(python_identifier(segment) for segment in package.split(".")))


def _package_directories(package: str) -> Iterable[PurePosixPath]:
    """The directories of *package* and of all its ancestors, outermost first."""
    if not package:
        return [PurePosixPath(".")]
    segments = package.split(".")
    return [_package_directory(".".join(segments[: index + 1])) for index in range(len(segments))]


def _docstring(summary: str | None, description: str | None) -> str | None:
    parts = [part.strip() for part in (summary, description) if part and part.strip()]
    if not parts:
        return None
    text = "\n\n".join(parts).replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    if "\n" in text:
        return f'"""{text}\n"""'
    return f'"""{text}"""'


def _string_literal(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)
