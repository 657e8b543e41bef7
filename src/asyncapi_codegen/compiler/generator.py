# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Generation pipeline from a schema to a tree of declarations.

A run proceeds in a fixed order:

1. Check the options, collecting every misconfiguration.
2. Index the schema's types and messages and aggregate its topics.
3. Emit the root package metadata (title and version).
4. Emit one class per message into ``<base>.messages``.
5. Emit one declaration per component type into ``<base>.types``.
6. Emit the versioned service interfaces for the client and server roles.
7. Invoke the registered extensions in registration order.

Steps 1 to 7 only build an in-memory :class:`~asyncapi_codegen.compiler.tree.SourceTree`;
:meth:`Generator.generate` writes it to disk once all of them succeeded, so a
failing run leaves no partial output behind.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import assert_never

from asyncapi_codegen.compiler.builder import (
    Decorator,
    EnumLiteral,
    PackageTypeBuilder,
    PropertyInformation,
    TypeBuilder,
    TypeCustomization,
    TypeInformation,
)
from asyncapi_codegen.compiler.connectors import ConnectorAssembler, ConnectorType
from asyncapi_codegen.compiler.naming import to_lower_underscore, to_type_name
from asyncapi_codegen.compiler.resolver import (
    PYTHON_TYPE_TABLE,
    QualifiedName,
    TypeExpression,
    TypeResolver,
    TypeTable,
    join_package,
)
from asyncapi_codegen.compiler.services import ServiceDefinitions, TopicDiagnostic, aggregate
from asyncapi_codegen.compiler.tree import SourceTree
from asyncapi_codegen.emitter.python import PythonEmitter
from asyncapi_codegen.model.entities import Message, Schema
from asyncapi_codegen.model.registry import MESSAGES_NAMESPACE, TYPES_NAMESPACE, Registry
from asyncapi_codegen.model.types import (
    ArrayType,
    EnumType,
    ObjectType,
    PrimitiveType,
    Property,
    Type,
    TypeRef,
    TypeReference,
)
from asyncapi_codegen.workspace.config import GeneratorOptions, check_options, effective_base_package

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


class UnsupportedPayloadError(Exception):
    """Raised when a message payload is of a type that cannot be embedded in a message."""


class Context:
    """What an extension may use during a run.

    Args:
        target: The output of the run, extended through new builders.
        resolver: Resolves schema types against the run's registry.
        service_definitions: The aggregated topics; read-only.
    """

    def __init__(
        self,
        target: SourceTree,
        resolver: TypeResolver,
        service_definitions: ServiceDefinitions,
    ) -> None:
        self._target = target
        self._resolver = resolver
        self._service_definitions = service_definitions

    @property
    def service_definitions(self) -> ServiceDefinitions:
        return self._service_definitions

    @property
    def resolver(self) -> TypeResolver:
        return self._resolver

    def create_type_builder(self, local_package: str) -> PackageTypeBuilder:
        """Return a builder for a package below the base package."""
        return self._target.create_builder(self._resolver.package_name(local_package))

    def full_qualified_name(self, *local: str) -> str:
        """Qualify a dotted local name with the base package."""
        return join_package(self._resolver.base_package, *local)


class GeneratorExtension(ABC):
    """Additional output produced after the core generation of a run."""

    @abstractmethod
    def generate(self, schema: Schema, options: GeneratorOptions, context: Context) -> None:
        """Emit the extension's declarations through *context*."""

    def enum_literal_created(self, literal: str, node: EnumLiteral) -> None:
        """Called for every enum literal the core declares; may attach metadata."""


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generation run.

    Attributes:
        tree: Every declaration of the run.
        service_definitions: The aggregated topics.
        files: Files written, empty if the run was not written to disk.
    """

    tree: SourceTree
    service_definitions: ServiceDefinitions
    files: tuple[Path, ...] = field(default=())

    @property
    def diagnostics(self) -> tuple[TopicDiagnostic, ...]:
        return self.service_definitions.diagnostics


DATA_CLASS = TypeCustomization(
    decorators=(Decorator(QualifiedName.external("dataclasses", "dataclass"), ("kw_only=True",)),),
)


class Generator:
    """Drives one generation run.

    Args:
        schema: The API description to generate bindings for.
        options: The run's options.
        extensions: Extensions invoked after core generation, in this order.
        type_table: Target names for primitives and collections.
    """

    def __init__(
        self,
        schema: Schema,
        options: GeneratorOptions,
        extensions: Sequence[GeneratorExtension] = (),
        type_table: TypeTable = PYTHON_TYPE_TABLE,
    ) -> None:
        self._schema = schema
        self._options = options
        self._extensions = tuple(extensions)
        self._type_table = type_table

    def build(self) -> GenerationResult:
        """Run the pipeline without writing anything.

        Raises:
            ConfigurationError: If the options are incomplete or invalid.
            GrammarError: If a topic violates the grammar and validation is on.
            UnknownReferenceError: If a type or message reference does not resolve.
            UnsupportedPayloadError: If a message payload cannot be embedded.
        """
        check_options(self._options, self._schema.base_topic)

        registry = Registry.from_schema(self._schema)
        service_definitions = aggregate(
            self._schema.topics,
            validate_topic_syntax=self._options.validate_topic_syntax,
        )
        resolver = TypeResolver(
            registry,
            effective_base_package(self._options, self._schema.base_topic),
            self._type_table,
        )
        tree = SourceTree()

        run = _Run(self._schema, self._options, self._extensions, resolver, tree)
        run.generate_root()
        run.generate_messages()
        run.generate_types()

        assembler = ConnectorAssembler(tree, resolver, service_definitions)
        for role in ConnectorType:
            assembler.assemble(role)

        context = Context(tree, resolver, service_definitions)
        for extension in self._extensions:
            logger.debug("Running extension %s", type(extension).__name__)
            extension.generate(self._schema, self._options, context)

        return GenerationResult(tree=tree, service_definitions=service_definitions)

    def generate(self) -> GenerationResult:
        """Run the pipeline and write the generated package tree to the target path.

        Raises:
            GenerationError: If the output cannot be written.
            Any error of :meth:`build`.
        """
        result = self.build()
        target = self._options.target_path
        logger.info("Writing generated sources to %s", target)
        files = PythonEmitter(self._options.character_set).write(result.tree, target)
        return GenerationResult(
            tree=result.tree,
            service_definitions=result.service_definitions,
            files=tuple(files),
        )


# ################
# Implementation
# ################


class _Run:
    """Core declarations of one run: root metadata, messages and types."""

    def __init__(
        self,
        schema: Schema,
        options: GeneratorOptions,
        extensions: tuple[GeneratorExtension, ...],
        resolver: TypeResolver,
        tree: SourceTree,
    ) -> None:
        self._schema = schema
        self._options = options
        self._extensions = extensions
        self._resolver = resolver
        self._registry = resolver.registry
        self._tree = tree

    def generate_root(self) -> None:
        info = self._schema.information
        metadata = {"version": info.version}
        if info.title is not None:
            metadata["title"] = info.title
        if info.description is not None:
            metadata["description"] = info.description
        self._tree.create_builder(self._resolver.package_name()).set_metadata(metadata)

    def generate_messages(self) -> None:
        builder = self._tree.create_builder(self._resolver.package_name(MESSAGES_NAMESPACE))
        for message in self._messages():
            self._generate_message(builder, message)

    def generate_types(self) -> None:
        builder = self._tree.create_builder(self._resolver.package_name(TYPES_NAMESPACE))
        for declared in self._schema.types:
            if isinstance(declared, PrimitiveType):
                logger.debug("Component type '%s' is primitive, nothing to declare", declared.name)
                continue
            self._generate_inline(builder, declared)

    def _messages(self) -> list[Message]:
        """Component messages followed by inline topic messages, each name once."""
        messages: dict[str, Message] = {message.name: message for message in self._schema.messages}
        for topic in self._schema.topics:
            for message_ref in (topic.publish, topic.subscribe):
                if isinstance(message_ref, Message) and message_ref.name not in messages:
                    messages[message_ref.name] = message_ref
        return list(messages.values())

    def _generate_message(self, builder: TypeBuilder, message: Message) -> None:
        summary = message.summary
        if message.deprecated:
            summary = f"Deprecated. {summary}" if summary else "Deprecated."
        info = TypeInformation(name=to_type_name(message.name), summary=summary, description=message.description)
        builder.create_type(info, DATA_CLASS, lambda b: self._create_payload(b, message))

    def _create_payload(self, builder: TypeBuilder, message: Message) -> None:
        payload = message.payload
        match payload:
            case ObjectType() | EnumType():
                payload_type = TypeExpression(self._declare(builder, payload))
            case PrimitiveType() | TypeReference():
                payload_type = self._resolver.resolve_property_type(payload)
            case ArrayType():
                raise UnsupportedPayloadError(
                    f"Unsupported payload type 'array' in message '{message.name}': declare the array as a component"
                )
            case _:
                assert_never(payload)

        builder.create_property(
            PropertyInformation(type=payload_type, name="payload", summary="Message payload", required=True)
        )

    def _generate_inline(self, builder: TypeBuilder, type_ref: TypeRef) -> None:
        """Declare the object and enum types *type_ref* introduces inline."""
        match type_ref:
            case ObjectType() | EnumType():
                self._declare(builder, type_ref)
            case ArrayType():
                self._generate_inline(builder, type_ref.item_type)
            case PrimitiveType() | TypeReference():
                pass
            case _:
                assert_never(type_ref)

    def _declare(self, builder: TypeBuilder, declared: ObjectType | EnumType) -> QualifiedName:
        info = TypeInformation(name=to_type_name(declared.name), summary=declared.title, description=declared.description)
        if isinstance(declared, EnumType):
            return builder.create_enum(
                info,
                declared.literals,
                literal_customizer=self._literal_customizer if self._extensions else None,
                keep_original_literal_value=self._options.keep_original_literal_values,
            )
        child = builder.create_type(info, DATA_CLASS, lambda b: self._create_members(b, declared))
        return child.qualified_name

    def _create_members(self, builder: TypeBuilder, declared: ObjectType) -> None:
        for prop in declared.properties:
            self._generate_inline(builder, prop.type)
            self._create_property(builder, prop)

    def _create_property(self, builder: TypeBuilder, prop: Property) -> None:
        resolved: Type = self._registry.resolve_type(prop.type)
        summary = prop.description
        description = None
        if summary is None:
            summary = resolved.title
            description = resolved.description

        builder.create_property(
            PropertyInformation(
                type=self._resolver.resolve_property_type(prop.type),
                name=to_lower_underscore(prop.name),
                summary=summary,
                description=description,
                required=prop.required,
            )
        )

    def _literal_customizer(self, literal: str, node: EnumLiteral) -> None:
        for extension in self._extensions:
            extension.enum_literal_created(literal, node)
