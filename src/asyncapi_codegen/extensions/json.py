# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""JSON wire format support for generated bindings.

Enum constants are upper-snake names, while JSON documents carry the literals as
written in the schema. This extension records the original literal of every
enum constant as its wire name, and emits ``<base>.json_codec.topic_messages``
that maps each topic to the message classes sent and received on it, so a JSON
codec can pick the class to decode a document into.
"""

from __future__ import annotations

import logging

from asyncapi_codegen.compiler.builder import EnumLiteral, RawContent, TypeInformation
from asyncapi_codegen.compiler.generator import Context, GeneratorExtension
from asyncapi_codegen.compiler.naming import to_type_name
from asyncapi_codegen.compiler.resolver import QualifiedName
from asyncapi_codegen.emitter.python import WIRE_NAME_KEY, python_reference
from asyncapi_codegen.model.entities import MessageRef, Schema
from asyncapi_codegen.model.registry import MESSAGES_NAMESPACE
from asyncapi_codegen.workspace.config import GeneratorOptions

logger = logging.getLogger(__name__)

JSON_PACKAGE = "json_codec"
TOPIC_MESSAGES_TYPE = "TopicMessages"


class JsonExtension(GeneratorExtension):
    """Adds JSON wire names to enum literals and a topic-to-message lookup."""

    def enum_literal_created(self, literal: str, node: EnumLiteral) -> None:
        node.metadata[WIRE_NAME_KEY] = literal

    def generate(self, schema: Schema, options: GeneratorOptions, context: Context) -> None:
        publish: list[str] = []
        subscribe: list[str] = []
        references: list[QualifiedName] = [QualifiedName.external("typing", "ClassVar")]
        for topic in context.service_definitions.topics:
            for entries, message_ref in ((publish, topic.publish), (subscribe, topic.subscribe)):
                if message_ref is None:
                    continue
                name = _message_name(context, message_ref)
                references.append(name)
                entries.append(f"    {_quote(topic.name)}: {python_reference(name)},")

        lines = (
            "PUBLISH: typing.ClassVar[dict[str, type]] = {",
            *publish,
            "}",
            "SUBSCRIBE: typing.ClassVar[dict[str, type]] = {",
            *subscribe,
            "}",
        )
        context.create_type_builder(JSON_PACKAGE).create_type(
            TypeInformation(
                name=TOPIC_MESSAGES_TYPE,
                summary="Message classes of each topic, keyed by topic name.",
                description="PUBLISH holds what a client sends, SUBSCRIBE what it receives.",
            ),
            body=lambda b: b.create_body_content(RawContent(lines=lines, references=tuple(references))),
        )
        logger.debug(
            "Declared %s with %d publish and %d subscribe message(s)",
            context.full_qualified_name(JSON_PACKAGE, TOPIC_MESSAGES_TYPE),
            len(publish),
            len(subscribe),
        )


def _message_name(context: Context, message_ref: MessageRef) -> QualifiedName:
    message = context.resolver.registry.lookup_message(message_ref)
    return QualifiedName(
        package=context.resolver.package_name(MESSAGES_NAMESPACE),
        name=to_type_name(message.name),
    )


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
