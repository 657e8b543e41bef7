# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Core entities of the schema model: messages, topics, and the schema itself."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

from asyncapi_codegen.model.types import Type, TypeRef

# ###############
# Public Interface
# ###############


class Message(BaseModel):
    """A message exchanged over a topic.

    The payload is either an inline type (object, enum, primitive) or a
    reference to a type registered in the schema.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["message"] = "message"
    name: str
    payload: TypeRef
    summary: str | None = None
    description: str | None = None
    deprecated: bool = False


class MessageReference(BaseModel):
    """A pointer to a message declared under the schema's components."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["message_reference"] = "message_reference"
    name: str


MessageRef = Annotated[Message | MessageReference, _Field(discriminator="kind")]


class Topic(BaseModel):
    """A named channel with at most one publish and one subscribe message."""

    model_config = ConfigDict(frozen=True)

    name: str
    publish: MessageRef | None = None
    subscribe: MessageRef | None = None


class Information(BaseModel):
    """Descriptive metadata of the API."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    version: str
    description: str | None = None


class Schema(BaseModel):
    """A complete API description as produced by the document loader.

    Attributes:
        base_topic: Prefix shared by all topics; doubles as the default base package.
        host: Broker host the API is served from.
        schemes: Supported transport schemes.
        information: Title and version of the API.
        topics: Topics in document order.
        messages: Component messages, referable from topics by name.
        types: Component types, referable from anywhere by ``(namespace, name)``.
    """

    model_config = ConfigDict(frozen=True)

    base_topic: str | None = None
    host: str
    schemes: tuple[str, ...] = ()
    information: Information
    topics: tuple[Topic, ...] = ()
    messages: tuple[Message, ...] = ()
    types: tuple[Type, ...] = ()


Message.model_rebuild()
Topic.model_rebuild()
Schema.model_rebuild()
