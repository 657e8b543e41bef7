# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Assembly of the versioned service interfaces for client and server roles.

Both roles are generated from the same topics. A client publishes what a topic
declares under ``publish`` and subscribes to what it declares under
``subscribe``; a server does the opposite. For every version and service this
produces an interface ``<base>.<role>.<vX_Y>.<Service>`` with one method per
topic, plus a role interface ``<base>.<role>.<Role>`` that offers one accessor
per version and one accessor per service that delegates to the service's
latest version.
"""

from __future__ import annotations

import logging
from enum import Enum

from asyncapi_codegen.compiler.builder import (
    MethodInformation,
    OutputTarget,
    TypeBuilder,
    TypeCustomization,
    TypeInformation,
    TypeKind,
)
from asyncapi_codegen.compiler.naming import make_version, to_camel_case, to_type_name
from asyncapi_codegen.compiler.resolver import QualifiedName, TypeExpression, TypeResolver, join_package
from asyncapi_codegen.compiler.services import ServiceDefinitions, service_type_information
from asyncapi_codegen.compiler.topics import TopicInformation
from asyncapi_codegen.model.entities import MessageRef, Topic
from asyncapi_codegen.model.registry import MESSAGES_NAMESPACE

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

RUNTIME_MODULE = "asyncapi_codegen.runtime"
PUBLISH = QualifiedName.external(RUNTIME_MODULE, "Publish")
SUBSCRIBE = QualifiedName.external(RUNTIME_MODULE, "Subscribe")
PUBLISH_SUBSCRIBE = QualifiedName.external(RUNTIME_MODULE, "PublishSubscribe")

INTERFACE = TypeCustomization(
    kind=TypeKind.INTERFACE,
    bases=(TypeExpression(QualifiedName.external("typing", "Protocol")),),
)


class ConnectorType(Enum):
    """The two sides of a connection."""

    CLIENT = ("client", "Client")
    SERVER = ("server", "Server")

    def __init__(self, package_name: str, type_name: str) -> None:
        self.package_name = package_name
        self.type_name = type_name

    def publish_of(self, topic: Topic) -> MessageRef | None:
        """Return the message this role sends on *topic*."""
        return topic.publish if self is ConnectorType.CLIENT else topic.subscribe

    def subscribe_of(self, topic: Topic) -> MessageRef | None:
        """Return the message this role receives on *topic*."""
        return topic.subscribe if self is ConnectorType.CLIENT else topic.publish


def topic_method_name(information: TopicInformation) -> str:
    """Return the method name of a topic, e.g. ``eventSensorUpdateDone``.

    The type, the resources, the action and the lower-cased status (if any)
    are joined in camel case with a lower-case first letter.
    """
    words = [information.type, *information.resources, information.action]
    if information.status is not None:
        words.append(information.status.name.lower())
    return to_camel_case(".".join(words), False)


def version_type_name(version: str) -> str:
    """Return the name of the nested per-version interface, e.g. ``V1_0``."""
    return make_version(version).upper()


def service_accessor_name(service: str) -> str:
    return to_camel_case(service, False)


class ConnectorAssembler:
    """Emits the service interfaces of one role into an output target.

    Args:
        target: Where the interfaces are declared.
        resolver: Used to qualify package and message names.
        service_definitions: The aggregated topics.
    """

    def __init__(
        self,
        target: OutputTarget,
        resolver: TypeResolver,
        service_definitions: ServiceDefinitions,
    ) -> None:
        self._target = target
        self._resolver = resolver
        self._definitions = service_definitions

    def role_package(self, role: ConnectorType) -> str:
        return self._resolver.package_name(role.package_name)

    def service_name(self, role: ConnectorType, version: str, service: str) -> QualifiedName:
        """Return the qualified name of a service interface."""
        return QualifiedName(
            package=join_package(self.role_package(role), make_version(version)),
            name=service_type_information(service).name,
        )

    def assemble(self, role: ConnectorType) -> None:
        """Emit the per-version service interfaces and the role interface."""
        for version, services in self._definitions.versions.items():
            builder = self._target.create_builder(join_package(self.role_package(role), make_version(version)))
            for service, topics in services.items():
                builder.create_type(
                    service_type_information(service),
                    INTERFACE,
                    lambda b, topics=topics: self._create_topic_methods(b, role, topics),
                )

        root = self._target.create_builder(self.role_package(role))
        root.create_type(
            TypeInformation(name=role.type_name, summary=f"Entry point of the {role.package_name} side."),
            INTERFACE,
            lambda b: self._create_role_members(b, role),
        )

    def topic_method(self, role: ConnectorType, topic: Topic) -> MethodInformation | None:
        """Return the method a topic contributes to a service, or None if the
        role neither sends nor receives on it."""
        publish = role.publish_of(topic)
        subscribe = role.subscribe_of(topic)
        if publish is None and subscribe is None:
            logger.debug("Topic '%s' carries no message for the %s role", topic.name, role.package_name)
            return None

        if publish is not None and subscribe is not None:
            result = TypeExpression(PUBLISH_SUBSCRIBE, (self.message_type(publish), self.message_type(subscribe)))
        elif publish is not None:
            result = TypeExpression(PUBLISH, (self.message_type(publish),))
        else:
            result = TypeExpression(SUBSCRIBE, (self.message_type(subscribe),))

        return MethodInformation(
            name=topic_method_name(self._definitions.information(topic)),
            return_type=result,
            summary=f"Topic '{topic.name}'.",
        )

    def message_type(self, message_ref: MessageRef) -> TypeExpression:
        """Return the expression of the generated class of a message."""
        message = self._resolver.registry.lookup_message(message_ref)
        return TypeExpression(
            QualifiedName(package=self._resolver.package_name(MESSAGES_NAMESPACE), name=to_type_name(message.name))
        )

    def _create_topic_methods(self, builder: TypeBuilder, role: ConnectorType, topics: tuple[Topic, ...]) -> None:
        for topic in topics:
            method = self.topic_method(role, topic)
            if method is not None:
                builder.create_method(method)

    def _create_role_members(self, builder: TypeBuilder, role: ConnectorType) -> None:
        for version, services in self._definitions.versions.items():
            version_type = builder.create_type(
                TypeInformation(name=version_type_name(version), summary=f"Services of version {version}."),
                INTERFACE,
                lambda b, version=version, services=services: self._create_version_members(b, role, version, services),
            )
            builder.create_method(
                MethodInformation(
                    name=make_version(version),
                    return_type=TypeExpression(version_type.qualified_name),
                    summary=f"Access the services of version {version}.",
                )
            )

        for latest in self._definitions.latest.values():
            version_accessor = make_version(latest.version_label)
            service_accessor = service_accessor_name(latest.service)
            builder.create_method(
                MethodInformation(
                    name=service_accessor,
                    return_type=TypeExpression(self.service_name(role, latest.version_label, latest.service)),
                    summary=f"Access the latest version ({latest.version_label}) of {latest.type.name}.",
                    delegate_to=(version_accessor, service_accessor),
                )
            )

    def _create_version_members(self, builder: TypeBuilder, role: ConnectorType, version: str, services) -> None:
        for service in services:
            builder.create_method(
                MethodInformation(
                    name=service_accessor_name(service),
                    return_type=TypeExpression(self.service_name(role, version, service)),
                )
            )
