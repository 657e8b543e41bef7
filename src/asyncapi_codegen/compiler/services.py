# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Grouping of topics into versioned services.

Every topic is classified by the topic grammar and filed under its version and
service. Versions are ordered ascending by their numeric value, with the raw
version string breaking ties between equal values such as ``"1"`` and
``"1.0"``; services keep the order in which they first appear. The latest
version of each service is the first maximum found in that order, so for the
equal versions ``"1"`` and ``"1.0"`` the service recorded under ``"1"`` wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from asyncapi_codegen.compiler.builder import TypeInformation
from asyncapi_codegen.compiler.naming import to_type_name
from asyncapi_codegen.compiler.topics import (
    GrammarError,
    TopicInformation,
    fallback_topic_information,
    parse_topic,
)
from asyncapi_codegen.compiler.version import Version
from asyncapi_codegen.model.entities import Topic

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class VersionedService:
    """The type of a service together with the version it was found at.

    Attributes:
        type: Type information of the service.
        version: The winning version.
        version_label: The version as written in the topics, a key of
            ``ServiceDefinitions.versions``.
        service: The service name as written in the topics.
    """

    type: TypeInformation
    version: Version
    version_label: str
    service: str


@dataclass(frozen=True)
class TopicDiagnostic:
    """A topic that did not follow the grammar and was classified by fallback.

    Attributes:
        topic: The raw topic name.
        message: Why the grammar rejected the topic.
    """

    topic: str
    message: str


@dataclass(frozen=True)
class ServiceDefinitions:
    """Topics grouped by version and service, plus the latest version of each service.

    All mappings are read-only views.

    Attributes:
        topics: Classification of every topic, in input order.
        versions: ``version -> service -> topics`` in aggregation order.
        latest: Latest version per service, keyed by the service type name.
        diagnostics: Topics that were classified by fallback.
    """

    topics: Mapping[Topic, TopicInformation]
    versions: Mapping[str, Mapping[str, tuple[Topic, ...]]]
    latest: Mapping[str, VersionedService]
    diagnostics: tuple[TopicDiagnostic, ...] = field(default=())

    def information(self, topic: Topic) -> TopicInformation:
        """Return the classification of *topic*."""
        return self.topics[topic]


def service_type_information(service: str) -> TypeInformation:
    """Return the type information a service is generated under."""
    return TypeInformation(name=to_type_name(service))


def aggregate(topics: Iterable[Topic], *, validate_topic_syntax: bool = True) -> ServiceDefinitions:
    """Group topics by version and service and compute each service's latest version.

    Args:
        topics: The schema's topics, in document order.
        validate_topic_syntax: When False, topics outside the grammar are
            classified by fallback and reported in the diagnostics instead of
            failing the run.

    Returns:
        The immutable ServiceDefinitions.

    Raises:
        GrammarError: If a topic does not follow the grammar and validation is on.
    """
    classified: dict[Topic, TopicInformation] = {}
    grouped: dict[str, dict[str, list[Topic]]] = {}
    diagnostics: list[TopicDiagnostic] = []

    for topic in topics:
        try:
            information = parse_topic(topic.name)
        except GrammarError as exc:
            if validate_topic_syntax:
                raise
            logger.warning("Topic '%s' does not follow the topic grammar, using fallback: %s", topic.name, exc.reason)
            diagnostics.append(TopicDiagnostic(topic=topic.name, message=str(exc)))
            information = fallback_topic_information(topic.name)

        classified[topic] = information
        grouped.setdefault(information.version, {}).setdefault(information.service, []).append(topic)

    ordered_versions = sorted(grouped, key=lambda version: (Version.parse(version), version))

    versions: dict[str, Mapping[str, tuple[Topic, ...]]] = {}
    latest: dict[str, VersionedService] = {}
    for version_text in ordered_versions:
        services = grouped[version_text]
        versions[version_text] = MappingProxyType({name: tuple(entries) for name, entries in services.items()})

        version = Version.parse(version_text)
        for service in services:
            service_type = service_type_information(service)
            current = latest.get(service_type.name)
            if current is None or version > current.version:
                latest[service_type.name] = VersionedService(
                    type=service_type, version=version, version_label=version_text, service=service
                )

    logger.debug("Aggregated %d topic(s) into %d version(s)", len(classified), len(versions))

    return ServiceDefinitions(
        topics=MappingProxyType(classified),
        versions=MappingProxyType(versions),
        latest=MappingProxyType(latest),
        diagnostics=tuple(diagnostics),
    )
