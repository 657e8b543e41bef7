# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Parser for the structured topic naming grammar.

A topic name is a dot-separated sequence of tokens::

    <service> . <version>+ . <type> . <resource>+ . <action> [ . <status> ]

* ``service``: the first token.
* ``version``: one or more purely numeric tokens, joined back with ``.``.
* ``type``: the token following the version.
* ``status``: only recognized when ``type`` is ``event`` and more than two
  tokens remain; the last token is consumed if it names a :class:`Status`
  (case-insensitive) and left in place otherwise.
* ``action``: the last remaining token.
* ``resources``: everything in between, at least one token.

For example ``devices.1.0.event.sensor.reading.update.done`` parses into
service ``devices``, version ``1.0``, type ``event``, resources
``["sensor", "reading"]``, action ``update`` and status ``DONE``.
"""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass
from enum import Enum

# ###############
# Public Interface
# ###############


class Status(Enum):
    """Lifecycle status an event topic may carry as its last token."""

    QUEUED = "queued"
    SUCCEED = "succeed"
    FAILED = "failed"
    DONE = "done"


class GrammarError(ValueError):
    """Raised when a topic name does not follow the naming grammar."""

    def __init__(self, topic: str, reason: str) -> None:
        super().__init__(f"Wrong topic syntax in '{topic}': {reason}")
        self.topic = topic
        self.reason = reason


@dataclass(frozen=True)
class TopicInformation:
    """The structured decomposition of a topic name.

    Attributes:
        service: Name of the service the topic belongs to.
        version: Dotted version string, e.g. ``"1.0"``.
        type: Topic type, e.g. ``"event"``.
        resources: Resource path tokens, never empty.
        action: The action performed on the resources.
        status: Optional lifecycle status of event topics.
    """

    service: str
    version: str
    type: str
    resources: tuple[str, ...]
    action: str
    status: Status | None = None


FALLBACK_SERVICE = "Topics"
FALLBACK_VERSION = "1"
FALLBACK_TYPE = "event"
FALLBACK_ACTION = "send"


def parse_topic(topic: str) -> TopicInformation:
    """Decompose a topic name according to the naming grammar.

    Args:
        topic: The raw topic name.

    Returns:
        The parsed TopicInformation.

    Raises:
        GrammarError: If any mandatory part of the grammar is missing or empty.
    """
    tokens = deque(topic.split("."))

    service = tokens.popleft()
    if not service:
        raise GrammarError(topic, "missing service name")

    version: list[str] = []
    while tokens and _VERSION_SEGMENT.fullmatch(tokens[0]):
        version.append(tokens.popleft())
    if not version:
        raise GrammarError(topic, "missing version")

    type_ = tokens.popleft() if tokens else ""
    if not type_:
        raise GrammarError(topic, "missing type")

    status: Status | None = None
    if type_ == "event" and len(tokens) > 2:
        status = _status_of(tokens[-1])
        if status is not None:
            tokens.pop()

    action = tokens.pop() if tokens else ""
    if not action:
        raise GrammarError(topic, "missing action")

    resources = tuple(tokens)
    if not resources:
        raise GrammarError(topic, "missing resource")
    if not all(resources):
        raise GrammarError(topic, "empty resource token")

    return TopicInformation(
        service=service,
        version=".".join(version),
        type=type_,
        resources=resources,
        action=action,
        status=status,
    )


def fallback_topic_information(topic: str) -> TopicInformation:
    """Synthesize the classification used for topics outside the grammar.

    The whole topic name becomes the resource path of a ``send`` event on the
    ``Topics`` service at version ``1``.
    """
    return TopicInformation(
        service=FALLBACK_SERVICE,
        version=FALLBACK_VERSION,
        type=FALLBACK_TYPE,
        resources=tuple(topic.split(".")),
        action=FALLBACK_ACTION,
        status=None,
    )


# ################
# Implementation
# ################

_VERSION_SEGMENT = re.compile(r"[0-9]+")


def _status_of(token: str) -> Status | None:
    try:
        return Status[token.upper()]
    except KeyError:
        return None
