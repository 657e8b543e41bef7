# Copyright 2026 asyncapi-codegen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Contracts referenced by generated service interfaces.

Generated client and server interfaces return these protocols from their topic
methods. Messaging backends provide the implementations; this module only
fixes their shape.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

P = TypeVar("P")
S = TypeVar("S")
P_contra = TypeVar("P_contra", contravariant=True)
S_co = TypeVar("S_co", covariant=True)

# ###############
# Public Interface
# ###############


@runtime_checkable
class Message(Protocol):
    """A generated message class: a wrapper around one payload."""

    payload: Any


class ListenerHandle(Protocol):
    """Registration of a subscription listener."""

    def close(self) -> None:
        """Stop delivering messages to the listener."""


class Publish(Protocol[P_contra]):
    """Sends messages of one type to a topic."""

    def publish(self, message: P_contra) -> None: ...


class Subscribe(Protocol[S_co]):
    """Delivers messages of one type from a topic to listeners."""

    def subscribe(self, listener: Callable[[S_co], None]) -> ListenerHandle: ...


class PublishSubscribe(Publish[P], Subscribe[S], Protocol[P, S]):
    """Both sends and receives on one topic."""


class AggregatePublishSubscribe(Generic[P, S]):
    """Combines a publisher and a subscriber into one PublishSubscribe."""

    def __init__(self, publisher: Publish[P], subscriber: Subscribe[S]) -> None:
        self._publisher = publisher
        self._subscriber = subscriber

    def publish(self, message: P) -> None:
        self._publisher.publish(message)

    def subscribe(self, listener: Callable[[S], None]) -> ListenerHandle:
        return self._subscriber.subscribe(listener)
