"""Message transports.

:class:`Transport` defines the async delivery protocol the
:class:`~dsro.runtime.container.Container` sends through.
:class:`InMemoryTransport` routes between any number of containers living
in one process; :class:`ChaosTransport` adds duplication and random delay
on top of it so protocols can be exercised under at-least-once, unordered
delivery.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import TYPE_CHECKING, Protocol

from dsro.runtime.errors import UnknownAddressError
from dsro.runtime.messages import decode_message, encode_message

if TYPE_CHECKING:
    from dsro.runtime.container import Container
    from dsro.runtime.messages import Address, LocalBestMessage, ResourceMessage

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Async point-to-point delivery between registered containers."""

    def attach(self, container: Container) -> None:
        """Make *container* reachable under its name."""
        ...

    async def send(
        self,
        sender: Address,
        receiver: Address,
        message: ResourceMessage | LocalBestMessage,
    ) -> None:
        """Deliver *message* to *receiver*; no delivery receipt is returned."""
        ...


class InMemoryTransport:
    """Routes messages to containers of the same process by container name.

    With ``serialize=True`` every message goes through the JSON wire codec,
    so the receiver gets an independent copy exactly as it would across a
    process boundary.
    """

    def __init__(self, *, serialize: bool = False) -> None:
        self.serialize = serialize
        self.delivered = 0
        self._containers: dict[str, Container] = {}

    def attach(self, container: Container) -> None:
        existing = self._containers.get(container.name)
        if existing is not None and existing is not container:
            msg = f"container name already attached: {container.name}"
            raise ValueError(msg)
        self._containers[container.name] = container

    async def send(
        self,
        sender: Address,
        receiver: Address,
        message: ResourceMessage | LocalBestMessage,
    ) -> None:
        container = self._containers.get(receiver.container)
        if container is None:
            raise UnknownAddressError(receiver)
        if self.serialize:
            message = decode_message(encode_message(message))
        container.deliver(receiver, message)
        self.delivered += 1


class ChaosTransport(InMemoryTransport):
    """In-memory transport that duplicates and reorders deliveries.

    Each send is duplicated with ``duplicate_probability`` and every copy
    is held back for a random delay in ``[0, max_delay]`` seconds.
    """

    def __init__(
        self,
        *,
        duplicate_probability: float = 0.0,
        max_delay: float = 0.0,
        seed: int | None = None,
        serialize: bool = False,
    ) -> None:
        super().__init__(serialize=serialize)
        self.duplicate_probability = duplicate_probability
        self.max_delay = max_delay
        self.duplicated = 0
        self._rng = random.Random(seed)

    async def send(
        self,
        sender: Address,
        receiver: Address,
        message: ResourceMessage | LocalBestMessage,
    ) -> None:
        copies = 1
        if self._rng.random() < self.duplicate_probability:
            copies = 2
            self.duplicated += 1
        for _ in range(copies):
            if self.max_delay > 0:
                await asyncio.sleep(self._rng.uniform(0.0, self.max_delay))
            await super().send(sender, receiver, message)
