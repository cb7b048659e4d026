"""Agent container — address assignment, inbox dispatch and scheduled sends.

Every registered agent gets an :class:`~dsro.runtime.messages.Address`
and a private :class:`asyncio.Queue` inbox.  One dispatcher task per agent
drains the inbox and hands messages to the agent one at a time, so agent
state only ever has a single writer.  Sends are fire-and-forget tasks that
go through the container's :class:`~dsro.runtime.transport.Transport`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Protocol

from dsro.runtime.errors import UnknownAddressError
from dsro.runtime.messages import Address, LocalBestMessage, ResourceMessage
from dsro.runtime.transport import InMemoryTransport, Transport

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from typing import Any

logger = logging.getLogger(__name__)


class Agent(Protocol):
    """What a container needs from the agents it hosts."""

    def bind(self, container: Container, address: Address) -> None: ...

    def handle_message(self, message: ResourceMessage | LocalBestMessage) -> None: ...

    async def run(self) -> None: ...


class Container:
    """Hosts a set of agents and routes their traffic.

    Usage::

        container = Container("node-a")
        for agent in agents:
            container.register(agent)
        await container.run()
    """

    def __init__(self, name: str = "local", transport: Transport | None = None) -> None:
        self.name = name
        self.transport: Transport = transport or InMemoryTransport()
        self.transport.attach(self)
        self._agents: dict[str, Agent] = {}
        self._inboxes: dict[str, asyncio.Queue[ResourceMessage | LocalBestMessage]] = {}
        self._dispatchers: list[asyncio.Task[None]] = []
        self._pending_sends: set[asyncio.Task[None]] = set()

    @property
    def agents(self) -> dict[Address, Agent]:
        return {Address(self.name, aid): agent for aid, agent in self._agents.items()}

    def register(self, agent: Agent) -> Address:
        """Assign *agent* a fresh address and bind it to this container."""
        aid = f"agent{len(self._agents)}"
        address = Address(self.name, aid)
        self._agents[aid] = agent
        self._inboxes[aid] = asyncio.Queue()
        agent.bind(self, address)
        return address

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    def deliver(self, receiver: Address, message: ResourceMessage | LocalBestMessage) -> None:
        """Enqueue *message* in the inbox of *receiver*."""
        inbox = self._inboxes.get(receiver.aid)
        if inbox is None or receiver.container != self.name:
            raise UnknownAddressError(receiver)
        inbox.put_nowait(message)

    def schedule_send(
        self,
        sender: Address,
        receiver: Address,
        message: ResourceMessage | LocalBestMessage,
    ) -> None:
        """Send *message* in the background; the caller never waits."""
        self._track(self._send(sender, receiver, message))

    async def _send(
        self,
        sender: Address,
        receiver: Address,
        message: ResourceMessage | LocalBestMessage,
    ) -> None:
        try:
            await self.transport.send(sender, receiver, message)
        except UnknownAddressError as exc:
            logger.warning("Dropping %s from %s: %s", message.kind, sender, exc)

    def _track(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._pending_sends.add(task)
        task.add_done_callback(self._pending_sends.discard)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Spawn one inbox dispatcher per registered agent."""
        for aid, agent in self._agents.items():
            task = asyncio.create_task(self._dispatch(agent, self._inboxes[aid]), name=aid)
            self._dispatchers.append(task)

    async def _dispatch(
        self,
        agent: Agent,
        inbox: asyncio.Queue[ResourceMessage | LocalBestMessage],
    ) -> None:
        while True:
            message = await inbox.get()
            try:
                agent.handle_message(message)
            finally:
                inbox.task_done()

    async def run(self) -> None:
        """Start the dispatchers and run every agent until it returns.

        A dispatcher that fails (an agent handler raised) aborts the run
        with the handler's exception.
        """
        await self.start()
        runs = [
            asyncio.create_task(agent.run(), name=f"run-{aid}")
            for aid, agent in self._agents.items()
        ]
        pending: set[asyncio.Task[None]] = {*runs, *self._dispatchers}
        try:
            while not all(task.done() for task in runs):
                done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    if not task.cancelled() and task.exception() is not None:
                        raise task.exception()  # type: ignore[misc]
        finally:
            for task in runs:
                task.cancel()
            await self.shutdown()

    async def shutdown(self) -> None:
        """Flush scheduled sends, then stop the dispatchers."""
        while self._pending_sends:
            await asyncio.gather(*list(self._pending_sends), return_exceptions=True)
        for task in self._dispatchers:
            task.cancel()
        await asyncio.gather(*self._dispatchers, return_exceptions=True)
        self._dispatchers.clear()
        logger.debug("Container %s shut down", self.name)
