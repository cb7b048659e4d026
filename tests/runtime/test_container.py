"""Tests for the agent container."""

from __future__ import annotations

import asyncio
import logging

import pytest

from dsro.runtime.container import Container
from dsro.runtime.errors import UnknownAddressError
from dsro.runtime.messages import Address, LocalBestMessage, ResourceMessage
from dsro.runtime.transport import InMemoryTransport


class PingAgent:
    """Sends one message to ``peer`` and finishes once it got one back."""

    def __init__(self) -> None:
        self.received: list[ResourceMessage | LocalBestMessage] = []
        self.peer: Address | None = None
        self.container: Container | None = None
        self.address: Address | None = None
        self._done = asyncio.Event()

    def bind(self, container: Container, address: Address) -> None:
        self.container = container
        self.address = address

    def handle_message(self, message: ResourceMessage | LocalBestMessage) -> None:
        self.received.append(message)
        self._done.set()

    async def run(self) -> None:
        assert self.container is not None and self.address is not None and self.peer is not None
        msg = LocalBestMessage(source=self.address, solution_set=(self.address,), cost=1.0)
        self.container.schedule_send(self.address, self.peer, msg)
        await self._done.wait()


class FailingAgent(PingAgent):
    def handle_message(self, message: ResourceMessage | LocalBestMessage) -> None:
        msg = "handler exploded"
        raise RuntimeError(msg)


class TestRegistration:
    def test_sequential_addresses(self) -> None:
        container = Container("node")
        first = container.register(PingAgent())
        second = container.register(PingAgent())
        assert first == Address("node", "agent0")
        assert second == Address("node", "agent1")
        assert set(container.agents) == {first, second}

    def test_bind_called(self) -> None:
        container = Container("node")
        agent = PingAgent()
        address = container.register(agent)
        assert agent.container is container
        assert agent.address == address

    def test_deliver_unknown(self) -> None:
        container = Container("node")
        msg = LocalBestMessage(source=Address("node", "agent0"), solution_set=(), cost=1.0)
        with pytest.raises(UnknownAddressError):
            container.deliver(Address("node", "agent5"), msg)

    def test_deliver_wrong_container(self) -> None:
        container = Container("node")
        container.register(PingAgent())
        msg = LocalBestMessage(source=Address("node", "agent0"), solution_set=(), cost=1.0)
        with pytest.raises(UnknownAddressError):
            container.deliver(Address("elsewhere", "agent0"), msg)


class TestRun:
    async def test_ping_pong(self) -> None:
        container = Container("node")
        a, b = PingAgent(), PingAgent()
        addr_a, addr_b = container.register(a), container.register(b)
        a.peer, b.peer = addr_b, addr_a

        await asyncio.wait_for(container.run(), 1.0)

        assert [m.source for m in a.received] == [addr_b]
        assert [m.source for m in b.received] == [addr_a]

    async def test_across_containers(self) -> None:
        transport = InMemoryTransport()
        left, right = Container("left", transport), Container("right", transport)
        a, b = PingAgent(), PingAgent()
        addr_a, addr_b = left.register(a), right.register(b)
        a.peer, b.peer = addr_b, addr_a

        await asyncio.wait_for(asyncio.gather(left.run(), right.run()), 1.0)

        assert a.received[0].source == addr_b
        assert transport.delivered == 2

    async def test_handler_error_aborts_run(self) -> None:
        container = Container("node")
        a, b = PingAgent(), FailingAgent()
        addr_a, addr_b = container.register(a), container.register(b)
        a.peer, b.peer = addr_b, addr_a

        with pytest.raises(RuntimeError, match="handler exploded"):
            await asyncio.wait_for(container.run(), 1.0)

    async def test_undeliverable_send_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        container = Container("node")
        sender = Address("node", "agent0")
        msg = LocalBestMessage(source=sender, solution_set=(), cost=1.0)

        with caplog.at_level(logging.WARNING, logger="dsro.runtime.container"):
            container.schedule_send(sender, Address("ghost", "agent0"), msg)
            await container.shutdown()

        assert "Dropping local_best" in caplog.text
