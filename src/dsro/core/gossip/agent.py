"""Gossip propagation agent — flood resources, then flood the best combination.

Each agent owns one resource and knows only its neighbors and the total
number of participants.  The protocol runs in two flooding phases:

1. **Resources.**  Every agent floods a :class:`ResourceMessage` for its
   own resource.  On first sight of a source the agent folds the payload
   into its aggregate, evaluates it, and keeps the set of sources seen so
   far as its candidate if the cost strictly improved.
2. **Best combination.**  Once resources from all participants arrived,
   the agent floods a :class:`LocalBestMessage` with its candidate.
   Strictly better candidates are adopted; ties keep the first arrival.

Both phases end when the corresponding set of seen sources has
``n_participants`` entries.  Every handler is idempotent (sources are
deduplicated) and monotone (only strict improvements are kept), so
duplicated and reordered deliveries are harmless.
"""

from __future__ import annotations

import asyncio
import enum
import logging
from typing import TYPE_CHECKING

from dsro.core.model.problem import sro_target_function
from dsro.core.model.resource import add
from dsro.runtime.messages import Address, LocalBestMessage, ResourceMessage

if TYPE_CHECKING:
    from collections.abc import Iterable

    from dsro.core.model.resource import DiscreteResource
    from dsro.runtime.container import Container

logger = logging.getLogger(__name__)


class GossipState(enum.Enum):
    PROPAGATING = "propagating"
    GATHERING = "gathering"
    BEST_PROPAGATING = "best_propagating"
    TERMINATED = "terminated"


class GossipAgent:
    """Owner of one resource in the flood-and-converge protocol."""

    def __init__(
        self,
        resource: DiscreteResource,
        p_target: float,
        v_target: int,
        n_participants: int,
    ) -> None:
        self.base_resource = resource
        self.aggregate_resource = resource
        self.p_target = p_target
        self.v_target = v_target
        self.n_participants = n_participants
        self.neighbors: tuple[Address, ...] = ()
        self.state = GossipState.PROPAGATING

        # dicts keep insertion order; values are unused
        self._seen_resource_sources: dict[Address, None] = {}
        self._seen_best_sources: dict[Address, None] = {}

        self.best_known_set: tuple[Address, ...] = ()
        self.best_known_cost: float = sro_target_function([resource], p_target, v_target)

        self.container: Container | None = None
        self._address: Address | None = None
        self._resources_complete = asyncio.Event()
        self._bests_complete = asyncio.Event()

    # ------------------------------------------------------------------
    # Wiring
    # ------------------------------------------------------------------

    @property
    def address(self) -> Address:
        if self._address is None:
            msg = "agent is not registered with a container"
            raise RuntimeError(msg)
        return self._address

    def bind(self, container: Container, address: Address) -> None:
        self.container = container
        self._address = address
        self._seen_resource_sources = {address: None}
        self._seen_best_sources = {address: None}
        self.best_known_set = (address,)

    def set_neighbors(self, neighbors: Iterable[Address]) -> None:
        """Fix the neighbor list; self-references are dropped."""
        own = self.address
        self.neighbors = tuple(dict.fromkeys(n for n in neighbors if n != own))

    @property
    def seen_resource_sources(self) -> tuple[Address, ...]:
        return tuple(self._seen_resource_sources)

    @property
    def seen_best_sources(self) -> tuple[Address, ...]:
        return tuple(self._seen_best_sources)

    @property
    def terminated(self) -> bool:
        return self.state is GossipState.TERMINATED

    # ------------------------------------------------------------------
    # Control loop
    # ------------------------------------------------------------------

    async def run(self) -> None:
        """Drive the agent through both flooding phases until termination."""
        self.start()
        await self._resources_complete.wait()

        self.state = GossipState.BEST_PROPAGATING
        logger.info(
            "%s heard all %d resources, local best %s",
            self.address,
            self.n_participants,
            self.best_known_cost,
        )
        self._broadcast(
            LocalBestMessage(
                source=self.address,
                solution_set=self.best_known_set,
                cost=self.best_known_cost,
            )
        )
        await self._bests_complete.wait()

        self.state = GossipState.TERMINATED
        logger.info("%s terminated with cost %s", self.address, self.best_known_cost)

    def start(self) -> None:
        """Announce the own resource to every neighbor."""
        self._broadcast(ResourceMessage(source=self.address, payload=self.base_resource))
        if self.state is GossipState.PROPAGATING:
            self.state = GossipState.GATHERING
        self._check_progress()

    def _broadcast(self, message: ResourceMessage | LocalBestMessage) -> None:
        if self.container is None:
            msg = "agent is not registered with a container"
            raise RuntimeError(msg)
        for neighbor in self.neighbors:
            self.container.schedule_send(self.address, neighbor, message)

    def _check_progress(self) -> None:
        if len(self._seen_resource_sources) >= self.n_participants:
            self._resources_complete.set()
        if len(self._seen_best_sources) >= self.n_participants:
            self._bests_complete.set()

    # ------------------------------------------------------------------
    # Message handling
    # ------------------------------------------------------------------

    def handle_message(self, message: ResourceMessage | LocalBestMessage) -> None:
        match message:
            case ResourceMessage():
                self._handle_resource(message)
            case LocalBestMessage():
                self._handle_local_best(message)
        self._check_progress()

    def _handle_resource(self, message: ResourceMessage) -> None:
        if message.source in self._seen_resource_sources:
            logger.debug("%s ignoring duplicate resource from %s", self._address, message.source)
            return

        self._seen_resource_sources[message.source] = None
        self.aggregate_resource = add(self.aggregate_resource, message.payload)
        cost = sro_target_function([self.aggregate_resource], self.p_target, self.v_target)
        if cost < self.best_known_cost:
            self.best_known_cost = cost
            self.best_known_set = tuple(self._seen_resource_sources)
            logger.debug("%s improved to %s with %d owners", self._address, cost, len(self.best_known_set))

        self._broadcast(message)

    def _handle_local_best(self, message: LocalBestMessage) -> None:
        if message.source in self._seen_best_sources:
            logger.debug("%s ignoring duplicate local best from %s", self._address, message.source)
            return

        self._seen_best_sources[message.source] = None
        if message.cost < self.best_known_cost:
            self.best_known_cost = message.cost
            self.best_known_set = message.solution_set
            logger.debug("%s adopted %s from %s", self._address, message.cost, message.source)

        self._broadcast(message)
