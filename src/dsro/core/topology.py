"""Agent topologies: the fixed, undirected neighbor relation of a run.

A :class:`Topology` wraps an undirected :class:`networkx.Graph` over the
slots ``0..size-1``.  It is built either from an explicit adjacency matrix
or by one of the generators (:func:`fully_connected`, :func:`ring`,
:func:`small_world`).  Self-loops are ignored everywhere.  The gossip
protocol needs a connected topology to reach the global optimum; use
:meth:`Topology.is_connected` to check.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Iterable, Sequence

import networkx as nx

from dsro.core.errors import DegreeError, DimensionMismatchError

logger = logging.getLogger(__name__)


class Topology:
    """Symmetric neighbor relation over the slots ``0..size-1``."""

    def __init__(self, size: int, edges: Iterable[tuple[int, int]] = ()) -> None:
        if size < 0:
            raise DimensionMismatchError(0, size, "topology size must be non-negative")
        self.size = size
        self.graph = nx.Graph()
        self.graph.add_nodes_from(range(size))
        self.add_edges(edges)

    @classmethod
    def from_graph(cls, graph: nx.Graph) -> Topology:
        """Adopt a networkx graph whose nodes are ``0..n-1``."""
        topology = cls(graph.number_of_nodes())
        topology.add_edges(graph.edges())
        return topology

    def add_edges(self, edges: Iterable[tuple[int, int]]) -> None:
        for a, b in edges:
            if not (0 <= a < self.size and 0 <= b < self.size):
                msg = f"edge ({a}, {b}) outside slots 0..{self.size - 1}"
                raise DimensionMismatchError(self.size, max(a, b) + 1, msg)
            if a != b:
                self.graph.add_edge(a, b)

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        return f"Topology(size={self.size}, edges={self.graph.number_of_edges()})"

    @property
    def edges(self) -> list[tuple[int, int]]:
        """Sorted list of undirected edges as ``(low, high)`` pairs."""
        return sorted((min(a, b), max(a, b)) for a, b in self.graph.edges())

    def neighbors_of(self, slot: int) -> frozenset[int]:
        return frozenset(self.graph.neighbors(slot))

    def validate(self, n: int) -> None:
        """Raise :class:`DimensionMismatchError` unless the topology has *n* slots."""
        if self.size != n:
            raise DimensionMismatchError(n, self.size, "topology size vs. resource count")

    def components(self) -> list[list[int]]:
        """Connected components, each sorted, ordered by their lowest slot."""
        return sorted(sorted(c) for c in nx.connected_components(self.graph))

    def is_connected(self) -> bool:
        # networkx refuses to call the null graph connected
        if self.size == 0:
            return True
        return nx.is_connected(self.graph)

    def to_adjacency(self) -> list[list[int]]:
        return [
            [1 if self.graph.has_edge(a, b) else 0 for b in range(self.size)]
            for a in range(self.size)
        ]


def from_adjacency(matrix: Sequence[Sequence[int | bool | float]]) -> Topology:
    """Build a topology from a square adjacency matrix.

    Any non-zero entry creates an undirected edge; diagonal entries are
    ignored.
    """
    n = len(matrix)
    for row_index, row in enumerate(matrix):
        if len(row) != n:
            raise DimensionMismatchError(n, len(row), f"adjacency row {row_index} is not square")
    return Topology(n, ((a, b) for a in range(n) for b in range(n) if matrix[a][b]))


def fully_connected(n: int) -> Topology:
    """Every pair of distinct slots is adjacent."""
    return Topology.from_graph(nx.complete_graph(n))


def ring(n: int) -> Topology:
    """Slot ``i`` is adjacent to slot ``i + 1 mod n``."""
    return Topology.from_graph(nx.cycle_graph(n))


def small_world(
    n: int,
    k: int,
    p: float,
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
) -> Topology:
    """Watts–Strogatz style topology.

    Starts from a ring lattice where every slot is joined to its ``k / 2``
    nearest slots on each side, then adds every missing edge independently
    with probability ``p``.  No lattice edge is rewired away, so this is not
    :func:`networkx.watts_strogatz_graph`.  Fewer than four slots collapse to
    :func:`fully_connected`.
    """
    if k < 2 or k % 2 != 0:
        raise DegreeError(k)
    if n < 4:
        return fully_connected(n)

    rng = rng or random.Random(seed)
    topology = Topology(n)
    graph = topology.graph
    for i in range(n):
        for step in range(1, k // 2 + 1):
            if (i + step) % n != i:
                graph.add_edge(i, (i + step) % n)

    shortcuts = [
        (a, b)
        for a in range(n)
        for b in range(a + 1, n)
        if not graph.has_edge(a, b) and rng.random() < p
    ]
    graph.add_edges_from(shortcuts)

    logger.debug("small_world(n=%d, k=%d, p=%s): %d shortcut edges", n, k, p, len(shortcuts))
    return topology
