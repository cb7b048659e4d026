"""Shared CLI output formatters."""

from __future__ import annotations

import json
import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from dsro.core.topology import Topology  # noqa: TC001
from dsro.solvers.models import Solution  # noqa: TC001

console = Console()


def enable_verbose_logging() -> None:
    """Route ``dsro`` log records through rich at INFO level."""
    logger = logging.getLogger("dsro")
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(RichHandler(console=console, show_path=False))
    logger.setLevel(logging.INFO)


def _format_cost(cost: float) -> str:
    return "infeasible" if cost == float("inf") else f"{cost:.6g}"


def print_solution(solution: Solution, *, as_json: bool = False) -> None:
    """Pretty-print a solver result."""
    if as_json:
        console.print_json(solution.model_dump_json())
        return

    console.print(f"\n[bold]Solution ({solution.protocol})[/bold]")
    console.print(f"  Cost: {_format_cost(solution.cost)}")
    console.print(f"  Selected: {solution.selected_indices or '(none)'}")
    if solution.protocol == "blackboard":
        console.print(f"  Cycles: {solution.rounds}")
    elif solution.protocol == "gossip":
        console.print(f"  Messages delivered: {solution.messages}")


def print_comparison(solutions: list[Solution]) -> None:
    """Tabulate several solutions of the same problem side by side."""
    table = Table(title="Solutions")
    table.add_column("Protocol", style="cyan")
    table.add_column("Cost", justify="right")
    table.add_column("Selected")

    for solution in solutions:
        table.add_row(
            solution.protocol,
            _format_cost(solution.cost),
            _truncate(", ".join(str(i) for i in solution.selected_indices) or "-"),
        )

    console.print(table)


def print_topology(topology: Topology, *, as_json: bool = False) -> None:
    """Pretty-print a topology as a neighbor table."""
    if as_json:
        data = {
            "size": topology.size,
            "edges": topology.edges,
            "connected": topology.is_connected(),
        }
        console.print_json(json.dumps(data))
        return

    table = Table(title="Topology")
    table.add_column("Slot", style="cyan", justify="right")
    table.add_column("Degree", justify="right")
    table.add_column("Neighbors")

    for slot in range(topology.size):
        peers = sorted(topology.neighbors_of(slot))
        table.add_row(str(slot), str(len(peers)), _truncate(", ".join(map(str, peers)) or "-"))

    console.print(table)
    console.print(f"  {topology.size} agents, {len(topology.edges)} edges")
    components = topology.components()
    if len(components) > 1:
        console.print(f"[yellow]Disconnected:[/yellow] {len(components)} components")


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
