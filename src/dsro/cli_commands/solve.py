"""``dsro solve`` — solve the problem described by a run specification."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from dsro.cli_commands._output import (
    console,
    enable_verbose_logging,
    print_comparison,
    print_solution,
)


@click.command()
@click.argument("runspec", type=click.Path(exists=True))
@click.option(
    "--protocol",
    type=click.Choice(["gossip", "blackboard"]),
    default=None,
    help="Override the protocol from the run specification.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
@click.option("--dry-run", is_flag=True, help="Validate the run specification only.")
@click.option(
    "--compare-optimal",
    is_flag=True,
    help="Also solve by brute force and compare the costs.",
)
def solve(
    runspec: str,
    protocol: str | None,
    as_json: bool,
    verbose: bool,
    telemetry: bool,
    dry_run: bool,
    compare_optimal: bool,
) -> None:
    """Solve the problem defined in RUNSPEC yaml file."""
    from dsro.sdk.runspec import RunSpecLoader, RunSpecRunner

    try:
        spec = RunSpecLoader(Path(runspec)).load()
    except Exception as exc:
        console.print(f"[red]Validation error:[/red] {exc}")
        sys.exit(1)

    if telemetry:
        if spec.telemetry is None:
            from dsro.sdk.models import TelemetrySettings

            spec.telemetry = TelemetrySettings(enabled=True)
        else:
            spec.telemetry.enabled = True

    effective_protocol = protocol or spec.protocol

    if dry_run:
        console.print("[green]Run specification validated successfully.[/green]")
        console.print(f"  Name: {spec.name or '(unnamed)'}")
        console.print(f"  Protocol: {effective_protocol}")
        console.print(f"  Resources: {spec.problem.size}")
        return

    if verbose:
        enable_verbose_logging()
        console.print(f"Solving: {spec.name or '(unnamed)'} with {effective_protocol}")

    runner = RunSpecRunner(spec)

    try:
        solution = runner.run(effective_protocol)  # type: ignore[arg-type]
        optimum = runner.optimum() if compare_optimal else None
    except Exception as exc:
        console.print(f"[red]Execution error:[/red] {exc}")
        sys.exit(1)

    print_solution(solution, as_json=as_json)
    if optimum is not None and not as_json:
        print_comparison([solution, optimum])
