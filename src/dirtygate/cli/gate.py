"""dirtygate gate: dirty-record tolerance check command."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from dirtygate.core.gate import evaluate_policy, load_policy
from dirtygate.errors import LimitKind, ToleranceError
from dirtygate.io.stats_io import read_statistics, write_result
from dirtygate.models.policy import ErrorTolerancePolicy

console = Console()


def gate(
    stats_path: str = typer.Option(..., "-s", "--stats", help="Path to statistics JSON"),
    config_path: Optional[str] = typer.Option(None, "-c", "--config", help="Path to job config YAML"),
    record_limit: Optional[int] = typer.Option(
        None, "--record-limit", help="Max tolerated dirty records (overrides config)"
    ),
    percentage_limit: Optional[float] = typer.Option(
        None, "--percentage-limit", help="Max tolerated dirty ratio in [0, 1] (overrides config)"
    ),
    output: Optional[str] = typer.Option(None, "-o", "--out", help="Output JSON path"),
) -> None:
    """Check job statistics against the configured dirty-record tolerance.

    Exit code 0 = within tolerance, 2 = limit exceeded, 1 = bad config or input.
    """
    try:
        policy = load_policy(config_path) if config_path else ErrorTolerancePolicy()
        if record_limit is not None or percentage_limit is not None:
            policy = ErrorTolerancePolicy(
                record_limit=record_limit if record_limit is not None else policy.record_limit,
                percentage_limit=(
                    percentage_limit if percentage_limit is not None else policy.percentage_limit
                ),
            )
        stats = read_statistics(stats_path)
    except (ToleranceError, OSError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1)

    result = evaluate_policy(policy, stats)

    console.print(
        f"\n[bold]Dirty Record Gate[/bold] "
        f"({result.total_error_records:,} dirty of {result.total_read_records:,} read)\n"
    )
    for check in result.checks:
        if not check.active:
            console.print(f"  [dim]SKIP[/dim]  {check.name}: not configured")
            continue
        status = "[green]PASS[/green]" if check.passed else "[red]FAIL[/red]"
        if check.kind == LimitKind.PERCENTAGE.value:
            observed = f"{check.observed:.6f}"
            threshold = f"{check.threshold:.6f}"
        else:
            observed = f"{check.observed:,}"
            threshold = f"{check.threshold:,}"
        console.print(f"  {status}  {check.name}: {observed} (limit: {threshold})")
        if not check.passed:
            console.print(f"         {check.message}")

    console.print()
    if result.passed:
        console.print("[bold green]Gate: PASSED[/bold green]")
    else:
        console.print("[bold red]Gate: FAILED[/bold red]")

    if output:
        write_result(output, result)
        console.print(f"[green]Saved to {output}[/green]")

    if not result.passed:
        raise typer.Exit(2)
