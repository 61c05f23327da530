"""Typer CLI for mesh-telemetry.

Commands:
  generate  Generate a snapshot for a filter selection and time range
  catalog   List filter catalog options and their weights
  ranges    List time ranges and their bucket layouts
"""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from pydantic import TypeAdapter
from rich.table import Table

from mesh_telemetry.buckets import InvalidTimeRangeError
from mesh_telemetry.catalog import CatalogEntry, describe_catalog
from mesh_telemetry.engine import TelemetryEngine
from mesh_telemetry.models import (
    ALL_NAMESPACES,
    ALL_SERVICES,
    ALL_WORKLOADS,
    BucketingMode,
    EngineSettings,
    FilterSelection,
    TelemetrySnapshot,
)
from mesh_telemetry.projection import project

app = typer.Typer(
    name="mesh-telemetry",
    help="Synthetic service-mesh telemetry generator",
    no_args_is_help=True,
)
console = Console()

_HEALTH_COLORS = {5: "green", 4: "green", 3: "yellow"}
_OUTPUT_FORMATS = ("text", "json")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Synthetic service-mesh telemetry generator."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _check_format(format: str) -> None:
    if format not in _OUTPUT_FORMATS:
        allowed = ", ".join(_OUTPUT_FORMATS)
        console.print(f"[red]Unknown output format '{format}'. Use one of: {allowed}[/red]")
        raise typer.Exit(1)


def _build_settings(*, seed: int | None, mode: str) -> EngineSettings:
    try:
        bucketing_mode = BucketingMode(mode)
    except ValueError:
        allowed = ", ".join(m.value for m in BucketingMode)
        console.print(f"[red]Unknown bucketing mode '{mode}'. Use one of: {allowed}[/red]")
        raise typer.Exit(1) from None

    settings = EngineSettings()
    update: dict[str, object] = {"bucketing_mode": bucketing_mode}
    if seed is not None:
        update["seed"] = seed
    return settings.model_copy(update=update)


def _print_snapshot(snapshot: TelemetrySnapshot, metric: str) -> None:
    rollup = snapshot.rollup
    health = rollup.service_health
    color = _HEALTH_COLORS.get(health.current, "red")
    selection = snapshot.selection

    console.print(
        Panel(
            f"[bold]Service health:[/bold] [{color}]{health.current}/{health.total}[/{color}]\n"
            f"Error rate: {rollup.error_rate_percent}%  "
            f"Avg latency: {rollup.avg_latency_ms}ms  "
            f"Throughput: {rollup.throughput_per_min}/min\n"
            f"CPU: {rollup.avg_cpu_percent}%  "
            f"Memory: {rollup.avg_memory_percent}%  "
            f"Uptime: {rollup.uptime_percent}%",
            title=(
                f"{selection.namespace} / {selection.service} / {selection.workload}"
                f" - last {rollup.window} buckets"
            ),
        )
    )

    totals = snapshot.totals
    console.print(
        f"[bold]Range {snapshot.time_range.value}:[/bold] "
        f"{totals.total_requests:,} requests, {totals.error_rate_percent}% errors, "
        f"{totals.avg_latency_ms}ms avg latency, {totals.throughput_k_per_min}K/min"
    )

    chart = project(snapshot.series, metric)
    table = Table(title=f"{chart.primary_name} vs {chart.secondary_name}")
    table.add_column("Time", style="cyan")
    table.add_column(chart.primary_name, style="green", justify="right")
    table.add_column(chart.secondary_name, justify="right")
    table.add_column("CPU %", justify="right")
    table.add_column("Memory %", justify="right")
    for point, sample in zip(chart.points, snapshot.series.samples, strict=True):
        table.add_row(
            point.time,
            f"{point.primary:g}",
            f"{point.secondary:g}",
            f"{sample.cpu:g}",
            f"{sample.memory:g}",
        )
    console.print(table)


@app.command()
def generate(
    namespace: Annotated[
        str, typer.Option("--namespace", "-n", help="Namespace filter")
    ] = ALL_NAMESPACES,
    service: Annotated[str, typer.Option("--service", "-s", help="Service filter")] = ALL_SERVICES,
    workload: Annotated[
        str, typer.Option("--workload", "-w", help="Workload filter")
    ] = ALL_WORKLOADS,
    time_range: Annotated[
        str, typer.Option("--range", "-r", help="Time range: 1h, 6h, 24h or 7d")
    ] = "1h",
    metric: Annotated[
        str,
        typer.Option("--metric", "-m", help="Chart metric: requests, errors, latency, throughput"),
    ] = "requests",
    seed: Annotated[
        int | None, typer.Option("--seed", help="Seed for a reproducible series")
    ] = None,
    mode: Annotated[
        str, typer.Option("--mode", help="Bucketing mode: range or hourly")
    ] = BucketingMode.RANGE.value,
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text or json")
    ] = "text",
) -> None:
    """Generate a telemetry snapshot for one filter selection."""
    _check_format(format)
    engine = TelemetryEngine(_build_settings(seed=seed, mode=mode))
    selection = FilterSelection(namespace=namespace, service=service, workload=workload)

    try:
        snapshot = engine.regenerate(selection, time_range)
    except InvalidTimeRangeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if format == "json":
        typer.echo(snapshot.model_dump_json(indent=2))
        return

    _print_snapshot(snapshot, metric)


@app.command()
def catalog(
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text or json")
    ] = "text",
) -> None:
    """List filter catalog options and the weight each one resolves to."""
    _check_format(format)
    entries = describe_catalog(EngineSettings().multipliers)

    if format == "json":
        typer.echo(TypeAdapter(list[CatalogEntry]).dump_json(entries, indent=2).decode())
        return

    table = Table(title="Filter Catalog")
    table.add_column("Dimension", style="cyan")
    table.add_column("Value")
    table.add_column("Weight", style="green", justify="right")
    for e in entries:
        weight = f"{e.weight:g}" if e.mapped else f"[dim]{e.weight:g}[/dim]"
        table.add_row(e.dimension, e.value, weight)
    console.print(table)


@app.command()
def ranges() -> None:
    """List time ranges and their bucket layouts."""
    settings = EngineSettings()

    table = Table(title="Time Ranges")
    table.add_column("Range", style="cyan")
    table.add_column("Buckets", justify="right")
    table.add_column("Minutes / bucket", justify="right")
    for time_range, spec in settings.buckets.items():
        table.add_row(time_range.value, str(spec.bucket_count), str(spec.bucket_minutes))
    console.print(table)

    hourly = settings.hourly_bucket
    console.print(
        f"[dim]hourly mode: {hourly.bucket_count} buckets x {hourly.bucket_minutes} min[/dim]"
    )


if __name__ == "__main__":
    app()
