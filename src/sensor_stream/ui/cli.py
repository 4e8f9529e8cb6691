"""Typer CLI that streams host metrics snapshots to the terminal."""

from __future__ import annotations

import asyncio
from typing import Any

import typer
from rich.console import Console

from sensor_stream.array import SensorArray
from sensor_stream.exceptions import DelayValidationError
from sensor_stream.sensors import SystemMetricsSensor
from sensor_stream.telemetry import configure_logging

console = Console()
app = typer.Typer(help="Merge sensor readings into a live snapshot stream")


async def _watch(array: SensorArray, count: int) -> int:
    """Print snapshots until ``count`` were shown (0 = until interrupted)."""
    shown = 0
    async for snapshot in array:
        console.print_json(data=snapshot, default=str)
        shown += 1
        if count and shown >= count:
            array.stop()
    return shown


@app.callback()
def main() -> None:
    """sensor-stream command line."""
    configure_logging()


@app.command()
def watch(
    delay: str = typer.Option(
        "500", "--delay", "-d", help="Milliseconds between cycles, or 'frame_sync'"
    ),
    accumulate: bool = typer.Option(
        False, "--accumulate", "-a", help="Fold snapshots into one state"
    ),
    timestamp: bool = typer.Option(
        True, "--timestamp/--no-timestamp", help="Attach $timestamp fields"
    ),
    count: int = typer.Option(
        0, "--count", "-n", min=0, help="Stop after N snapshots (0 = forever)"
    ),
    interval: float = typer.Option(
        1.0, "--interval", "-i", min=0.0, help="Seconds between system readings"
    ),
) -> None:
    """Stream host CPU, memory and disk usage as merged snapshots."""
    options: dict[str, Any] = {"delay": delay, "accumulate": accumulate, "timestamp": timestamp}
    try:
        array = SensorArray(options)
    except DelayValidationError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2) from None

    array.add(SystemMetricsSensor(interval_seconds=interval))

    try:
        shown = asyncio.run(_watch(array, count))
    except KeyboardInterrupt:
        array.stop()
        console.print("[dim]interrupted[/dim]")
        return

    console.print(f"[dim]{shown} snapshot(s)[/dim]")


if __name__ == "__main__":
    app()
