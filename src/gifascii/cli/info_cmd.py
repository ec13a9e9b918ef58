"""Show decode and cache details for a GIF."""

import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ..api import load_gif
from .utils import build_state, handle_generic_error, state_options


@click.command()
@click.argument("gif_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--json", "output_json", is_flag=True, help="Output details in JSON format")
@state_options
def info(
    gif_path: Path,
    output_json: bool,
    strategy: str | None,
    workers: int | None,
    log_dir: Path | None,
) -> None:
    """Load GIF_PATH and report frames, timing and cache statistics.

    Examples:

        gifascii info cat.gif

        gifascii info cat.gif --json --strategy on_demand
    """
    try:
        state = build_state(strategy, workers, log_dir)
        load_gif(state, gif_path)
        snapshot = state.snapshot()
        stats = snapshot.cache.get_stats()
        width, height = snapshot.dimensions

        details = {
            "file": str(gif_path),
            "frame_count": snapshot.frame_count,
            "width": width,
            "height": height,
            "duration_ms": sum(snapshot.durations_ms),
            "workers": state.parallel_config.max_workers,
            "cache": stats,
        }

        if output_json:
            click.echo(json.dumps(details, indent=2))
            return

        console = Console()
        table = Table(title=f"🎞️  {gif_path.name}", show_header=True, header_style="bold magenta")
        table.add_column("Property", style="cyan", no_wrap=True)
        table.add_column("Value", justify="right")

        table.add_row("Frames", str(snapshot.frame_count))
        table.add_row("Dimensions", f"{width}x{height}")
        table.add_row("Duration", f"{details['duration_ms']} ms")
        table.add_row("Workers", str(details["workers"]))
        for key, value in stats.items():
            if isinstance(value, float):
                value = f"{value:.2f}"
            table.add_row(f"cache.{key}", str(value))

        console.print(table)
    except Exception as e:
        handle_generic_error("Info", e)
