"""Play a GIF as ASCII animation in the terminal."""

import time
from pathlib import Path

import click
from rich.console import Console
from rich.live import Live
from rich.text import Text

from ..api import convert_to_ascii, load_gif
from ..decoder import DEFAULT_FRAME_DURATION_MS
from .utils import build_state, handle_generic_error, handle_keyboard_interrupt, state_options


@click.command()
@click.argument("gif_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--width", "-w", type=int, default=80, show_default=True, help="Characters per row (20-250)")
@click.option("--brightness", "-b", type=int, default=0, show_default=True, help="Brightness offset")
@click.option("--contrast", "-c", type=float, default=1.0, show_default=True, help="Contrast multiplier")
@click.option("--loops", "-l", type=int, default=1, show_default=True, help="Times to play the animation (0 = forever)")
@state_options
def play(
    gif_path: Path,
    width: int,
    brightness: int,
    contrast: float,
    loops: int,
    strategy: str | None,
    workers: int | None,
    log_dir: Path | None,
) -> None:
    """Animate GIF_PATH as ASCII art, honoring each frame's delay."""
    try:
        state = build_state(strategy, workers, log_dir)
        if load_gif(state, gif_path) == 0:
            click.echo(f"⚠️  {gif_path.name} has no frames", err=True)
            return

        frames = convert_to_ascii(state, width, brightness, contrast).frames()
        delays = state.snapshot().durations_ms or (DEFAULT_FRAME_DURATION_MS,) * len(frames)

        console = Console()
        played = 0
        with Live(Text(frames[0]), console=console, auto_refresh=False) as live:
            while loops == 0 or played < loops:
                for frame, delay in zip(frames, delays):
                    live.update(Text(frame), refresh=True)
                    time.sleep(max(delay, 10) / 1000)
                played += 1
    except KeyboardInterrupt:
        handle_keyboard_interrupt("Play")
    except Exception as e:
        handle_generic_error("Play", e)
