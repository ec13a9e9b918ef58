"""Convert a GIF to ASCII text."""

from pathlib import Path

import click

from ..api import convert_to_ascii, export_ascii, load_gif
from .utils import build_state, handle_generic_error, state_options


@click.command()
@click.argument("gif_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--width", "-w", type=int, default=100, show_default=True, help="Characters per row (20-250)")
@click.option("--brightness", "-b", type=int, default=0, show_default=True, help="Brightness offset")
@click.option("--contrast", "-c", type=float, default=1.0, show_default=True, help="Contrast multiplier")
@click.option("--frame", "-f", "frame_index", type=int, default=None, help="Render only this frame (wraps around)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Export frames to this text file instead of printing them",
)
@state_options
def convert(
    gif_path: Path,
    width: int,
    brightness: int,
    contrast: float,
    frame_index: int | None,
    output: Path | None,
    strategy: str | None,
    workers: int | None,
    log_dir: Path | None,
) -> None:
    """Convert GIF_PATH to ASCII art.

    Examples:

        # Print every frame at 80 columns
        gifascii convert cat.gif --width 80

        # Export a brighter rendering to a text file
        gifascii convert cat.gif -b 30 -c 1.2 -o cat.txt
    """
    try:
        state = build_state(strategy, workers, log_dir)
        frame_count = load_gif(state, gif_path)
        if frame_count == 0:
            click.echo(f"⚠️  {gif_path.name} has no frames", err=True)
            return

        result = convert_to_ascii(state, width, brightness, contrast, frame_index)
        frames = result.frames()

        if output is None:
            click.echo("\n".join(frames), nl=False)
        else:
            export_ascii(output, frames)
            click.echo(f"✅ Exported {len(frames)} frame(s) to {output}", err=True)
    except Exception as e:
        handle_generic_error("Convert", e)
