"""Write a grayscale preview of the brightness/contrast adjustment."""

from pathlib import Path

import click

from ..api import load_gif
from ..preview import render_preview_png
from .utils import build_state, handle_generic_error, state_options


@click.command()
@click.argument("gif_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--brightness", "-b", type=int, default=0, show_default=True, help="Brightness offset")
@click.option("--contrast", "-c", type=float, default=1.0, show_default=True, help="Contrast multiplier")
@click.option("--frame", "-f", "frame_index", type=int, default=0, show_default=True, help="Frame to preview (wraps around)")
@state_options
def preview(
    gif_path: Path,
    output: Path,
    brightness: int,
    contrast: float,
    frame_index: int,
    strategy: str | None,
    workers: int | None,
    log_dir: Path | None,
) -> None:
    """Save an adjusted grayscale frame of GIF_PATH as a PNG at OUTPUT."""
    try:
        state = build_state(strategy, workers, log_dir)
        load_gif(state, gif_path)
        png = render_preview_png(
            state.snapshot().cache, brightness, contrast, frame_index, state.config
        )
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(png)
        click.echo(f"✅ Preview written to {output}")
    except Exception as e:
        handle_generic_error("Preview", e)
