"""CLI module for gifascii commands."""

import click

from .convert_cmd import convert
from .info_cmd import info
from .play_cmd import play
from .preview_cmd import preview


@click.group()
@click.version_option(version="0.1.0", prog_name="gifascii")
def main() -> None:
    """🎞️ gifascii: animated GIF to ASCII art converter."""
    pass


main.add_command(convert)
main.add_command(info)
main.add_command(play)
main.add_command(preview)

__all__ = [
    "convert",
    "info",
    "main",
    "play",
    "preview",
]
