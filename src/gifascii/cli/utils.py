"""Shared utilities for CLI commands."""

import sys
from pathlib import Path

import click

from ..config import CACHE_STRATEGIES, ConverterConfig
from ..error_handling import ConfigurationError
from ..io import setup_logging
from ..parallel import ParallelConfig
from ..state import AppState


def handle_generic_error(command_name: str, error: Exception) -> None:
    """Handle generic command errors with consistent formatting."""
    click.echo(f"❌ {command_name} failed: {error}", err=True)
    sys.exit(1)


def handle_keyboard_interrupt(command_name: str) -> None:
    """Handle keyboard interrupt with consistent formatting."""
    click.echo(f"\n⏹️  {command_name} interrupted by user", err=True)
    sys.exit(1)


def state_options(func):
    """Options shared by every command that loads a GIF."""
    func = click.option(
        "--strategy",
        type=click.Choice(CACHE_STRATEGIES),
        default=None,
        help="Cache strategy: build every width up front or resize on demand",
    )(func)
    func = click.option(
        "--workers",
        "-j",
        type=int,
        default=None,
        help="Worker threads for cache building and rendering (default: CPU count)",
    )(func)
    func = click.option(
        "--log-dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Write a log file to this directory",
    )(func)
    return func


def build_state(strategy: str | None, workers: int | None, log_dir: Path | None) -> AppState:
    """Create the AppState for one CLI invocation."""
    if log_dir is not None:
        setup_logging(log_dir)
    overrides = {"CACHE_STRATEGY": strategy} if strategy else {}
    try:
        config = ConverterConfig.from_env(**overrides)
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", cause=e) from e
    return AppState(config, ParallelConfig(max_workers=workers))
