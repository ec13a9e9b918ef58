"""I/O utilities for atomic writes, ASCII export and logging setup."""

import logging
import re
import tempfile
from collections.abc import Iterable
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from shutil import move

from .error_handling import ExportError, error_context

logger = logging.getLogger(__name__)

FRAME_HEADER = "--- FRAME {index} ---"
FRAME_HEADER_RE = re.compile(r"^--- FRAME (\d+) ---$")


def setup_logging(log_dir: Path, log_level: str = "INFO") -> logging.Logger:
    """Set up logging configuration for gifascii.

    Args:
        log_dir: Directory to store log files
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"gifascii_{timestamp}.log"

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )

    return logging.getLogger("gifascii")


@contextmanager
def atomic_write(target_path: Path, mode: str = "w"):
    """Context manager for atomic file writes using temporary files.

    Args:
        target_path: Final path where file should be written
        mode: File open mode

    Yields:
        File handle for writing
    """
    target_path.parent.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode=mode,
        dir=target_path.parent,
        delete=False,
        suffix=f".tmp_{target_path.name}"
    ) as temp_file:
        try:
            yield temp_file
            temp_file.flush()
            move(temp_file.name, target_path)
        except Exception:
            Path(temp_file.name).unlink(missing_ok=True)
            raise


def export_frames(output_path: str | Path, frames: Iterable[str]) -> None:
    """Write rendered ASCII frames to a plain text file.

    Each frame is preceded by a ``--- FRAME <index> ---`` line and followed
    by a newline, leaving a blank line between frames.

    Raises:
        ExportError: If the file cannot be written
    """
    output_path = Path(output_path)
    count = 0
    with error_context(
        "export ASCII frames", ExportError, context={"path": str(output_path)}, logger=logger
    ):
        with atomic_write(output_path, mode="wb") as f:
            for index, frame in enumerate(frames):
                f.write((FRAME_HEADER.format(index=index) + "\n").encode("utf-8"))
                f.write(frame.encode("utf-8"))
                f.write(b"\n")
                count += 1

    logger.info(f"Exported {count} frames to {output_path}")


def read_exported_frames(input_path: str | Path) -> list[str]:
    """Read frames written by export_frames back in their original order."""
    text = Path(input_path).read_bytes().decode("utf-8")

    frames: list[str] = []
    current: list[str] | None = None
    for line in text.splitlines(keepends=True):
        match = FRAME_HEADER_RE.match(line.rstrip("\n"))
        if match and int(match.group(1)) == len(frames) + (current is not None):
            if current is not None:
                frames.append(_strip_separator(current))
            current = []
        elif current is not None:
            current.append(line)

    if current is not None:
        frames.append(_strip_separator(current))
    return frames


def _strip_separator(lines: list[str]) -> str:
    payload = "".join(lines)
    return payload[:-1] if payload.endswith("\n") else payload
