"""Build output for the buildpack.

The lifecycle runtime shows whatever a buildpack writes to stdout, so build
progress is written as plain indented lines to a stream. Every line is also
mirrored at DEBUG to the ``dep_ensure.logs`` logger.
"""

from __future__ import annotations

import logging
import sys
from datetime import timedelta
from typing import TextIO

logger = logging.getLogger(__name__)

INDENT = "  "


def format_duration(duration: timedelta) -> str:
    """Render an elapsed duration, e.g. ``1.5s`` or ``2m3.25s``.

    Args:
        duration: Elapsed time; negative values are clamped to zero.

    Returns:
        Human-readable duration string.
    """
    total = max(duration.total_seconds(), 0.0)
    minutes, seconds = divmod(total, 60)
    seconds_str = f"{seconds:.3f}".rstrip("0").rstrip(".")
    if minutes:
        return f"{int(minutes)}m{seconds_str}s"
    return f"{seconds_str}s"


class Emitter:
    """Line-oriented log sink for build output.

    Args:
        stream: Text stream to write to (defaults to stdout).
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream if stream is not None else sys.stdout

    def _write(self, level: int, message: str) -> None:
        line = f"{INDENT * level}{message}"
        self.stream.write(line + "\n")
        self.stream.flush()
        logger.debug(line)

    def title(self, message: str) -> None:
        """Write a top-level banner line."""
        self._write(0, message)

    def process(self, message: str) -> None:
        """Write a step line."""
        self._write(1, message)

    def subprocess(self, message: str) -> None:
        """Write a line nested under the current step."""
        self._write(2, message)

    def action(self, message: str) -> None:
        """Write a result line for the current step."""
        self._write(2, message)

    def detail(self, message: str) -> None:
        """Write captured output, one line per input line."""
        for line in message.splitlines():
            self._write(3, line)

    def break_(self) -> None:
        """Write an empty line."""
        self.stream.write("\n")
        self.stream.flush()


__all__ = ["Emitter", "format_duration"]
