"""Error type and reporting for invalid arguments and map files."""

from __future__ import annotations

import sys
from typing import TextIO

RED_BOLD = "\x1b[1;91m"
YELLOW = "\x1b[0;33m"
RESET = "\x1b[0m"


class ConfigError(Exception):
    """Raised when the arguments, a map file or its contents are invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def report_error(message: str, stream: TextIO | None = None) -> None:
    """Write a highlighted error report for ``message`` to ``stream`` (stderr by default)."""
    out = sys.stderr if stream is None else stream
    out.write(f"{RED_BOLD}Error\n{RESET}{YELLOW}\t{message}{RESET}\n")