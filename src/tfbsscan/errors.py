from __future__ import annotations

from pathlib import Path
from typing import Optional


class TfbsScanError(Exception):
    """Base class for errors raised by tfbsscan."""


class ParseError(TfbsScanError, ValueError):
    """A motif table line or record could not be used.

    Attributes
    ----------
    line_number:
        1-based line (or record) number, if known.
    line:
        The offending text, if known.
    path:
        Source file, if the records came from a file.
    """

    def __init__(
        self,
        message: str,
        *,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        path: Optional[str | Path] = None,
    ) -> None:
        self.message = message
        self.line_number = line_number
        self.line = line
        self.path = Path(path) if path is not None else None
        super().__init__(self._format())

    def _format(self) -> str:
        where = ""
        if self.path is not None:
            where = f"{self.path}"
        if self.line_number is not None:
            where = f"{where}:{self.line_number}" if where else f"line {self.line_number}"
        out = f"{where}: {self.message}" if where else self.message
        if self.line is not None:
            out += f" (got {self.line!r})"
        return out


class ConfigError(TfbsScanError, ValueError):
    """Invalid or missing user configuration (command-line options)."""
