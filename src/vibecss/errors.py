"""Error types for fatal I/O failures, with formatted path context."""

from __future__ import annotations

from pathlib import Path


class VibeCssError(Exception):
    """Base class for failures that abort a scan or generation run."""

    def __init__(self, message: str, path: Path | str) -> None:
        self.message = message
        self.path = Path(path)
        super().__init__(self.format())

    def format(self) -> str:
        return f"error: {self.message}\n  --> {self.path}"


class DirectoryNotFoundError(VibeCssError):
    """Raised when the directory to scan does not exist."""

    def __init__(self, path: Path | str) -> None:
        super().__init__("directory not found", path)


class WriteFailureError(VibeCssError):
    """Raised when the output stylesheet cannot be written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"cannot write output: {reason}", path)


class ReadFailureError(VibeCssError):
    """Raised when a matched input file cannot be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.reason = reason
        super().__init__(f"cannot read input: {reason}", path)
