"""Input exceptions: record sources and table artifacts that cannot be read."""

from pathlib import Path

from .base import EventChainError


class InputError(EventChainError):
    """Base class for errors reading an input source."""

    pass


class SourceAccessError(InputError):
    """Raised when an input file cannot be opened or read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot read input: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason


class HeaderError(InputError):
    """Raised when the header line of an input cannot be read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot read header of {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
