"""Output exceptions: artifacts that cannot be written."""

from pathlib import Path

from .base import EventChainError


class OutputError(EventChainError):
    """Raised when an output artifact cannot be written."""

    def __init__(self, path: Path, reason: str):
        super().__init__(
            f"Cannot write output: {path}",
            details={"path": str(path), "reason": reason},
        )
        self.path = path
        self.reason = reason
