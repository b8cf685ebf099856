"""Configuration exceptions: settings, delimiters, output templates."""

from typing import Any

from .base import EventChainError


class ConfigurationError(EventChainError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidDelimiterError(ConfigurationError):
    """Raised when a field delimiter is not exactly one character."""

    def __init__(self, value: str, key: str = "delimiter"):
        super().__init__(
            f"Delimiter must be a single character, got {value!r}",
            details={"key": key, "length": str(len(value))},
        )
        self.key = key
        self.value = value
