"""Exception hierarchy for eventchain."""

from .base import EventChainError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidDelimiterError,
)
from .input import (
    HeaderError,
    InputError,
    SourceAccessError,
)
from .output import OutputError

__all__ = [
    "EventChainError",
    "ConfigurationError",
    "InvalidConfigError",
    "InvalidDelimiterError",
    "InputError",
    "SourceAccessError",
    "HeaderError",
    "OutputError",
]
