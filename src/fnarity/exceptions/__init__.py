"""Exception hierarchy for fnarity."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
)
from .base import FnArityError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)

__all__ = [
    "FnArityError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
]
