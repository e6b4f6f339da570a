"""
fnarity - flag Rust functions that take too many arguments.

Walks a source tree, parses every ``.rs`` file with tree-sitter, counts the
parameters of each function-like declaration (the ``self`` receiver is not
counted) and reports those above a threshold, worst last.
"""

__version__ = "0.1.0"

from .config import ScanConfig, load_config
from .models import ResultRecord, ScanReport
from .scanner import scan

__all__ = [
    "scan",  # Main entry point
    "load_config",
    "ScanConfig",
    "ScanReport",
    "ResultRecord",
]
