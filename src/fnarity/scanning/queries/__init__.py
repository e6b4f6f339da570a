"""Tree-sitter query registry.

Maps language names to their query modules.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import rust

if TYPE_CHECKING:
    from types import ModuleType

# Language to query module mapping
QUERY_MODULES: dict[str, ModuleType] = {
    "rust": rust,
}


def get_query_module(language: str) -> ModuleType:
    """Get the query module for a language.

    Raises:
        KeyError: If the language has no query module
    """
    return QUERY_MODULES[language]


__all__ = [
    "QUERY_MODULES",
    "get_query_module",
]
