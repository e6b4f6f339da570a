"""Language configurations: what the scanner needs to know about a language.

Adding a new language:
  1. Add a query module under ``queries/`` and register it.
  2. Add a LanguageConfig entry to LANGUAGES below.
"""

from dataclasses import dataclass
from typing import Any, Callable

import tree_sitter_rust


@dataclass(frozen=True)
class LanguageConfig:
    """Everything the scanner needs to know about a language."""

    name: str

    # Returns the raw grammar handle passed to tree_sitter.Language
    grammar: Callable[[], Any]

    # Node kinds inside a parameter list that count toward arity
    parameter_kinds: tuple[str, ...]

    # Node kinds that are always the implicit receiver
    receiver_kinds: tuple[str, ...] = ()

    # Pattern node kinds that mark an explicitly typed receiver (`self: Box<Self>`)
    receiver_pattern_kinds: tuple[str, ...] = ()


LANGUAGES = {
    "rust": LanguageConfig(
        name="rust",
        grammar=tree_sitter_rust.language,
        parameter_kinds=("parameter", "variadic_parameter", "self_parameter"),
        receiver_kinds=("self_parameter",),
        receiver_pattern_kinds=("self",),
    ),
}


def get_language(name: str) -> LanguageConfig:
    """Look up a language by name.

    Raises:
        KeyError: If the language is not configured
    """
    return LANGUAGES[name]
