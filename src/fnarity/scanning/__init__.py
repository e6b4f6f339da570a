"""Tree-sitter based declaration scanning."""

from .extractor import Declaration, DeclarationExtractor
from .languages import LANGUAGES, LanguageConfig, get_language
from .queries.rust import DeclarationShape
from .treesitter_parser import TreeSitterParser

__all__ = [
    "Declaration",
    "DeclarationExtractor",
    "DeclarationShape",
    "LANGUAGES",
    "LanguageConfig",
    "TreeSitterParser",
    "get_language",
]
