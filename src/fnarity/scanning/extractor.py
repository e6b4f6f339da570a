"""DeclarationExtractor: finds function-like declarations in one source file.

Runs the declaration query produced from DeclarationShape over the file's
syntax tree and yields one Declaration per match.

Usage:
    extractor = DeclarationExtractor()
    for decl in extractor.extract(source_bytes, path):
        print(decl.name, decl.line, decl.shape)
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from tree_sitter import Node

from ..exceptions import ParsingError
from ..logging_config import get_logger
from .queries import get_query_module
from .queries.rust import DeclarationShape
from .treesitter_parser import TreeSitterParser

logger = get_logger(__name__)


@dataclass(frozen=True)
class Declaration:
    """A single function-like declaration matched in a syntax tree."""

    name: str
    params: Node
    line: int  # 1-based line where the parameter list starts
    shape: DeclarationShape


class DeclarationExtractor:
    """Extracts declarations from source files of one language.

    Safe to share across threads: each thread lazily gets its own
    TreeSitterParser, the compiled query is shared.
    """

    def __init__(
        self, language: str = "rust", shapes: tuple[DeclarationShape, ...] | None = None
    ) -> None:
        self.language = language
        queries = get_query_module(language)
        self.shapes = tuple(shapes) if shapes is not None else tuple(queries.DeclarationShape)
        self._name_capture = queries.NAME_CAPTURE
        self._params_capture = queries.PARAMS_CAPTURE

        self._local = threading.local()
        self._query = self._parser().compile(queries.function_query(self.shapes))

    def _parser(self) -> TreeSitterParser:
        parser = getattr(self._local, "parser", None)
        if parser is None:
            parser = TreeSitterParser(self.language)
            self._local.parser = parser
        return parser

    def extract(self, source: bytes, filepath: Path) -> Iterator[Declaration]:
        """Yield the declarations in one file's source.

        Args:
            source: Raw file content
            filepath: Path used in diagnostics

        Raises:
            ParsingError: If the source is not UTF-8 or does not parse cleanly
        """
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParsingError(filepath, self.language, f"not valid UTF-8: {e}")

        parser = self._parser()
        tree = parser.parse(source, filepath)

        for pattern_index, captures in parser.matches(tree, self._query):
            names = captures.get(self._name_capture)
            params = captures.get(self._params_capture)
            if not names or not params:
                continue

            name_node = names[0]
            params_node = params[0]
            name = source[name_node.start_byte : name_node.end_byte].decode("utf-8")
            decl = Declaration(
                name=name,
                params=params_node,
                line=params_node.start_point[0] + 1,
                shape=self.shapes[pattern_index],
            )
            logger.debug(f"{filepath}:{decl.line}: {decl.shape.name} {name}")
            yield decl
