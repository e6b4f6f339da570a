"""Tree-sitter parser wrapper.

Holds the compiled grammar for one language and exposes parse and query
operations with fnarity's error semantics: a file that tree-sitter cannot
turn into an error-free tree raises ParsingError.

Usage:
    parser = TreeSitterParser("rust")
    tree = parser.parse(code_bytes, path)
    query = parser.compile(query_str)
    for pattern_index, captures in parser.matches(tree, query):
        ...
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree

from ..exceptions import ParsingError
from .languages import get_language


class TreeSitterParser:
    """Wrapper around tree-sitter for a single language.

    A Parser instance is not safe to share between threads; create one
    TreeSitterParser per worker.
    """

    def __init__(self, language: str = "rust") -> None:
        self.language_name = language
        config = get_language(language)
        # tree-sitter >= 0.23 grammars return a PyCapsule; wrap in Language()
        self._language = Language(config.grammar())
        self._parser = Parser(self._language)

    def compile(self, query_str: str) -> Query:
        """Compile an S-expression query against this language."""
        return Query(self._language, query_str)

    def parse(self, code: bytes, filepath: Path) -> Tree:
        """Parse code and return syntax tree.

        Args:
            code: Source code as bytes
            filepath: File the code came from, used in diagnostics

        Returns:
            Tree whose root contains no error or missing nodes

        Raises:
            ParsingError: If no tree is produced or the tree has syntax errors
        """
        tree = self._parser.parse(code)
        if tree is None:
            raise ParsingError(filepath, self.language_name, "parser produced no tree")

        root = tree.root_node
        if root.has_error:
            row, column = _first_error_position(root)
            raise ParsingError(
                filepath,
                self.language_name,
                f"syntax error at line {row + 1}, column {column + 1}",
            )
        return tree

    def matches(self, tree: Tree, query: Query) -> Iterator[tuple[int, dict[str, list[Node]]]]:
        """Run a query on a syntax tree.

        Yields:
            (pattern_index, {capture_name: [nodes]}) per match, in document order
        """
        # tree-sitter 0.25+: use QueryCursor for execution
        cursor = QueryCursor(query)
        yield from cursor.matches(tree.root_node)


def _first_error_position(node: Node) -> tuple[int, int]:
    """Locate the first ERROR or MISSING node below ``node``."""
    if node.is_error or node.is_missing:
        return node.start_point[0], node.start_point[1]
    for child in node.children:
        if child.has_error:
            return _first_error_position(child)
    return node.start_point[0], node.start_point[1]
