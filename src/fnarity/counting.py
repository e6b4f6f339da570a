"""Parameter counting for function-like declarations.

Arity is the number of parameter children of a parameter-list node, minus
the receiver. Type complexity, patterns and variadic markers do not matter:
each parameter counts once.
"""

from __future__ import annotations

from typing import Callable, Iterable

from tree_sitter import Node

from .scanning.languages import LanguageConfig, get_language

ReceiverPredicate = Callable[[Node], bool]


def receiver_predicate(language: LanguageConfig) -> ReceiverPredicate:
    """Build the "is this parameter the receiver?" test for a language.

    A node is a receiver when its kind is one of ``receiver_kinds``
    (``&self``, ``&mut self``, ``self``), or when it is an ordinary
    parameter whose pattern is a receiver pattern (``self: Box<Self>``).
    """

    def is_receiver(node: Node) -> bool:
        if node.type in language.receiver_kinds:
            return True
        if language.receiver_pattern_kinds:
            pattern = node.child_by_field_name("pattern")
            if pattern is not None and pattern.type in language.receiver_pattern_kinds:
                return True
        return False

    return is_receiver


is_receiver_parameter = receiver_predicate(get_language("rust"))


def count_parameters(
    params_node: Node,
    is_receiver: ReceiverPredicate = is_receiver_parameter,
    parameter_kinds: Iterable[str] = get_language("rust").parameter_kinds,
) -> int:
    """Count the parameters of a parameter-list node.

    Args:
        params_node: The ``parameters`` node of a declaration
        is_receiver: Predicate selecting the receiver, which is not counted
        parameter_kinds: Child node kinds that are parameters; punctuation,
            attributes and comments are ignored

    Returns:
        Number of non-receiver parameters
    """
    kinds = frozenset(parameter_kinds)
    count = 0
    for child in params_node.children:
        if child.type not in kinds:
            continue
        if is_receiver(child):
            continue
        count += 1
    return count
