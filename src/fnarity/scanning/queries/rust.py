"""Tree-sitter queries for Rust.

Extracts function-like declarations together with their parameter lists:
    - function_item: free functions, methods and trait methods with a body
    - function_signature_item: trait method prototypes and extern "C" items
"""

from __future__ import annotations

from enum import Enum

NAME_CAPTURE = "name"
PARAMS_CAPTURE = "params"


class DeclarationShape(Enum):
    """Syntactic shapes of a function-like declaration.

    The value is the tree-sitter node kind that the shape matches. Both
    shapes expose ``name`` and ``parameters`` fields, only the presence of
    a body differs.
    """

    WITH_BODY = "function_item"
    SIGNATURE_ONLY = "function_signature_item"


_PATTERN_TEMPLATE = """
({kind}
    name: (identifier) @{name}
    parameters: (parameters) @{params})
"""


def function_query(shapes: tuple[DeclarationShape, ...] = tuple(DeclarationShape)) -> str:
    """Build the declaration query, one pattern per shape, in order.

    Pattern index ``i`` in the compiled query corresponds to ``shapes[i]``.
    """
    return "".join(
        _PATTERN_TEMPLATE.format(kind=shape.value, name=NAME_CAPTURE, params=PARAMS_CAPTURE)
        for shape in shapes
    )
