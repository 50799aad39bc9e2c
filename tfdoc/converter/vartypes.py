"""
Decoding of variable type constraints.

A `variable` block's `type` attribute is a type expression, not a value:
`string`, `list(map(number))`, `object({ name = string })`. It is reported
by its friendly name, e.g. "list of map of number".
"""

import re
from typing import Optional

from ..errors import VarTypeError
from ..models import Attribute


PRIMITIVES = ("string", "number", "bool")
COLLECTIONS = ("list", "map", "set")
STRUCTURAL = ("object", "tuple")

_CALL = re.compile(r"^([a-z]+)\s*\((.*)\)$", re.DOTALL)


def friendly_type_name(expression: str) -> str:
    """
    Return the friendly name of a type expression.

    Args:
        expression: Type expression as written, optionally quoted (legacy syntax)

    Returns:
        The friendly type name

    Raises:
        VarTypeError: if the expression is not a type constraint
    """
    text = expression.strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        text = text[1:-1].strip()

    if text in PRIMITIVES:
        return text
    if text == "any":
        return "dynamic"
    # Legacy quoted collection keywords meant "of string".
    if text in ("list", "map"):
        return f"{text} of string"

    match = _CALL.match(text)
    if not match:
        raise VarTypeError(f"Invalid type constraint: {expression!r}")

    keyword, inner = match.group(1), match.group(2).strip()
    if keyword in COLLECTIONS:
        if not inner:
            raise VarTypeError(f"Missing element type in {expression!r}")
        return f"{keyword} of {friendly_type_name(inner)}"
    if keyword in STRUCTURAL:
        return keyword
    raise VarTypeError(f"Unknown type keyword '{keyword}' in {expression!r}")


def decode_var_type(attribute: Attribute) -> str:
    """
    Friendly type name of a variable's `type` attribute.

    Quoted types are carried by the evaluator as string values; bare type
    keywords evaluate to nothing and are read from the raw expression.
    """
    expression: Optional[str] = None
    if attribute.value.type == "string" and attribute.value.value:
        expression = attribute.value.value
    elif attribute.raw:
        expression = attribute.raw
    if expression is None:
        raise VarTypeError(f"No type expression for attribute '{attribute.name}'")
    return friendly_type_name(expression)
