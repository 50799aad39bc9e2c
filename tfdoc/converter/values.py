"""
Typed value conversion for tfdoc.

Turns evaluated configuration values into plain Python values that can be
serialized as JSON.
"""

import math
from decimal import InvalidOperation
from typing import Any, Tuple

from ..models import Attribute, TypedValue
from ..models.blocks import BOOL, LIST, MAP, NUMBER, OBJECT, STRING, TUPLE


def convert_value(value: TypedValue) -> Tuple[Any, bool]:
    """
    Convert a typed value to a native value.

    Null and unknown values both become None. Objects, maps, lists and tuples
    are converted member by member and fail as a whole if any member fails.
    Numbers become int when integral and float otherwise.

    Args:
        value: The typed value to convert

    Returns:
        Tuple of (native value, ok). ok is False for types with no native form.
    """
    if value.is_null or not value.is_known:
        return None, True

    if value.type in (OBJECT, MAP):
        members = {}
        for key, member in (value.value or {}).items():
            converted, ok = convert_value(member)
            if not ok:
                return None, False
            members[key] = converted
        return members, True

    if value.type in (LIST, TUPLE):
        items = []
        for item in value.value or []:
            converted, ok = convert_value(item)
            if not ok:
                return None, False
            items.append(converted)
        return items, True

    if value.type == STRING:
        return value.value, True

    if value.type == NUMBER:
        try:
            number = value.as_decimal()
        except (InvalidOperation, TypeError):
            return None, False
        # JSON has no representation for infinities or NaN.
        if not number.is_finite():
            return None, False
        if number == number.to_integral_value():
            return int(number), True
        approximate = float(number)
        if math.isinf(approximate):
            return None, False
        return approximate, True

    if value.type == BOOL:
        return bool(value.value), True

    return None, False


def attribute_value(attribute: Attribute) -> Any:
    """Return the converted value of an attribute, or its raw text."""
    converted, ok = convert_value(attribute.value)
    if ok:
        return converted
    return attribute.raw
