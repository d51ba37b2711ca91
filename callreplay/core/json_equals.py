"""Deep by-value equality for JSON-like values.

Semantics:
- Object keys are compared unordered
- Arrays are compared position by position
- Primitives compare by value within the same kind only, so None, False and 0
  are three different values
- int and float are both "number": 1 == 1.0
- A tuple is an array, like a list
"""
from __future__ import annotations

from typing import Any, Dict, List

NULL = "null"
STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"
ARRAY = "array"
OBJECT = "object"


def json_kind(value: Any) -> str:
    """Classify a value into one of the six JSON kinds.

    Raises:
        TypeError: If the value is not JSON-like.
    """
    if value is None:
        return NULL
    if isinstance(value, (list, tuple)):
        return ARRAY
    # bool before number: bool is a subclass of int
    if isinstance(value, bool):
        return BOOLEAN
    if isinstance(value, (int, float)):
        return NUMBER
    if isinstance(value, str):
        return STRING
    if isinstance(value, dict):
        return OBJECT
    raise TypeError(f"Invalid JSON value type: {type(value).__name__}")


def json_equals(a: Any, b: Any) -> bool:
    """Return True when two JSON-like values are structurally equal."""
    kind_a = json_kind(a)
    kind_b = json_kind(b)

    if kind_a != kind_b:
        return False

    if kind_a == ARRAY:
        return _array_equals(a, b)
    if kind_a == OBJECT:
        return _object_equals(a, b)
    return a == b


def _array_equals(a: List[Any], b: List[Any]) -> bool:
    return len(a) == len(b) and all(
        json_equals(item_a, item_b) for item_a, item_b in zip(a, b)
    )


def _object_equals(a: Dict[str, Any], b: Dict[str, Any]) -> bool:
    return len(a) == len(b) and all(
        key in b and json_equals(value, b[key]) for key, value in a.items()
    )
