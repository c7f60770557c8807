"""Runtime values and helpers for Spartie.

Spartie is dynamically typed with four kinds of value, each mapped
directly onto a Python object:

* Number  -> ``float`` (plain ``int`` is accepted and treated the same)
* String  -> ``str``
* Boolean -> ``bool``
* Null    -> ``None``

This module holds the rules that give those values their meaning in the
language: truthiness, structural equality, textual rendering and the
IEEE-754 arithmetic the interpreter relies on.
"""

from __future__ import annotations

import math
from typing import Any


def is_number(value: Any) -> bool:
    # bool is a subclass of int; Spartie booleans are never numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_name(value: Any) -> str:
    """Return the Spartie type name of a runtime value."""
    if value is None:
        return 'Null'
    if isinstance(value, bool):
        return 'Boolean'
    if is_number(value):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    """Null and false are falsy; every other value is truthy.

    Numeric zero and the empty string are truthy.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality with no cross-type coercion."""
    if a is None or b is None:
        return a is None and b is None
    if type_name(a) != type_name(b):
        return False
    return a == b


def format_number(value: Any) -> str:
    """Two-decimal rendering used when a number is added to a string."""
    return f"{float(value):.2f}"


def to_string(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_number(value):
        return str(float(value))
    return str(value)


def divide(a: float, b: float) -> float:
    """Floating point division that never raises.

    Python raises ZeroDivisionError where IEEE-754 produces an infinity
    or NaN; Spartie keeps the IEEE result.
    """
    a = float(a)
    b = float(b)
    if b != 0.0:
        return a / b
    if a == 0.0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a) * math.copysign(1.0, b)
