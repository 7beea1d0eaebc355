"""Kinds of values that protocol messages carry.

Protocol values are held as plain Python objects:

* ``None``: null
* ``bool``: boolean
* ``int``: integer
* ``float``: number
* ``str``: string
* ``list`` or ``tuple``: array
* ``dict``: object (string keys)
* dataclass instances: structured protocol types
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Any


class Kind(enum.Enum):
    """The kind of a protocol value."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"
    STRUCT = "struct"


def kind_of(value: Any) -> Kind:
    """Return the kind of ``value``; raise TypeError if it has none."""
    if value is None:
        return Kind.NULL
    # bool is a subclass of int, so it must be tested first.
    if isinstance(value, bool):
        return Kind.BOOLEAN
    if isinstance(value, int):
        return Kind.INTEGER
    if isinstance(value, float):
        return Kind.NUMBER
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, (list, tuple)):
        return Kind.ARRAY
    if isinstance(value, dict):
        return Kind.OBJECT
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Kind.STRUCT
    raise TypeError(f"{type(value).__name__} is not a protocol value")


def is_kind(value: Any, kind: Kind) -> bool:
    """Return True if ``value`` is a protocol value of the given kind."""
    try:
        return kind_of(value) is kind
    except TypeError:
        return False