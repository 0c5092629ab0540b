"""Base structs: plain type checks for refinements to build on."""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Any

from .failures import Context, Failure
from .struct import Struct


def any_value() -> Struct[Any]:
    """Accept every value."""
    return Struct(type="any")


def string() -> Struct[str]:
    return Struct(type="string", validator=lambda value, _: isinstance(value, str))


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def number() -> Struct[float]:
    """Ints and floats, excluding ``bool`` and NaN."""
    return Struct(type="number", validator=lambda value, _: _is_number(value))


def _is_integer(value: Any) -> bool:
    if not _is_number(value):
        return False
    return isinstance(value, int) or float(value).is_integer()


def integer() -> Struct[int]:
    """Whole numbers; floats with no fractional part count."""
    return Struct(type="integer", validator=lambda value, _: _is_integer(value))


def array(element: Struct[Any] | None = None) -> Struct[list[Any]]:
    """Lists and tuples, optionally checking every element against *element*.

    Element failures carry the element's index in their ``path``.
    """

    def validator(value: Any, context: Context) -> Iterator[Failure]:
        if not isinstance(value, (list, tuple)):
            yield context.fail()
            return
        if element is None:
            return
        for index, item in enumerate(value):
            child = context.child(index, item, element.type)
            yield from element.failures(item, child)

    label = f"Array<{element.type}>" if element is not None else "Array"
    return Struct(type=label, schema=element, validator=validator)
