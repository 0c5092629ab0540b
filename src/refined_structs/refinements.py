"""
Refinements: derive narrower structs from existing ones.

Every refinement returns a new struct; the struct it was given stays
usable on its own. Refiners of a refined struct run in the order the
refinements were applied, and all of them run even when an earlier one
already failed, so every violated rule is reported.

Usage::

    from refined_structs import length, pattern, string

    Code = pattern(length(string(), 0, 9), r"^[0-9]+$")
    error, value = Code.validate("12a")
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator, Sized
from typing import Any, TypeVar

from .failures import Context, Failure, to_failures
from .struct import Refiner, Struct

logger = logging.getLogger("refined_structs.refinements")

T = TypeVar("T")
S = TypeVar("S", bound=Sized)


def refinement(struct: Struct[T], label: str, refiner: Refiner) -> Struct[T]:
    """
    Augment *struct* with an additional refiner.

    The returned struct is labelled *label* and runs the refiner *struct*
    already had, followed by *refiner*. Failures from both are yielded in
    that order; neither stage is skipped. Exceptions raised by a refiner
    are not caught.
    """
    prior = struct.refiner

    def refine(value: Any, context: Context) -> Iterator[Failure]:
        yield from to_failures(prior(value, context), context)
        yield from to_failures(refiner(value, context), context)

    logger.debug("Refining %s as %s", struct.type, label)
    return struct.with_fields(type=label, refiner=refine)


def empty(struct: Struct[S]) -> Struct[S]:
    """Constrain a string or sequence struct to a length of zero."""

    def check(value: Any, _: Context) -> bool:
        return len(value) == 0

    return refinement(struct, f"{struct.type} & Empty", check)


def length(struct: Struct[S], min: int, max: int) -> Struct[S]:
    """
    Constrain a string or sequence struct to a length between *min* and *max*.

    Both bounds are exclusive: a length equal to *min* or *max* fails.
    """

    def check(value: Any, _: Context) -> bool:
        return min < len(value) < max

    return refinement(struct, f"{struct.type} & Length<{min},{max}>", check)


def negative(struct: Struct[T]) -> Struct[T]:
    """Constrain a number struct to values below zero."""

    def check(value: Any, _: Context) -> bool:
        return 0 > value

    return refinement(struct, struct.type, check)


def nonnegative(struct: Struct[T]) -> Struct[T]:
    """Constrain a number struct to zero or above."""

    def check(value: Any, _: Context) -> bool:
        return 0 <= value

    return refinement(struct, struct.type, check)


def nonpositive(struct: Struct[T]) -> Struct[T]:
    """Constrain a number struct to zero or below."""

    def check(value: Any, _: Context) -> bool:
        return 0 >= value

    return refinement(struct, struct.type, check)


def pattern(struct: Struct[str], regexp: re.Pattern[str] | str) -> Struct[str]:
    """
    Constrain a string struct to values matching *regexp* anywhere.

    The label embeds the pattern source verbatim; flags are not shown.
    """
    compiled = re.compile(regexp)

    def check(value: Any, _: Context) -> bool:
        return compiled.search(value) is not None

    return refinement(struct, f"{struct.type} & Pattern<{compiled.pattern}>", check)


def positive(struct: Struct[T]) -> Struct[T]:
    """Constrain a number struct to values above zero."""

    def check(value: Any, _: Context) -> bool:
        return 0 < value

    return refinement(struct, struct.type, check)
