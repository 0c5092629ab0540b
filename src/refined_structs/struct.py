"""Struct value object: a type label paired with the checks that enforce it."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import StructError
from .failures import Context, Failure, to_failures

logger = logging.getLogger("refined_structs.struct")

T = TypeVar("T")

Refiner = Callable[[Any, Context], Any]


def _accept(value: Any, context: Context) -> bool:
    return True


def _identity(value: Any) -> Any:
    return value


class Struct(BaseModel, Generic[T]):
    """Immutable validator pairing a ``type`` label with its checks.

    ``validator`` performs the base type check and ``refiner`` the extra
    rules layered on by refinements. Both take ``(value, context)`` and may
    return anything :func:`~refined_structs.failures.to_failures` accepts.
    The refiner only runs once the base check has passed.

    Usage::

        Name = Struct(type="string", validator=lambda v, _: isinstance(v, str))
        error, value = Name.validate(42)
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        populate_by_name=True,
    )

    type: str
    schema_: Any = Field(default=None, alias="schema")
    coercer: Callable[[Any], Any] = _identity
    validator: Refiner = _accept
    refiner: Refiner = _accept

    # ── Construction ─────────────────────────────────────────────

    def with_fields(self, **overrides: Any) -> Struct[T]:
        """Shallow copy with *overrides* applied; the receiver is untouched."""
        return self.model_copy(update=overrides)

    # ── Checking ─────────────────────────────────────────────────

    def failures(
        self, value: Any, context: Context | None = None
    ) -> Iterator[Failure]:
        """Lazily yield every failure of *value* against this struct."""
        ctx = context or Context.root(value, self.type)

        failed = False
        for failure in to_failures(self.validator(value, ctx), ctx):
            failed = True
            yield failure
        if failed:
            return

        refined = ctx.refined(self.type)
        yield from to_failures(self.refiner(value, refined), refined)

    def coerce(self, value: Any) -> Any:
        return self.coercer(value)

    def validate(  # type: ignore[override]
        self, value: Any, *, coerce: bool = False
    ) -> tuple[StructError | None, T | None]:
        """Check *value* and return ``(error, value)``.

        On success the error is ``None``; on failure the value is ``None``
        and the error carries every collected failure.
        """
        if coerce:
            value = self.coerce(value)

        failures = list(self.failures(value))
        if failures:
            logger.debug(
                "Value rejected by %s with %d failure(s)", self.type, len(failures)
            )
            return StructError(failures), None
        return None, value

    def is_valid(self, value: Any) -> bool:
        """Return True if *value* passes; stops at the first failure."""
        return next(self.failures(value), None) is None

    def assert_valid(self, value: Any) -> None:
        """Raise :class:`StructError` if *value* does not pass."""
        error, _ = self.validate(value)
        if error is not None:
            raise error
