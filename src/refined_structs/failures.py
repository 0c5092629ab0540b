"""
Failure records and the normalizer that produces them.

Validators and refiners may return a bool, a message string, a mapping of
failure fields, a ready-made :class:`Failure`, or an iterable of any of
those. ``to_failures`` turns every one of those shapes into a lazy stream
of :class:`Failure` records.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

from pydantic import BaseModel, ConfigDict


def describe_value(value: Any) -> str:
    """Short printable form of *value* used in default failure messages."""
    text = repr(value)
    if len(text) > 80:
        text = text[:77] + "..."
    return text


class Failure(BaseModel):
    """One way a value failed to satisfy a struct.

    ``path`` holds the keys from the root value down to the failing value,
    ``branch`` the values along that path (root first). ``refinement`` is
    the label of the refined struct whose refiner raised the failure, or
    ``None`` when the base type check rejected the value. Any other field a
    refiner supplies (such as ``reason``) is kept on the record.
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="allow",
    )

    value: Any
    type: str
    message: str
    path: tuple[Any, ...] = ()
    branch: tuple[Any, ...] = ()
    refinement: str | None = None

    @property
    def key(self) -> Any:
        return self.path[-1] if self.path else None


@dataclass(frozen=True)
class Context:
    """Failure context handed to validators and refiners.

    Usage::

        def refiner(value, context):
            if value % 2:
                yield context.fail("Expected an even number")
    """

    value: Any
    type: str
    path: tuple[Any, ...] = ()
    branch: tuple[Any, ...] = ()
    refinement: str | None = None

    @classmethod
    def root(cls, value: Any, type: str) -> Context:
        return cls(value=value, type=type, branch=(value,))

    def child(self, key: Any, value: Any, type: str) -> Context:
        """Context for a nested value reached through *key*."""
        return Context(
            value=value,
            type=type,
            path=(*self.path, key),
            branch=(*self.branch, value),
        )

    def refined(self, refinement: str) -> Context:
        return replace(self, refinement=refinement)

    def fail(self, message: str | None = None, **props: Any) -> Failure:
        """Build a failure record, defaulting every field from the context."""
        fields: dict[str, Any] = {
            "value": self.value,
            "type": self.type,
            "path": self.path,
            "branch": self.branch,
            "refinement": self.refinement,
        }
        fields.update(props)
        if message is None:
            message = _default_message(
                fields["type"], fields["value"], fields["refinement"]
            )
        return Failure(message=message, **fields)


def _default_message(type: str, value: Any, refinement: str | None) -> str:
    if refinement is None:
        return (
            f"Expected a value of type `{type}`, "
            f"but received: `{describe_value(value)}`"
        )
    return (
        f"Expected a value of type `{type}` to pass refinement, "
        f"but received: `{describe_value(value)}`"
    )


def _is_single(result: Any) -> bool:
    return (
        result is None
        or isinstance(result, (bool, str, Failure, Mapping))
        or not isinstance(result, Iterable)
    )


def to_failure(result: Any, context: Context) -> Failure | None:
    """Normalize a single validator/refiner result.

    Returns ``None`` when the result signals success.

    Raises:
        TypeError: If *result* is not a recognised result shape.
    """
    if result is None or result is True:
        return None
    if result is False:
        return context.fail()
    if isinstance(result, str):
        return context.fail(message=result)
    if isinstance(result, Failure):
        return result
    if isinstance(result, Mapping):
        return context.fail(**result)
    raise TypeError(
        f"Unsupported validation result of type {type(result).__name__}: "
        f"{describe_value(result)}"
    )


def to_failures(result: Any, context: Context) -> Iterator[Failure]:
    """Lazily convert a validator/refiner result into failure records.

    Iterables are consumed one element at a time, so a generator-based
    refiner only runs as far as the caller pulls.
    """
    if _is_single(result):
        failure = to_failure(result, context)
        if failure is not None:
            yield failure
        return

    for item in result:
        failure = to_failure(item, context)
        if failure is not None:
            yield failure
