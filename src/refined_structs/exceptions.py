"""
Struct exception hierarchy.

All exceptions inherit from ``StructsError`` and provide ``to_dict()``
for API-friendly error responses. Failed validation is reported through
:class:`StructError`, which carries every collected failure rather than
just the first.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .failures import Failure


class StructsError(Exception):
    """Base exception for all struct errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class StructError(StructsError):
    """
    A value did not satisfy a struct.

    The attributes mirror the first failure; ``failures()`` returns all of
    them in the order they were produced.

    Example error message::

        Expected a value of type `string & Length<1,5>` to pass refinement,
        but received: `'abcde'`
    """

    def __init__(self, failures: Sequence[Failure]) -> None:
        if not failures:
            raise ValueError("StructError requires at least one failure")

        self._failures = tuple(failures)
        first = self._failures[0]
        self.value = first.value
        self.type = first.type
        self.path = first.path
        self.branch = first.branch
        self.key = first.key
        self.refinement = first.refinement
        super().__init__(first.message)

    def __reduce__(self) -> tuple[Any, ...]:
        return (self.__class__, (self._failures,))

    def failures(self) -> list[Failure]:
        return list(self._failures)

    @property
    def errors(self) -> dict[str, list[str]]:
        """Failure messages grouped by dotted path (``__root__`` for the value)."""
        grouped: dict[str, list[str]] = {}
        for failure in self._failures:
            loc = ".".join(str(p) for p in failure.path) or "__root__"
            grouped.setdefault(loc, []).append(failure.message)
        return grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "STRUCT_ERROR",
            "message": str(self),
            "type": self.type,
            "path": [str(p) for p in self.path],
            "refinement": self.refinement,
            "errors": self.errors,
        }
