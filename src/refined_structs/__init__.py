from .exceptions import StructError, StructsError
from .failures import Context, Failure, to_failure, to_failures
from .refinements import (
    empty,
    length,
    negative,
    nonnegative,
    nonpositive,
    pattern,
    positive,
    refinement,
)
from .struct import Refiner, Struct
from .types import any_value, array, integer, number, string

__all__ = [
    # Core types
    "Struct",
    "Refiner",
    "Context",
    "Failure",
    # Failure normalization
    "to_failure",
    "to_failures",
    # Refinements
    "refinement",
    "empty",
    "length",
    "negative",
    "nonnegative",
    "nonpositive",
    "pattern",
    "positive",
    # Base structs
    "any_value",
    "array",
    "integer",
    "number",
    "string",
    # Exceptions
    "StructsError",
    "StructError",
]
