import re

import pytest

from refined_structs import (
    Struct,
    empty,
    length,
    negative,
    nonnegative,
    nonpositive,
    pattern,
    positive,
    refinement,
)


def messages(struct, value) -> list[str]:
    return [failure.message for failure in struct.failures(value)]


# ── Combinator ───────────────────────────────────────────────


def test_refinement_replaces_label_and_keeps_other_fields(string_struct):
    refined = refinement(string_struct, "string & Custom", lambda v, _: True)

    assert refined is not string_struct
    assert refined.type == "string & Custom"
    assert refined.validator is string_struct.validator
    assert refined.coercer is string_struct.coercer
    assert refined.schema_ is string_struct.schema_


def test_refinement_failures_follow_application_order():
    def base_refiner(value, context):
        yield "base"

    base = Struct(type="thing", refiner=base_refiner)
    first = refinement(base, "thing & A", lambda v, _: "first")
    second = refinement(first, "thing & A & B", lambda v, _: ["second", "third"])

    assert messages(second, object()) == ["base", "first", "second", "third"]


def test_refinement_does_not_short_circuit():
    calls: list[str] = []

    def failing(value, context):
        calls.append("failing")
        return False

    def passing(value, context):
        calls.append("passing")
        return True

    refined = refinement(refinement(Struct(type="x"), "x", failing), "x", passing)

    assert len(messages(refined, 1)) == 1
    assert calls == ["failing", "passing"]


def test_refinement_yields_lazily():
    calls: list[str] = []

    def first(value, context):
        calls.append("first")
        return False

    def second(value, context):
        calls.append("second")
        return False

    refined = refinement(refinement(Struct(type="x"), "x", first), "x", second)
    failures = refined.failures(1)

    next(failures)
    assert calls == ["first"]

    next(failures)
    assert calls == ["first", "second"]


def test_refinement_failures_carry_refined_label(string_struct):
    refined = length(string_struct, 1, 5)
    [failure] = list(refined.failures(""))

    assert failure.type == "string & Length<1,5>"
    assert failure.refinement == "string & Length<1,5>"
    assert "pass refinement" in failure.message


def test_refinement_leaves_base_struct_untouched(string_struct):
    values = ["", "a", "abc", "abcdefgh", 5]
    before = [string_struct.is_valid(v) for v in values]
    refiner_before = string_struct.refiner

    length(string_struct, 1, 5)
    empty(string_struct)

    assert string_struct.type == "string"
    assert string_struct.refiner is refiner_before
    assert [string_struct.is_valid(v) for v in values] == before


def test_refinements_can_share_a_base(string_struct):
    short = length(string_struct, 0, 3)
    digits = pattern(string_struct, r"^[0-9]+$")

    assert short.is_valid("ab") is True
    assert short.is_valid("abcd") is False
    assert digits.is_valid("abcd") is False
    assert digits.is_valid("1234") is True


# ── Library ──────────────────────────────────────────────────


def test_empty(string_struct, array_struct):
    assert empty(string_struct).type == "string & Empty"
    assert empty(array_struct).type == "Array & Empty"

    assert empty(string_struct).is_valid("") is True
    assert empty(array_struct).is_valid([]) is True
    assert empty(string_struct).is_valid("a") is False
    assert empty(array_struct).is_valid([1]) is False


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("ab", True),
        ("abcd", True),
        # Bounds are exclusive on both ends.
        ("a", False),
        ("abcde", False),
        ("", False),
    ],
)
def test_length_bounds_are_exclusive(string_struct, value, expected):
    assert length(string_struct, 1, 5).is_valid(value) is expected


def test_length_label_and_arrays(array_struct):
    refined = length(array_struct, 1, 10)

    assert refined.type == "Array & Length<1,10>"
    assert refined.is_valid([1, 2]) is True
    assert refined.is_valid([1]) is False


@pytest.mark.parametrize(
    ("refine", "accepted", "rejected"),
    [
        (positive, [1, 0.5], [0, -1]),
        (nonnegative, [0, 1], [-1]),
        (negative, [-1, -0.5], [0]),
        (nonpositive, [0, -1], [1]),
    ],
)
def test_sign_refinements(number_struct, refine, accepted, rejected):
    refined = refine(number_struct)

    assert refined.type == "number"
    for value in accepted:
        assert refined.is_valid(value) is True, value
    for value in rejected:
        assert refined.is_valid(value) is False, value


def test_mutually_exclusive_refinements_reject_everything(number_struct):
    impossible = negative(positive(number_struct))

    for value in [-2, -1, -0.5, 0, 0.5, 1, 2]:
        assert impossible.is_valid(value) is False


def test_pattern(string_struct):
    digits = pattern(string_struct, re.compile(r"^[0-9]+$"))

    assert digits.is_valid("123") is True
    assert digits.is_valid("12a") is False
    assert digits.type == "string & Pattern<^[0-9]+$>"
    assert "[0-9]+" in digits.type


def test_pattern_searches_anywhere_in_value(string_struct):
    refined = pattern(string_struct, "[0-9]")

    assert refined.is_valid("abc1") is True
    assert refined.is_valid("abc") is False


def test_pattern_label_ignores_flags(string_struct):
    plain = pattern(string_struct, re.compile("abc"))
    insensitive = pattern(string_struct, re.compile("abc", re.IGNORECASE))

    assert plain.type == insensitive.type
    assert insensitive.is_valid("ABC") is True
    assert plain.is_valid("ABC") is False


def test_chained_refinements_report_every_violation(string_struct):
    code = pattern(length(string_struct, 2, 5), r"^[0-9]+$")

    error, value = code.validate("abcdef")

    assert value is None
    assert error is not None
    assert len(error.failures()) == 2
    assert code.type == "string & Length<2,5> & Pattern<^[0-9]+$>"


# ── Defects ──────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("refine", "value"),
    [
        (empty, 5),
        (lambda s: length(s, 0, 3), 5),
        (lambda s: pattern(s, r"[0-9]"), 5),
        (negative, "a"),
        (nonnegative, "a"),
        (nonpositive, "a"),
        (positive, "a"),
    ],
)
def test_predicate_errors_propagate(refine, value):
    unchecked = refine(Struct(type="anything"))

    with pytest.raises(TypeError):
        unchecked.is_valid(value)

    with pytest.raises(TypeError):
        unchecked.validate(value)


def test_refiners_skipped_when_base_check_fails(number_struct):
    refined = length(number_struct, 0, 3)

    failures = list(refined.failures("abc"))

    assert len(failures) == 1
    assert failures[0].refinement is None
