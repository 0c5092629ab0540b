"""Shared fixtures for refinement tests."""

from __future__ import annotations

import pytest

from refined_structs import array, number, string


@pytest.fixture
def string_struct():
    """Plain string struct with no refinements."""
    return string()


@pytest.fixture
def number_struct():
    return number()


@pytest.fixture
def array_struct():
    return array()
