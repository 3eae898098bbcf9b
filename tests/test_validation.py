"""Tests for declarative input validation."""
import pytest

from taskboard.validation import Validatable, validate


@pytest.mark.parametrize("value,expected", [
    ("Buy milk", True),
    ("", False),
    ("   ", False),
    (0, True),
])
def test_required(value, expected):
    assert validate(Validatable(value=value, required=True)) is expected


def test_not_required_allows_empty():
    assert validate(Validatable(value="", required=False))


def test_text_length_bounds():
    assert validate(Validatable(value="abc", min_length=3, max_length=3))
    assert not validate(Validatable(value="ab", min_length=3))
    assert not validate(Validatable(value="abcd", max_length=3))


def test_number_bounds():
    assert validate(Validatable(value=5, min=1, max=5))
    assert not validate(Validatable(value=0, min=1))
    assert not validate(Validatable(value=6.5, max=5))


def test_bounds_only_apply_to_matching_type():
    """Length limits ignore numbers; numeric limits ignore text"""
    assert validate(Validatable(value=12345, max_length=2))
    assert validate(Validatable(value="100", max=5))


def test_all_constraints_must_hold():
    v = Validatable(value="  ", required=True, min_length=1)
    assert not validate(v)
