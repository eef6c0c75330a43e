"""Tests for option validation helpers."""

import pytest

from pulse.errors import ConfigurationError, RangeError, TypeMismatchError, TypeRequiredError
from pulse.validation import valid, valid_range

# -- valid ---------------------------------------------------------------------


def test_valid_returns_value_unchanged() -> None:
    def fn() -> None:
        pass

    assert valid("callable", fn) is fn
    assert valid("number", 42) == 42
    assert valid("number", 1.5) == 1.5
    assert valid("boolean", False) is False


def test_valid_absent_optional_returns_none() -> None:
    assert valid("number", None) is None


def test_valid_absent_required_raises() -> None:
    with pytest.raises(TypeRequiredError, match=r"options\.interval.*'number'"):
        valid("number", None, True, "options.interval")


def test_valid_mismatch_names_label_and_kind() -> None:
    with pytest.raises(TypeMismatchError, match=r"options\.on_pulse.*'callable'"):
        valid("callable", "not a function", True, "options.on_pulse")


def test_bool_is_not_a_number() -> None:
    with pytest.raises(TypeMismatchError):
        valid("number", True)


def test_int_is_not_a_boolean() -> None:
    with pytest.raises(TypeMismatchError):
        valid("boolean", 1)


def test_unknown_kind_raises_value_error() -> None:
    with pytest.raises(ValueError, match="Unknown value kind"):
        valid("string", "x")


def test_errors_are_configuration_errors() -> None:
    with pytest.raises(ConfigurationError):
        valid("number", None, True)
    with pytest.raises(TypeError):
        valid("number", "10")


# -- valid_range -----------------------------------------------------------------


def test_range_accepts_bounds_inclusive() -> None:
    assert valid_range(10, 100, 10) == 10
    assert valid_range(10, 100, 100) == 100


def test_range_below_min_raises() -> None:
    with pytest.raises(RangeError, match="at least 10"):
        valid_range(10, 100, 9, label="options.interval")


def test_range_above_max_raises() -> None:
    with pytest.raises(RangeError, match="at most 100"):
        valid_range(10, 100, 101)


def test_range_exclusive_max_rejects_bound() -> None:
    with pytest.raises(RangeError, match="less than 100"):
        valid_range(0, 100, 100, inclusive_max=False)
    assert valid_range(0, 100, 99.5, inclusive_max=False) == 99.5


def test_range_absent_optional_returns_none() -> None:
    assert valid_range(0, 100, None) is None


def test_range_absent_required_raises() -> None:
    with pytest.raises(TypeRequiredError):
        valid_range(0, 100, None, True)


def test_range_type_checked_first() -> None:
    with pytest.raises(TypeMismatchError):
        valid_range(0, 100, "50")


def test_range_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        valid_range(0, 1, 5)


def test_range_integer_kind_rejects_fractions() -> None:
    assert valid_range(0, 100, 50, kind="integer") == 50
    with pytest.raises(TypeMismatchError, match="'integer'"):
        valid_range(0, 100, 50.5, label="options.offset", kind="integer")
    with pytest.raises(TypeMismatchError):
        valid("integer", True)
