"""Tests for the unit table and unit lookups."""

import pytest

from fuzzytime import (
    CONVERSIONS,
    InvalidUnitError,
    MalformedDurationError,
    Unit,
    conversion_for,
    find_unit,
)


def test_find_unit_recovers_each_abbreviation():
    """Test that every abbreviation maps back to its own unit."""
    assert find_unit("Y") == Unit.YEAR
    assert find_unit("M") == Unit.MONTH
    assert find_unit("W") == Unit.WEEK
    assert find_unit("D") == Unit.DAY
    assert find_unit("h") == Unit.HOUR
    assert find_unit("m") == Unit.MINUTE
    assert find_unit("s") == Unit.SECOND


def test_find_unit_is_case_sensitive():
    """Test that 'H' and 'd' are not valid abbreviations."""
    with pytest.raises(MalformedDurationError, match="Unknown duration unit"):
        find_unit("H")

    with pytest.raises(MalformedDurationError):
        find_unit("d")


def test_find_unit_rejects_unknown_letters():
    """Test that letters outside the table raise."""
    with pytest.raises(MalformedDurationError, match="'x'"):
        find_unit("x")


def test_conversion_table_is_ordered_coarsest_first():
    """Test that the table lists units in enum order."""
    assert [c.unit for c in CONVERSIONS] == list(Unit)
    multipliers = [c.multiplier for c in CONVERSIONS]
    assert multipliers == sorted(multipliers, reverse=True)


def test_conversion_multipliers():
    """Test the fixed second counts for each unit."""
    assert conversion_for(Unit.YEAR).multiplier == 31536000
    assert conversion_for(Unit.MONTH).multiplier == 2592000
    assert conversion_for(Unit.WEEK).multiplier == 604800
    assert conversion_for(Unit.DAY).multiplier == 86400
    assert conversion_for(Unit.HOUR).multiplier == 3600
    assert conversion_for(Unit.MINUTE).multiplier == 60
    assert conversion_for(Unit.SECOND).multiplier == 1


def test_conversion_for_accepts_plain_ints():
    """Test that enum values given as ints resolve to the unit."""
    assert conversion_for(3).unit is Unit.DAY
    assert conversion_for(3).placeholder == "%d"


@pytest.mark.parametrize("bad", [7, -1, "DAY", None, 2.0, True])
def test_conversion_for_rejects_values_outside_enum(bad):
    """Test that unknown units are surfaced rather than ignored."""
    with pytest.raises(InvalidUnitError, match="Invalid time unit"):
        conversion_for(bad)

