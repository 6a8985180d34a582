"""Calendar-aware date arithmetic.

Months and years have no fixed length, so a fractional offset such as
``2.5`` months cannot be turned into seconds up front. ``add_time`` shifts the
whole part first and then measures the fraction against the calendar it
landed in: half a month from January 1st is half of *March*.
"""

import math
from datetime import date, datetime, time
from numbers import Real
from typing import Any

from dateutil.relativedelta import relativedelta

from fuzzytime.errors import InvalidDateError
from fuzzytime.units import Unit, as_unit

_MONTH_DAYS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# relativedelta keyword for the whole part of each unit
_FIELDS: dict[Unit, str] = {
    Unit.YEAR: "years",
    Unit.MONTH: "months",
    Unit.WEEK: "weeks",
    Unit.DAY: "days",
    Unit.HOUR: "hours",
    Unit.MINUTE: "minutes",
    Unit.SECOND: "seconds",
}

# Where a fractional remainder goes, and how many of that unit make one of
# the current unit (None: measured against the calendar)
_CASCADE: dict[Unit, tuple[Unit, int | None]] = {
    Unit.YEAR: (Unit.DAY, None),
    Unit.MONTH: (Unit.DAY, None),
    Unit.WEEK: (Unit.DAY, 7),
    Unit.DAY: (Unit.HOUR, 24),
    Unit.HOUR: (Unit.MINUTE, 60),
    Unit.MINUTE: (Unit.SECOND, 60),
}


def is_leap_year(year: int) -> bool:
    """Gregorian leap-year rule."""
    if year % 400 == 0:
        return True
    if year % 100 == 0:
        return False
    return year % 4 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``."""
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Month must be in 1..12, got {month!r}")
    if month == 2 and is_leap_year(year):
        return 29
    return _MONTH_DAYS[month - 1]


def coerce_datetime(value: Any, name: str = "date") -> datetime:
    """Accept a datetime as-is, or a date as midnight of that day.

    Raises:
        InvalidDateError: For anything else
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    raise InvalidDateError(
        f"{name} must be a datetime or date.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def _cascade(moment: datetime, unit: Unit) -> tuple[Unit, int]:
    """The unit a remainder of ``unit`` is carried into, and its ratio."""
    target, ratio = _CASCADE[unit]
    if unit is Unit.YEAR:
        ratio = days_in_year(moment.year)
    elif unit is Unit.MONTH:
        ratio = days_in_month(moment.year, moment.month)
    return target, ratio


def _shift(moment: datetime, unit: Unit, amount: int) -> datetime:
    """Move one calendar field by ``amount``.

    Year and month shifts keep the day of month and let it roll over into
    the following month: January 31st plus one month is March 3rd (2nd in
    leap years).
    """
    try:
        if unit in (Unit.YEAR, Unit.MONTH):
            first = moment.replace(day=1)
            return first + relativedelta(
                **{_FIELDS[unit]: amount}, days=moment.day - 1
            )
        return moment + relativedelta(**{_FIELDS[unit]: amount})
    except (OverflowError, ValueError) as exc:
        raise InvalidDateError(
            f"Adding {amount} {unit.name.lower()}(s) to {moment.isoformat()} "
            f"leaves the supported date range"
        ) from exc


def add_time(moment: datetime, magnitude: float, unit: Unit) -> datetime:
    """Return ``moment`` offset by ``magnitude`` of ``unit``.

    The whole part (``floor(magnitude)``) moves the matching calendar field.
    A positive fractional remainder, rounded to 3 decimals, is carried into
    a finer unit at the already-shifted date: years and months into days
    (days in that year or month), weeks into 7 days, days into 24 hours,
    hours and minutes into 60 of the next unit.
    Seconds are rounded to the nearest whole second and never cascade.

    Month and year shifts that overshoot a month's end roll over into the
    next month (January 31st plus one month is March 3rd in 2013).

    Args:
        moment: Starting point; never mutated
        magnitude: Signed, possibly fractional amount
        unit: Unit of ``magnitude``

    Raises:
        InvalidUnitError: If ``unit`` is not a ``Unit``
        InvalidDateError: For non-finite magnitudes or out-of-range results
    """
    unit = as_unit(unit)
    moment = coerce_datetime(moment, "moment")
    if (
        not isinstance(magnitude, Real)
        or isinstance(magnitude, bool)
        or not math.isfinite(magnitude)
    ):
        raise InvalidDateError(
            f"Cannot add a non-finite amount of time.\n"
            f"Got {type(magnitude).__name__!r}: {magnitude!r}"
        )

    while unit is not Unit.SECOND:
        whole = math.floor(magnitude)
        moment = _shift(moment, unit, whole)
        remainder = round(magnitude - whole, 3)
        if remainder <= 0:
            return moment
        unit, ratio = _cascade(moment, unit)
        magnitude = remainder * ratio

    return _shift(moment, unit, math.floor(magnitude + 0.5))
