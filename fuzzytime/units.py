"""Time units and the conversion table shared by parsing and rendering."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from fuzzytime.errors import InvalidUnitError, MalformedDurationError
from fuzzytime.util import DAY, HOUR, MINUTE, MONTH, SECOND, WEEK, YEAR


class Unit(IntEnum):
    """Time units, ordered coarsest to finest."""

    YEAR = 0
    MONTH = 1
    WEEK = 2
    DAY = 3
    HOUR = 4
    MINUTE = 5
    SECOND = 6


@dataclass(frozen=True, kw_only=True)
class Conversion:
    """One row of the unit table.

    Attributes:
        placeholder: Token substituted in templates (e.g. ``"%h"``)
        multiplier: Approximate length of the unit in seconds
        unit: The unit this row describes
        abbrev: Letter used for the unit in duration strings
    """

    placeholder: str
    multiplier: int
    unit: Unit
    abbrev: str


# Order matters: placeholders are resolved coarsest first.
CONVERSIONS: tuple[Conversion, ...] = (
    Conversion(placeholder="%y", multiplier=YEAR, unit=Unit.YEAR, abbrev="Y"),
    Conversion(placeholder="%M", multiplier=MONTH, unit=Unit.MONTH, abbrev="M"),
    Conversion(placeholder="%w", multiplier=WEEK, unit=Unit.WEEK, abbrev="W"),
    Conversion(placeholder="%d", multiplier=DAY, unit=Unit.DAY, abbrev="D"),
    Conversion(placeholder="%h", multiplier=HOUR, unit=Unit.HOUR, abbrev="h"),
    Conversion(placeholder="%m", multiplier=MINUTE, unit=Unit.MINUTE, abbrev="m"),
    Conversion(placeholder="%s", multiplier=SECOND, unit=Unit.SECOND, abbrev="s"),
)

_BY_ABBREV: dict[str, Unit] = {c.abbrev: c.unit for c in CONVERSIONS}


def find_unit(abbrev: str) -> Unit:
    """Return the unit whose table entry carries ``abbrev`` (case-sensitive).

    Raises:
        MalformedDurationError: If no entry uses that abbreviation
    """
    try:
        return _BY_ABBREV[abbrev]
    except (KeyError, TypeError):
        valid = ", ".join(c.abbrev for c in CONVERSIONS)
        raise MalformedDurationError(
            f"Unknown duration unit: {abbrev!r}\n"
            f"Valid units: {valid}\n"
            f"Hint: date units (Y, M, W, D) go before 'T', "
            f"time units (h, m, s) after it"
        ) from None


def as_unit(unit: Any) -> Unit:
    """Normalize ``unit`` to a ``Unit`` member.

    Plain ints 0..6 are accepted; bools, strings and anything else are not.

    Raises:
        InvalidUnitError: If ``unit`` is not one of the seven units
    """
    if isinstance(unit, Unit):
        return unit
    if isinstance(unit, int) and not isinstance(unit, bool):
        try:
            return Unit(unit)
        except ValueError:
            pass
    valid = ", ".join(u.name for u in Unit)
    raise InvalidUnitError(
        f"Invalid time unit.\n"
        f"Got {type(unit).__name__!r}: {unit!r}\n"
        f"Valid units: {valid}"
    )


def conversion_for(unit: Any) -> Conversion:
    """Return the table entry for ``unit``.

    Raises:
        InvalidUnitError: If ``unit`` is not one of the seven units
    """
    return CONVERSIONS[as_unit(unit)]

