"""Parsing of ISO 8601-like duration strings.

Durations are written ``[P]<n><unit>...[T<n><unit>...]``. Date units
(``Y``, ``M``, ``W``, ``D``) come before the ``T`` and are case-insensitive;
time units (``h``, ``m``, ``s``) come after it. Numbers may be fractional or
negative:

    >>> parse_duration("P1Y2WT2M3S")
    (DurationComponent(magnitude=1.0, unit=<Unit.YEAR: 0>), ...)
"""

import math
import re
import string
from collections.abc import Iterable
from dataclasses import dataclass
from numbers import Real
from typing import Any, TypeAlias

from fuzzytime.errors import MalformedDurationError
from fuzzytime.units import Unit, as_unit, find_unit


@dataclass(frozen=True)
class DurationComponent:
    magnitude: float
    unit: Unit

    def __str__(self) -> str:
        return f"{self.magnitude:g} {self.unit.name.lower()}"


Duration: TypeAlias = tuple[DurationComponent, ...]

# Plain decimal numbers only; float() alone would also take "1_000" or "1e3"
_NUMBER = re.compile(r"\s*[+-]?(?:\d+(?:\.\d*)?|\.\d+)\s*", re.ASCII)


def parse_duration(text: str) -> Duration:
    """Convert a duration string into ordered ``DurationComponent``s.

    Args:
        text: Duration such as ``"P1Y2WT2M3S"``, ``"P2.5M"`` or ``"0.6D"``

    Returns:
        Components in the order written, date part first

    Raises:
        MalformedDurationError: On unknown unit letters, unparseable numbers
            or a number with no unit after it
    """
    if not isinstance(text, str):
        raise MalformedDurationError(
            f"Duration must be a string.\n"
            f"Got {type(text).__name__!r}: {text!r}"
        )

    lowered = text.lower().strip()
    period, _, time = lowered.partition("t")
    period = period.removeprefix("p")

    components: list[DurationComponent] = []
    components.extend(_scan(period, text, upcase=True))
    components.extend(_scan(time, text, upcase=False))
    return tuple(components)


def _scan(segment: str, source: str, *, upcase: bool) -> Iterable[DurationComponent]:
    buffer = ""
    for char in segment:
        if char not in string.ascii_lowercase:
            buffer += char
            continue

        unit = find_unit(char.upper() if upcase else char)
        if not _NUMBER.fullmatch(buffer):
            raise MalformedDurationError(
                f"Cannot read a number before unit {char!r} in duration {source!r}\n"
                f"Got: {buffer!r}"
            )
        yield DurationComponent(float(buffer), unit)
        buffer = ""

    if buffer.strip():
        raise MalformedDurationError(
            f"Number {buffer.strip()!r} in duration {source!r} has no unit\n"
            f"Hint: every number needs a unit letter, e.g. '1D' or 'T30S'"
        )


def coerce_duration(value: Any) -> Duration:
    """Normalize a duration given as a string or as components.

    Accepts a duration string, or an iterable of ``DurationComponent`` or
    ``(magnitude, unit)`` pairs.
    """
    if isinstance(value, str):
        return parse_duration(value)
    if isinstance(value, DurationComponent):
        value = [value]

    try:
        items = list(value)
    except TypeError:
        raise MalformedDurationError(
            f"Duration must be a string or an iterable of components.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        ) from None

    components: list[DurationComponent] = []
    for item in items:
        if isinstance(item, DurationComponent):
            magnitude, unit = item.magnitude, item.unit
        else:
            try:
                magnitude, unit = item
            except (TypeError, ValueError):
                raise MalformedDurationError(
                    f"Duration component must be a DurationComponent or a "
                    f"(magnitude, unit) pair.\n"
                    f"Got {type(item).__name__!r}: {item!r}"
                ) from None

        if (
            not isinstance(magnitude, Real)
            or isinstance(magnitude, bool)
            or not math.isfinite(magnitude)
        ):
            raise MalformedDurationError(
                f"Duration magnitude must be a finite number.\n"
                f"Got {type(magnitude).__name__!r}: {magnitude!r}"
            )
        components.append(DurationComponent(float(magnitude), as_unit(unit)))

    return tuple(components)
