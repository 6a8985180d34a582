import logging

from .arithmetic import add_time, days_in_month, days_in_year, is_leap_year
from .core import (
    Category,
    Fuzzy,
    Rule,
    build,
    register_after,
    register_at,
    register_before,
)
from .duration import Duration, DurationComponent, coerce_duration, parse_duration
from .errors import (
    FuzzyTimeError,
    InvalidDateError,
    InvalidUnitError,
    MalformedDurationError,
)
from .settings import FuzzySettings
from .template import render_template
from .units import CONVERSIONS, Conversion, Unit, conversion_for, find_unit

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Fuzzy",
    "FuzzySettings",
    "Rule",
    "Category",
    "Unit",
    "Conversion",
    "CONVERSIONS",
    "Duration",
    "DurationComponent",
    "register_at",
    "register_before",
    "register_after",
    "build",
    "parse_duration",
    "coerce_duration",
    "add_time",
    "render_template",
    "find_unit",
    "conversion_for",
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "FuzzyTimeError",
    "MalformedDurationError",
    "InvalidUnitError",
    "InvalidDateError",
]
