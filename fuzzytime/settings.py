"""Settings shared by every rule evaluation of a ``Fuzzy`` instance."""

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class FuzzySettings:
    """Collaborators and formats used by ``Fuzzy.build``.

    Attributes:
        clock: Returns "now" when ``build`` gets no reference date. Pass a
            fixed clock in tests, or ``lambda: datetime.now(tz)`` when
            working with timezone-aware datetimes.
        fallback_format: ``strftime`` pattern used when no rule matches;
            the default is the locale's date and time representation.
    """

    clock: Callable[[], datetime] = datetime.now
    fallback_format: str = "%c"

    def with_clock(self, clock: Callable[[], datetime]) -> "FuzzySettings":
        return replace(self, clock=clock)
