import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from fuzzytime.arithmetic import add_time, coerce_datetime
from fuzzytime.duration import Duration, DurationComponent, coerce_duration
from fuzzytime.errors import InvalidDateError
from fuzzytime.settings import FuzzySettings
from fuzzytime.template import render_template

logger = logging.getLogger(__name__)

DurationLike = str | Iterable[DurationComponent | tuple[float, Any]]


class Category(Enum):
    AT = "at"
    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class Rule:
    template: str
    duration: Duration

    def __str__(self) -> str:
        spans = ", ".join(str(c) for c in self.duration) or "no offset"
        return f"Rule({self.template!r} @ {spans})"


class Fuzzy:
    """A set of rules turning the gap between two datetimes into text.

    Rules come in three categories, each checked in registration order:

    - ``at``: the reference is exactly the rule's duration after the start
    - ``before``: the reference is later than the start but has not yet
      reached the rule's duration
    - ``after``: the rule's duration has already passed

    ``at`` rules always win. ``before`` and ``after`` rules only apply when
    the reference is strictly later than the start. With no match,
    ``build`` falls back to the formatted start date.

    Example:
        >>> fuzzy = Fuzzy()
        >>> hours = fuzzy.before("%h hours ago", "T16H")
        >>> yesterday = fuzzy.before("yesterday", "1D")
        >>> fuzzy.build(datetime(2013, 10, 22, 12), datetime(2013, 10, 22, 14))
        '2 hours ago'
    """

    def __init__(self, settings: FuzzySettings | None = None):
        self.settings: FuzzySettings = settings or FuzzySettings()
        self._rules: dict[Category, list[Rule]] = {c: [] for c in Category}

    def register(
        self, category: Category, template: str, duration: DurationLike
    ) -> Rule:
        """Append a rule to ``category`` and return it.

        Args:
            category: Which rule list to extend
            template: Text with optional unit placeholders (``%y``, ``%M``,
                ``%w``, ``%d``, ``%h``, ``%m``, ``%s``)
            duration: Duration string (``"P1DT12h"``) or an iterable of
                ``DurationComponent``/``(magnitude, unit)`` pairs

        Raises:
            MalformedDurationError: If the duration cannot be parsed
            InvalidUnitError: If a component names an unknown unit
        """
        if not isinstance(template, str):
            raise TypeError(
                f"Rule template must be a string.\n"
                f"Got {type(template).__name__!r}: {template!r}"
            )
        category = Category(category)
        rule = Rule(template, coerce_duration(duration))
        self._rules[category].append(rule)
        logger.debug("Registered %s rule %s", category.value, rule)
        return rule

    def at(self, template: str, duration: DurationLike) -> Rule:
        return self.register(Category.AT, template, duration)

    def before(self, template: str, duration: DurationLike) -> Rule:
        return self.register(Category.BEFORE, template, duration)

    def after(self, template: str, duration: DurationLike) -> Rule:
        return self.register(Category.AFTER, template, duration)

    def rules(self, category: Category) -> tuple[Rule, ...]:
        """Rules of ``category`` in registration order."""
        return tuple(self._rules[Category(category)])

    def build(
        self,
        start: datetime | date,
        reference: datetime | date | None = None,
    ) -> str:
        """Describe the time between ``start`` and ``reference``.

        Args:
            start: The moment being described
            reference: The moment it is described from; defaults to
                ``settings.clock()``

        Returns:
            The first matching rule's rendered template, or ``start``
            formatted with ``settings.fallback_format``

        Raises:
            InvalidDateError: If the dates are not datetimes, mix naive and
                aware values, or a rule leaves the supported date range
        """
        start = coerce_datetime(start, "start")
        if reference is None:
            reference = self.settings.clock()
        reference = coerce_datetime(reference, "reference")

        try:
            elapsed = (reference - start).total_seconds()
        except TypeError as exc:
            raise InvalidDateError(
                f"Cannot compare start and reference dates.\n"
                f"Got start={start!r}, reference={reference!r}\n"
                f"Hint: both must be naive or both timezone-aware"
            ) from exc
        delta = math.floor(elapsed + 0.5)

        for rule in self._rules[Category.AT]:
            if _same_second(_compound(start, rule.duration), reference):
                return self._render(Category.AT, rule, delta)

        if delta > 0:
            for rule in self._rules[Category.BEFORE]:
                threshold = _compound(start, rule.duration)
                if start <= reference and threshold >= reference:
                    return self._render(Category.BEFORE, rule, delta)

            for rule in self._rules[Category.AFTER]:
                threshold = _last_offset(start, rule.duration)
                if start <= reference and threshold <= reference:
                    return self._render(Category.AFTER, rule, delta)

        logger.debug("No rule matched a %ss delta; using fallback format", delta)
        return start.strftime(self.settings.fallback_format)

    def _render(self, category: Category, rule: Rule, delta: int) -> str:
        logger.debug(
            "Matched %s rule %s for a %ss delta", category.value, rule, delta
        )
        return render_template(delta, rule.template)


def _compound(start: datetime, duration: Duration) -> datetime:
    """Apply every component in turn, each on top of the previous result."""
    moment = start
    for component in duration:
        moment = add_time(moment, component.magnitude, component.unit)
    return moment


def _last_offset(start: datetime, duration: Duration) -> datetime:
    """Apply each component to ``start`` afresh; only the last one sticks.

    ``after`` rules have always measured their threshold this way, unlike
    ``at`` and ``before`` which compound. A multi-component ``after`` rule
    such as ``"P1DT12h"`` therefore fires once 12 hours have passed.
    """
    moment = start
    for component in duration:
        moment = add_time(start, component.magnitude, component.unit)
    return moment


def _same_second(a: datetime, b: datetime) -> bool:
    return a.replace(microsecond=0) == b.replace(microsecond=0)


def register_at(config: Fuzzy, template: str, duration: DurationLike) -> Rule:
    return config.at(template, duration)


def register_before(config: Fuzzy, template: str, duration: DurationLike) -> Rule:
    return config.before(template, duration)


def register_after(config: Fuzzy, template: str, duration: DurationLike) -> Rule:
    return config.after(template, duration)


def build(
    config: Fuzzy,
    start: datetime | date,
    reference: datetime | date | None = None,
) -> str:
    return config.build(start, reference)
