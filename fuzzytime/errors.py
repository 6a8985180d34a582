"""Exceptions raised by fuzzytime."""


class FuzzyTimeError(ValueError):
    """Base class for every error fuzzytime raises."""


class MalformedDurationError(FuzzyTimeError):
    """A duration string or component list could not be understood."""


class InvalidUnitError(FuzzyTimeError):
    """A value outside the ``Unit`` enumeration was used as a time unit."""


class InvalidDateError(FuzzyTimeError):
    """A date could not be used or the arithmetic left datetime's range."""
