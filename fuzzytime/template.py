"""Placeholder substitution for rule templates."""

import math

from fuzzytime.units import CONVERSIONS


def render_template(total_seconds: int, template: str) -> str:
    """Fill unit placeholders in ``template`` from ``total_seconds``.

    Each pass scans the unit table coarsest first and handles only the first
    placeholder it finds: the whole number of that unit in the remaining
    seconds replaces the token's first occurrence, and those seconds are
    used up. ``"%h hours %m minutes"`` with 7500 seconds gives
    ``"2 hours 5 minutes"``.

    A token repeated in the template is filled again on a later pass from
    whatever seconds are left by then.
    """
    while True:
        for conversion in CONVERSIONS:
            if conversion.placeholder in template:
                value = math.floor(total_seconds / conversion.multiplier)
                total_seconds -= value * conversion.multiplier
                template = template.replace(conversion.placeholder, str(value), 1)
                break
        else:
            return template
