"""Unit multipliers for fuzzytime.

Each constant is the length of one unit in seconds. Months and years use
fixed approximations (30 and 365 days); they only feed template rendering,
never calendar arithmetic.
"""

SECOND = 1
MINUTE = 60
HOUR = 3600
DAY = 86400
WEEK = 604800
MONTH = 2592000
YEAR = 31536000
