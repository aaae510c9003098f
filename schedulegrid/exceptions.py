"""Exception hierarchy for schedulegrid.

The engines never raise for unusual but well-formed input (an unknown
occurrence type simply produces nothing). These exceptions cover caller
contract violations only.
"""


class ScheduleGridError(Exception):
    """Base exception for all schedulegrid errors."""


class CivilDateParseError(ScheduleGridError, ValueError):
    """A date or time-of-day string was malformed.

    Raised when:
    - A date string is not in canonical YYYY-MM-DD form
    - The components do not form a real calendar date (e.g. 2026-02-30)
    - A time-of-day string is not HH or HH:MM
    """


class InvalidAnchorError(ScheduleGridError, ValueError):
    """The anchor event for a recurrence could not be used.

    Raised when:
    - The anchor start timestamp is missing
    - The anchor end timestamp is not after the start timestamp
    """
