"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import Relationship, Weekday

DEFAULT_SESSION_DAYS = 7
DEFAULT_LIST_LIMIT = 200

DEFAULT_RELATIONSHIP = Relationship.FATHER

# Interviews are held on these days, after the Asr prayer.
DEFAULT_INTERVIEW_WEEKDAYS = (Weekday.SATURDAY, Weekday.TUESDAY)
DEFAULT_INTERVIEW_TIME_SLOT = "after_asr"

DEFAULT_HALQA_CAPACITY = 15

MIN_STUDENT_AGE = 4
MAX_STUDENT_AGE = 30
MIN_PASSWORD_LENGTH = 6
