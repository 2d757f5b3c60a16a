"""Show Time Enum"""

from enum import StrEnum


class ShowTime(StrEnum):
    MORNING = 'MORNING'
    MATINEE = 'MATINEE'
    EVENING = 'EVENING'
    NIGHT = 'NIGHT'
