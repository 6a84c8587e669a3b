"""Shared enums for models and API."""

from datetime import date
from enum import Enum, IntEnum


class MuscleGroup(str, Enum):
    """Muscle group labels used by exercises (stored as display names)."""

    CHEST = "Chest"
    BACK = "Back"
    SHOULDERS = "Shoulders"
    BICEPS = "Biceps"
    TRICEPS = "Triceps"
    LEGS = "Legs"
    HAMSTRINGS = "Hamstrings"
    GLUTES = "Glutes"
    CALVES = "Calves"
    CORE = "Core"

    @classmethod
    def join(cls, *groups: "MuscleGroup") -> str:
        """Comma-joined label for exercises hitting several groups."""
        return ", ".join(g.value for g in groups)


class Weekday(IntEnum):
    """Day-of-week numbering used for split days (Sunday first)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def from_date(cls, d: date) -> "Weekday":
        # isoweekday: Monday=1 .. Sunday=7
        return cls(d.isoweekday() % 7)
