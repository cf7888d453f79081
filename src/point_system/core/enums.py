from __future__ import annotations

from enum import Enum


class PunchDirection(str, Enum):
    """Direction assigned by the classifier (system punch)."""

    IN = "IN"
    OUT = "OUT"


class DayType(str, Enum):
    WORKDAY = "workday"
    FREE = "free"
    HOLIDAY = "holiday"


class AttendanceStatus(str, Enum):
    """Status stored on a raw attendance record."""

    PRESENT = "present"
    ABSENT = "absent"
