from __future__ import annotations

from enum import Enum


class RotationType(str, Enum):
    """Repeat pattern for a bulk shift assignment."""

    NONE = "none"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class ShiftType(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


class AssignmentStatus(str, Enum):
    """Lifecycle of one shift assignment."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AttendanceStatus(str, Enum):
    """Normalized attendance status as stored in the database."""

    PRESENT = "Present"
    LATE = "Late"
    HALF_DAY = "Half Day"
    ABSENT = "Absent"


class VerificationMethod(str, Enum):
    """How a clock action was verified.

    Closed set: the note annotation is derived from the member, never from a
    free-form string.
    """

    MANUAL = "manual"
    FACE_RECOGNITION = "face_recognition"
    FALLBACK = "fallback"

    def clock_in_note(self) -> str:
        return f"Verified via {self.value}"

    def clock_out_note(self) -> str:
        return f"Clock out verified via {self.value}"


class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
