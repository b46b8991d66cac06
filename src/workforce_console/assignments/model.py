from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ..rotation.model import RotationPattern


@dataclass(frozen=True)
class AssignmentError:
    """One failing item reported by the persistence boundary."""

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": dict(self.details)}


@dataclass(frozen=True)
class BulkAssignmentRequest:
    shift_id: int
    employee_ids: tuple[int, ...]
    rotation: RotationPattern
    department: Optional[str] = None


@dataclass(frozen=True)
class BulkCreateResult:
    """Raw answer of the persistence boundary to a bulk submission."""

    success: bool
    assignments: Sequence = ()
    existing: Sequence = ()
    errors: Sequence[AssignmentError] = ()


@dataclass
class BulkProgress:
    """Advisory counters for UI feedback; they say nothing about commit state."""

    total: int = 0
    current: int = 0
    success: int = 0
    failed: int = 0

    def to_dict(self) -> dict:
        return {"total": self.total, "current": self.current, "success": self.success, "failed": self.failed}


@dataclass(frozen=True)
class BulkAssignmentOutcome:
    created: Sequence = ()
    existing: Sequence = ()
    progress: BulkProgress = field(default_factory=BulkProgress)

    def to_dict(self) -> dict:
        return {
            "success": True,
            "assignments": [a.to_dict() for a in self.created],
            "existing": [a.to_dict() for a in self.existing],
            "progress": self.progress.to_dict(),
        }
