"""Service object owning the scheduling and attendance components.

Replaces a process-wide store: everything shared lives on a WorkforceConsole
instance, and its cache is only written to disk when a path is given.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Optional, Sequence

from .assignments.executor import BulkAssignmentExecutor
from .assignments.model import BulkAssignmentOutcome, BulkProgress
from .assignments.resolver import AssignmentConflictResolver
from .assignments.service import AssignmentService
from .attendance.service import AttendanceService
from .attendance.settings_service import AttendanceSettingsService
from .attendance.window import AttendanceWindowResolver
from .common.datetime_utils import parse_iso_date
from .core.enums import AssignmentStatus, RotationType
from .core.exceptions import ValidationError
from .departments.policy import DepartmentPolicyValidator
from .rotation.planner import RotationPlanner
from .shifts.model import ShiftAssignment
from .shifts.repository import AssignmentRepository, EmployeeDirectory

logger = logging.getLogger(__name__)


@dataclass
class ConsoleCache:
    """Last fetched assignment range and last bulk outcome.

    Resolved attendance windows are never cached; they depend on the date.
    """

    assignments: list[ShiftAssignment] = field(default_factory=list)
    range_start: Optional[date] = None
    range_end: Optional[date] = None
    last_progress: BulkProgress = field(default_factory=BulkProgress)
    last_error: Optional[str] = None

    def store_assignments(self, rows: Sequence[ShiftAssignment], start: date, end: date) -> None:
        self.assignments = list(rows)
        self.range_start = start
        self.range_end = end

    def to_dict(self) -> dict:
        return {
            "assignments": [a.to_dict() for a in self.assignments],
            "range_start": self.range_start.strftime("%Y-%m-%d") if self.range_start else None,
            "range_end": self.range_end.strftime("%Y-%m-%d") if self.range_end else None,
            "last_progress": self.last_progress.to_dict(),
            "last_error": self.last_error,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ConsoleCache":
        rows = [
            ShiftAssignment(
                assignment_id=int(a["id"]),
                shift_id=int(a["shift_id"]),
                employee_id=int(a["employee_id"]),
                schedule_date=parse_iso_date(a["schedule_date"]),
                status=AssignmentStatus(a.get("status") or AssignmentStatus.SCHEDULED.value),
                clock_in=datetime.fromisoformat(a["clock_in"]) if a.get("clock_in") else None,
                clock_out=datetime.fromisoformat(a["clock_out"]) if a.get("clock_out") else None,
                overtime_minutes=int(a.get("overtime_minutes") or 0),
                notes=a.get("notes"),
            )
            for a in data.get("assignments", [])
        ]
        return cls(
            assignments=rows,
            range_start=parse_iso_date(data["range_start"]) if data.get("range_start") else None,
            range_end=parse_iso_date(data["range_end"]) if data.get("range_end") else None,
            last_progress=BulkProgress(**data.get("last_progress", {})),
            last_error=data.get("last_error"),
        )

    def save(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")

    @classmethod
    def load(cls, path: str | Path) -> "ConsoleCache":
        p = Path(path)
        if not p.exists():
            return cls()
        return cls.from_dict(json.loads(p.read_text(encoding="utf-8")))


class WorkforceConsole:
    def __init__(
        self,
        *,
        assignments: AssignmentRepository,
        employees: EmployeeDirectory,
        assignment_service: AssignmentService,
        windows: AttendanceWindowResolver,
        attendance_service: AttendanceService,
        settings_service: AttendanceSettingsService,
        planner: RotationPlanner | None = None,
        policies: DepartmentPolicyValidator | None = None,
        cache: ConsoleCache | None = None,
        cache_path: str | Path | None = None,
    ):
        self._assignments_repo = assignments
        self._employees = employees
        self.planner = planner or RotationPlanner()
        self.policies = policies or DepartmentPolicyValidator()
        self.assignments = assignment_service
        self.windows = windows
        self.attendance = attendance_service
        self.settings = settings_service
        self.cache_path = Path(cache_path) if cache_path else None
        self.cache = cache or (ConsoleCache.load(self.cache_path) if self.cache_path else ConsoleCache())
        self.executor = BulkAssignmentExecutor(assignments, on_refresh=self._refresh_cache)

    def _persist(self) -> None:
        if self.cache_path:
            self.cache.save(self.cache_path)

    def _refresh_cache(self, rows: Sequence[ShiftAssignment], start: date, end: date) -> None:
        self.cache.store_assignments(rows, start, end)
        self._persist()

    def new_selection(self) -> AssignmentConflictResolver:
        return AssignmentConflictResolver(self._assignments_repo, self._employees)

    def fetch_assignments(
        self,
        *,
        start: date,
        end: date,
        shift_id: Optional[int] = None,
        employee_id: Optional[int] = None,
    ) -> Sequence[ShiftAssignment]:
        rows = self.assignments.list_range(start=start, end=end, shift_id=shift_id, employee_id=employee_id)
        if shift_id is None and employee_id is None:
            self._refresh_cache(rows, start, end)
        return rows

    def submit_bulk_assignment(
        self,
        *,
        shift_id: int,
        employee_ids: Iterable[int],
        start_date: date,
        end_date: Optional[date] = None,
        pattern: RotationType | str = RotationType.NONE,
        interval: int = 1,
        department: Optional[str] = None,
    ) -> BulkAssignmentOutcome:
        """Plan, gate, merge pre-assigned employees and execute, in that order."""
        rotation = self.planner.plan(start_date=start_date, end_date=end_date, pattern=pattern, interval=interval)

        status = self.policies.validate(department)
        if not status.valid:
            raise ValidationError("; ".join(status.messages))

        selection = self.new_selection()
        selection.load(shift_id=shift_id, start=rotation.start_date, end=rotation.effective_end)
        selection.set_department(department)
        for employee_id in employee_ids:
            selection.select(employee_id)

        request = selection.build_request(shift_id=shift_id, rotation=rotation)
        try:
            outcome = self.executor.execute(request)
        except ValidationError:
            raise
        except Exception as e:
            self.cache.last_progress = self.executor.progress
            self.cache.last_error = str(e)
            self._persist()
            raise

        self.cache.last_progress = outcome.progress
        self.cache.last_error = None
        self._persist()
        return outcome
