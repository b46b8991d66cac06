from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional, Sequence

from ..core.exceptions import PartialFailure, ValidationError
from ..shifts.model import ShiftAssignment
from ..shifts.repository import AssignmentRepository
from .model import AssignmentError, BulkAssignmentOutcome, BulkAssignmentRequest, BulkProgress

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[Sequence[ShiftAssignment], date, date], None]
ProgressCallback = Callable[[BulkProgress], None]


class BulkAssignmentExecutor:
    """Submit a bulk assignment as one unit and report its outcome.

    Failed items are reported, never retried; re-submission is up to the operator.
    """

    def __init__(self, assignments: AssignmentRepository, *, on_refresh: Optional[RefreshCallback] = None):
        self._assignments = assignments
        self._on_refresh = on_refresh
        self._progress = BulkProgress()

    @property
    def progress(self) -> BulkProgress:
        return self._progress

    def _notify(self, on_progress: Optional[ProgressCallback]) -> None:
        if on_progress:
            on_progress(BulkProgress(**self._progress.to_dict()))

    def execute(
        self,
        request: BulkAssignmentRequest,
        *,
        on_progress: Optional[ProgressCallback] = None,
    ) -> BulkAssignmentOutcome:
        if int(request.shift_id) <= 0:
            raise ValidationError("Invalid shift")
        employee_ids = sorted(set(request.employee_ids))
        if not employee_ids:
            raise ValidationError("Please select at least one employee")

        total = len(employee_ids)
        self._progress = BulkProgress(total=total)
        self._notify(on_progress)

        rotation = request.rotation
        logger.info(
            "Submitting bulk assignment: shift=%s employees=%d rotation=%s %s..%s",
            request.shift_id,
            total,
            rotation.type.value,
            rotation.start_date,
            rotation.effective_end,
        )
        result = self._assignments.bulk_create(
            shift_id=request.shift_id,
            employee_ids=employee_ids,
            rotation=rotation,
            department=request.department,
        )

        if not result.success:
            errors = list(result.errors) or [AssignmentError(code="UNKNOWN", message="Bulk assignment failed")]
            failed_ids = {e.details.get("employee_id") for e in errors} & set(employee_ids)
            failed = len(failed_ids) or total
            self._progress = BulkProgress(total=total, current=total, success=total - failed, failed=failed)
            self._notify(on_progress)
            logger.warning("Bulk assignment for shift %s rejected with %d error(s)", request.shift_id, len(errors))
            raise PartialFailure(errors)

        self._progress = BulkProgress(total=total, current=total, success=total, failed=0)
        self._notify(on_progress)
        logger.info(
            "Bulk assignment for shift %s created %d row(s), %d already existed",
            request.shift_id,
            len(result.assignments),
            len(result.existing),
        )

        if self._on_refresh:
            start, end = rotation.start_date, rotation.effective_end
            self._on_refresh(self._assignments.list_assignments(start=start, end=end), start, end)

        return BulkAssignmentOutcome(
            created=tuple(result.assignments),
            existing=tuple(result.existing),
            progress=BulkProgress(**self._progress.to_dict()),
        )
