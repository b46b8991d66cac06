from datetime import date

import pytest

from workforce_console.assignments.executor import BulkAssignmentExecutor
from workforce_console.assignments.model import BulkAssignmentRequest
from workforce_console.core.enums import RotationType
from workforce_console.core.exceptions import PartialFailure, ValidationError
from workforce_console.rotation.model import RotationPattern

START = date(2025, 3, 3)
END = date(2025, 3, 5)


def _request(shift_id=1, employee_ids=(1, 2), department=None, pattern=RotationType.DAILY):
    return BulkAssignmentRequest(
        shift_id=shift_id,
        employee_ids=tuple(employee_ids),
        rotation=RotationPattern(type=pattern, start_date=START, end_date=END),
        department=department,
    )


def test_success_creates_every_occurrence_and_refreshes(assignments_repo):
    refreshed = []
    executor = BulkAssignmentExecutor(assignments_repo, on_refresh=lambda rows, s, e: refreshed.append((list(rows), s, e)))

    outcome = executor.execute(_request())

    assert len(outcome.created) == 6
    assert outcome.progress.to_dict() == {"total": 2, "current": 2, "success": 2, "failed": 0}
    assert len(refreshed) == 1
    rows, s, e = refreshed[0]
    assert (s, e) == (START, END)
    assert len(rows) == 6


def test_existing_rows_are_reported_not_recreated(assignments_repo):
    assignments_repo.seed(shift_id=1, employee_id=1, schedule_date=START)
    executor = BulkAssignmentExecutor(assignments_repo)

    outcome = executor.execute(_request(pattern=RotationType.NONE))

    assert [a.employee_id for a in outcome.existing] == [1]
    assert [a.employee_id for a in outcome.created] == [2]


def test_conflict_rolls_back_and_raises_with_all_messages(assignments_repo):
    assignments_repo.seed(shift_id=2, employee_id=1, schedule_date=START)
    assignments_repo.seed(shift_id=2, employee_id=2, schedule_date=END)
    executor = BulkAssignmentExecutor(assignments_repo)

    with pytest.raises(PartialFailure) as exc:
        executor.execute(_request(department="nursing"))

    assert str(exc.value) == "\n".join(
        ["Employee already has a shift on 2025-03-03", "Employee already has a shift on 2025-03-05"]
    )
    assert [e.code for e in exc.value.errors] == ["SHIFT_CONFLICT", "SHIFT_CONFLICT"]
    assert assignments_repo.list_assignments(start=START, end=END, shift_id=1) == []
    assert executor.progress.failed == 2


def test_progress_counts_failed_employees(assignments_repo):
    assignments_repo.seed(shift_id=2, employee_id=1, schedule_date=START)
    seen = []
    executor = BulkAssignmentExecutor(assignments_repo)

    with pytest.raises(PartialFailure):
        executor.execute(_request(department="nursing"), on_progress=seen.append)

    assert seen[0].to_dict() == {"total": 2, "current": 0, "success": 0, "failed": 0}
    assert seen[-1].to_dict() == {"total": 2, "current": 2, "success": 1, "failed": 1}


def test_conflicting_shift_is_ignored_without_department(assignments_repo):
    assignments_repo.seed(shift_id=2, employee_id=1, schedule_date=START)

    outcome = BulkAssignmentExecutor(assignments_repo).execute(_request(pattern=RotationType.NONE))

    assert len(outcome.created) == 2


def test_unknown_shift_fails_everyone(assignments_repo):
    executor = BulkAssignmentExecutor(assignments_repo)

    with pytest.raises(PartialFailure, match="Shift not found"):
        executor.execute(_request(shift_id=99))

    assert executor.progress.failed == 2


def test_empty_request_is_rejected_before_submission(assignments_repo):
    with pytest.raises(ValidationError):
        BulkAssignmentExecutor(assignments_repo).execute(_request(employee_ids=()))

    assert assignments_repo.bulk_calls == []
