from datetime import date

import pytest

from workforce_console.assignments.resolver import AssignmentConflictResolver
from workforce_console.core.enums import RotationType
from workforce_console.core.exceptions import ValidationError
from workforce_console.rotation.model import RotationPattern

DAY = date(2025, 3, 3)


@pytest.fixture
def resolver(assignments_repo, employees_repo):
    assignments_repo.seed(shift_id=1, employee_id=3, schedule_date=DAY)
    r = AssignmentConflictResolver(assignments_repo, employees_repo)
    r.load(shift_id=1, start=DAY, end=date(2025, 3, 5))
    return r


def test_pre_assigned_employees_are_loaded_for_the_shift(resolver):
    assert resolver.pre_assigned == frozenset({3})
    assert resolver.is_pre_assigned(3)
    assert resolver.selection == [3]


def test_pre_assigned_survive_department_filter(resolver):
    resolver.set_department("nursing")
    resolver.select(1)

    assert resolver.selection == [1, 3]
    assert [e.employee_id for e in resolver.visible_candidates()] == [1, 2, 3]


def test_switching_department_drops_manual_picks_only(resolver):
    resolver.set_department("nursing")
    resolver.select(1)
    resolver.set_department("production")

    assert resolver.selection == [3]

    resolver.set_department(None)
    assert resolver.selection == [3]


def test_pre_assigned_cannot_be_deselected(resolver):
    with pytest.raises(ValidationError):
        resolver.deselect(3)


def test_select_rejects_out_of_department_and_inactive(resolver):
    resolver.set_department("nursing")

    with pytest.raises(ValidationError):
        resolver.select(4)
    with pytest.raises(ValidationError):
        resolver.select(5)


def test_selection_is_deduplicated(resolver):
    resolver.select(1)
    resolver.select(1)
    resolver.select(3)

    assert resolver.selection == [1, 3]


def test_search_matches_name_or_department(resolver):
    assert [e.employee_id for e in resolver.visible_candidates("binh")] == [2]
    assert [e.employee_id for e in resolver.visible_candidates("EMERG")] == [3]


def test_build_request_reloads_when_shift_changes(resolver):
    resolver.select(1)
    rotation = RotationPattern(type=RotationType.DAILY, start_date=DAY, end_date=date(2025, 3, 5))

    request = resolver.build_request(shift_id=2, rotation=rotation)

    assert request.shift_id == 2
    assert request.employee_ids == (1,)
    assert resolver.pre_assigned == frozenset()


def test_build_request_requires_someone(assignments_repo, employees_repo):
    r = AssignmentConflictResolver(assignments_repo, employees_repo)
    rotation = RotationPattern(type=RotationType.NONE, start_date=DAY)

    with pytest.raises(ValidationError, match="Please select at least one employee"):
        r.build_request(shift_id=1, rotation=rotation)


def test_load_rejects_inverted_range(assignments_repo, employees_repo):
    r = AssignmentConflictResolver(assignments_repo, employees_repo)

    with pytest.raises(ValidationError):
        r.load(shift_id=1, start=date(2025, 3, 5), end=DAY)
