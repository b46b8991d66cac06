from __future__ import annotations

from datetime import datetime, time

import pytest

from fakes import (
    InMemoryAssignments,
    InMemoryAttendance,
    InMemoryEmployees,
    InMemorySettings,
    InMemoryShifts,
    default_window_config,
    seeded_employees,
)
from workforce_console.container import Container, build_console
from workforce_console.core.enums import ShiftType
from workforce_console.main import create_app
from workforce_console.shifts.model import Shift


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2025, 3, 3, 8, 10, 0)


@pytest.fixture
def shifts_repo() -> InMemoryShifts:
    return InMemoryShifts(
        shifts={
            1: Shift(shift_id=1, shift_name="Morning", start_time=time(8, 0), end_time=time(17, 0), break_minutes=60),
            2: Shift(
                shift_id=2,
                shift_name="Night",
                start_time=time(22, 0),
                end_time=time(6, 0),
                shift_type=ShiftType.NIGHT,
            ),
            3: Shift(
                shift_id=3,
                shift_name="Old Evening",
                start_time=time(14, 0),
                end_time=time(22, 0),
                shift_type=ShiftType.AFTERNOON,
                is_active=False,
            ),
        }
    )


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(employees=seeded_employees())


@pytest.fixture
def assignments_repo(shifts_repo) -> InMemoryAssignments:
    return InMemoryAssignments(shifts_repo)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def settings_repo() -> InMemorySettings:
    return InMemorySettings(default=default_window_config())


@pytest.fixture
def container(shifts_repo, employees_repo, assignments_repo, attendance_repo, settings_repo) -> Container:
    console = build_console(
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        assignments_repo=assignments_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
    )
    return Container(
        conn=None,
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        assignments_repo=assignments_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        console=console,
    )


@pytest.fixture
def console(container):
    return container.console


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()
