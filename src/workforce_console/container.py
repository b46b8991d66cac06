from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .assignments.service import AssignmentService
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.mysql_settings_repository import MySQLAttendanceSettingsRepository
from .attendance.repository import AttendanceRepository, AttendanceSettingsRepository
from .attendance.service import AttendanceService
from .attendance.settings_service import AttendanceSettingsService
from .attendance.window import AttendanceWindowResolver
from .console import WorkforceConsole
from .database.connection import DatabaseConnection, DBConfig
from .shifts.mysql_assignment_repository import MySQLAssignmentRepository
from .shifts.mysql_shift_repository import MySQLEmployeeDirectory, MySQLShiftRepository
from .shifts.repository import AssignmentRepository, EmployeeDirectory, ShiftRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    shifts_repo: ShiftRepository
    employees_repo: EmployeeDirectory
    assignments_repo: AssignmentRepository
    attendance_repo: AttendanceRepository
    settings_repo: AttendanceSettingsRepository

    console: WorkforceConsole


def build_console(
    *,
    shifts_repo: ShiftRepository,
    employees_repo: EmployeeDirectory,
    assignments_repo: AssignmentRepository,
    attendance_repo: AttendanceRepository,
    settings_repo: AttendanceSettingsRepository,
    cache_path: Optional[str] = None,
) -> WorkforceConsole:
    windows = AttendanceWindowResolver(settings_repo, shifts_repo)
    return WorkforceConsole(
        assignments=assignments_repo,
        employees=employees_repo,
        assignment_service=AssignmentService(assignments_repo, shifts_repo),
        windows=windows,
        attendance_service=AttendanceService(
            attendance_repo,
            windows,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        settings_service=AttendanceSettingsService(settings_repo, shifts_repo),
        cache_path=cache_path,
    )


def build_container(*, db_config: dict, cache_path: Optional[str] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    shifts_repo = MySQLShiftRepository(conn)
    employees_repo = MySQLEmployeeDirectory(conn)
    assignments_repo = MySQLAssignmentRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    settings_repo = MySQLAttendanceSettingsRepository(conn)

    console = build_console(
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        assignments_repo=assignments_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        cache_path=cache_path,
    )

    return Container(
        conn=conn,
        shifts_repo=shifts_repo,
        employees_repo=employees_repo,
        assignments_repo=assignments_repo,
        attendance_repo=attendance_repo,
        settings_repo=settings_repo,
        console=console,
    )
