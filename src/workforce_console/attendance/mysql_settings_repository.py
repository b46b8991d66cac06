from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import AttendanceWindowConfig, ShiftAttendanceOffset
from .repository import AttendanceSettingsRepository


def _optional_int(value) -> Optional[int]:
    return int(value) if value is not None else None


class MySQLAttendanceSettingsRepository(AttendanceSettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_default(self) -> Optional[AttendanceWindowConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT name, clock_in_start, clock_in_end, clock_out_start, clock_out_end,
                       late_threshold_minutes, half_day_threshold_minutes
                FROM attendance_settings
                WHERE is_active=1
                ORDER BY settings_id
                LIMIT 1
                """
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceWindowConfig(
                clock_in_start=normalize_mysql_time(r["clock_in_start"]),
                clock_in_end=normalize_mysql_time(r["clock_in_end"]),
                clock_out_start=normalize_mysql_time(r["clock_out_start"]),
                clock_out_end=normalize_mysql_time(r["clock_out_end"]),
                late_threshold_minutes=int(r["late_threshold_minutes"]),
                half_day_threshold_minutes=int(r["half_day_threshold_minutes"]),
                name=r["name"],
            )

    def update_default(self, config: AttendanceWindowConfig) -> AttendanceWindowConfig:
        params = (
            config.name,
            config.clock_in_start,
            config.clock_in_end,
            config.clock_out_start,
            config.clock_out_end,
            config.late_threshold_minutes,
            config.half_day_threshold_minutes,
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT settings_id FROM attendance_settings WHERE is_active=1 ORDER BY settings_id LIMIT 1")
            r = fetchone(cur)
            if r:
                cur.execute(
                    """
                    UPDATE attendance_settings
                    SET name=%s, clock_in_start=%s, clock_in_end=%s, clock_out_start=%s, clock_out_end=%s,
                        late_threshold_minutes=%s, half_day_threshold_minutes=%s
                    WHERE settings_id=%s
                    """,
                    params + (int(r["settings_id"]),),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO attendance_settings(name, clock_in_start, clock_in_end, clock_out_start, clock_out_end,
                                                    late_threshold_minutes, half_day_threshold_minutes)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    params,
                )
        return config

    def get_shift_offset(self, shift_id: int) -> Optional[ShiftAttendanceOffset]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, clock_in_start_offset, clock_in_end_offset, clock_out_start_offset,
                       clock_out_end_offset, late_threshold_minutes, half_day_threshold_minutes
                FROM shift_attendance_settings
                WHERE shift_id=%s
                """,
                (int(shift_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return ShiftAttendanceOffset(
                shift_id=int(r["shift_id"]),
                clock_in_start_offset=int(r["clock_in_start_offset"]),
                clock_in_end_offset=int(r["clock_in_end_offset"]),
                clock_out_start_offset=int(r["clock_out_start_offset"]),
                clock_out_end_offset=int(r["clock_out_end_offset"]),
                late_threshold_minutes=_optional_int(r.get("late_threshold_minutes")),
                half_day_threshold_minutes=_optional_int(r.get("half_day_threshold_minutes")),
            )

    def upsert_shift_offset(self, offset: ShiftAttendanceOffset) -> ShiftAttendanceOffset:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_attendance_settings(shift_id, clock_in_start_offset, clock_in_end_offset,
                    clock_out_start_offset, clock_out_end_offset, late_threshold_minutes, half_day_threshold_minutes)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    clock_in_start_offset=VALUES(clock_in_start_offset),
                    clock_in_end_offset=VALUES(clock_in_end_offset),
                    clock_out_start_offset=VALUES(clock_out_start_offset),
                    clock_out_end_offset=VALUES(clock_out_end_offset),
                    late_threshold_minutes=VALUES(late_threshold_minutes),
                    half_day_threshold_minutes=VALUES(half_day_threshold_minutes)
                """,
                (
                    offset.shift_id,
                    offset.clock_in_start_offset,
                    offset.clock_in_end_offset,
                    offset.clock_out_start_offset,
                    offset.clock_out_end_offset,
                    offset.late_threshold_minutes,
                    offset.half_day_threshold_minutes,
                ),
            )
        return offset
