from datetime import date, time

import pytest

from fakes import InMemorySettings
from workforce_console.attendance.settings_service import AttendanceSettingsService
from workforce_console.attendance.window import AttendanceWindowResolver
from workforce_console.core.exceptions import ConfigurationNotFound, NotFoundError, ValidationError


@pytest.fixture
def service(settings_repo, shifts_repo):
    return AttendanceSettingsService(settings_repo, shifts_repo)


def test_update_default_parses_times(service):
    config = service.update_default(
        clock_in_start="07:30",
        clock_in_end="09:30:00",
        clock_out_start="15:30",
        clock_out_end="18:30",
        late_threshold_minutes=10,
        half_day_threshold_minutes=200,
    )

    assert config.clock_in_start == time(7, 30)
    assert service.get_default() == config


def test_update_default_rejects_bad_values(service):
    with pytest.raises(ValidationError):
        service.update_default(
            clock_in_start="7:30",
            clock_in_end="09:30",
            clock_out_start="15:30",
            clock_out_end="18:30",
            late_threshold_minutes=10,
            half_day_threshold_minutes=200,
        )
    with pytest.raises(ValidationError):
        service.update_default(
            clock_in_start="07:30",
            clock_in_end="09:30",
            clock_out_start="15:30",
            clock_out_end="18:30",
            late_threshold_minutes=-1,
            half_day_threshold_minutes=200,
        )


def test_missing_default_is_reported(shifts_repo):
    with pytest.raises(ConfigurationNotFound):
        AttendanceSettingsService(InMemorySettings(), shifts_repo).get_default()


def test_shift_override_round_trips_through_resolver(service, settings_repo, shifts_repo):
    offset = service.update_shift_override(1, clock_in_start_offset="-00:30", clock_out_end_offset="02:00")

    assert offset.to_dict()["clock_in_start_offset"] == "-00:30"
    assert service.get_shift_override(1) == offset
    window = AttendanceWindowResolver(settings_repo, shifts_repo).resolve(1, date(2025, 3, 3))
    assert (window.clock_in_start, window.clock_out_end) == (time(7, 30), time(19, 0))


def test_shift_override_validates_offsets_and_shift(service):
    with pytest.raises(ValidationError, match="Invalid time offset format"):
        service.update_shift_override(1, clock_in_start_offset="+01:00")
    with pytest.raises(NotFoundError):
        service.update_shift_override(99)


def test_shift_override_thresholds_may_inherit(service):
    offset = service.update_shift_override(1, late_threshold_minutes=None, half_day_threshold_minutes=None)

    assert offset.late_threshold_minutes is None
    assert offset.half_day_threshold_minutes is None
