from datetime import date


def test_rotation_patterns(client):
    res = client.get("/api/rotation/patterns?start=2025-03-01&end=2025-03-10")

    assert res.status_code == 200
    assert res.get_json() == {"patterns": ["none", "daily", "weekly"]}


def test_rotation_plan_reports_downgrade(client):
    res = client.post(
        "/api/rotation/plan",
        json={"start_date": "2025-03-01", "end_date": "2025-03-03", "pattern": "weekly", "interval": 2},
    )

    assert res.status_code == 200
    assert res.get_json()["rotation"] == {
        "type": "daily",
        "interval": 1,
        "startDate": "2025-03-01",
        "endDate": "2025-03-03",
    }


def test_rotation_plan_rejects_bad_interval(client):
    res = client.post(
        "/api/rotation/plan",
        json={"start_date": "2025-03-01", "end_date": "2025-06-01", "pattern": "monthly", "interval": 13},
    )

    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_department_rules(client):
    res = client.get("/api/departments/production/rules")

    assert res.get_json() == {
        "valid": True,
        "messages": [
            "Minimum rest period: 12 hours",
            "Maximum consecutive shifts: 5",
            "Required skills: machine-operation",
        ],
    }


def test_bulk_assign_then_list(client):
    res = client.post(
        "/api/shifts/1/assignments/bulk",
        json={"employee_ids": [1, 2], "start_date": "2025-03-03", "end_date": "2025-03-04", "rotation_pattern": "daily"},
    )

    assert res.status_code == 201
    body = res.get_json()
    assert body["success"] is True
    assert len(body["assignments"]) == 4
    assert body["progress"]["success"] == 2

    listed = client.get("/api/assignments?start=2025-03-03&end=2025-03-04&shift_id=1").get_json()
    assert len(listed["items"]) == 4


def test_bulk_conflict_returns_errors(client, assignments_repo):
    assignments_repo.seed(shift_id=2, employee_id=1, schedule_date=date(2025, 3, 3))

    res = client.post(
        "/api/shifts/1/assignments/bulk",
        json={"employee_ids": [1], "start_date": "2025-03-03", "department": "nursing"},
    )

    assert res.status_code == 422
    body = res.get_json()
    assert body["success"] is False
    assert body["errors"][0]["code"] == "SHIFT_CONFLICT"


def test_assignment_status_patch(client, assignments_repo):
    row = assignments_repo.seed(shift_id=1, employee_id=1, schedule_date=date(2025, 3, 3))

    ok = client.patch(f"/api/assignments/{row.assignment_id}/status", json={"status": "cancelled"})
    again = client.patch(f"/api/assignments/{row.assignment_id}/status", json={"status": "completed"})
    missing = client.patch("/api/assignments/999/status", json={"status": "completed"})

    assert ok.status_code == 200
    assert ok.get_json()["assignment"]["status"] == "cancelled"
    assert again.status_code == 409
    assert missing.status_code == 404


def test_attendance_window_endpoints(client):
    put = client.put(
        "/api/shifts/1/attendance-window",
        json={"clock_in_start_offset": "-00:15", "clock_in_end_offset": "01:00"},
    )
    assert put.status_code == 200

    res = client.get("/api/shifts/1/attendance-window?date=2025-03-03")

    body = res.get_json()
    assert body["source"] == "shift"
    assert (body["clock_in_start"], body["clock_in_end"]) == ("07:45", "09:00")


def test_attendance_window_bad_offset(client):
    res = client.put("/api/shifts/1/attendance-window", json={"clock_in_start_offset": "7"})

    assert res.status_code == 400
    assert "Invalid time offset format" in res.get_json()["message"]


def test_attendance_settings(client):
    assert client.get("/api/attendance/settings").get_json()["clock_in_start"] == "08:00:00"

    res = client.put(
        "/api/attendance/settings",
        json={"clock_in_start": "07:00", "clock_in_end": "09:00", "clock_out_start": "15:00", "clock_out_end": "18:00"},
    )

    assert res.status_code == 200
    assert res.get_json()["settings"]["late_threshold_minutes"] == 15


def test_clock_in_and_out_with_override_time(client):
    res = client.post(
        "/api/attendance/clock-in",
        json={"employee_id": 1, "override_time": "2025-03-03T08:20:00", "notes": "bus"},
    )
    assert res.status_code == 201
    assert res.get_json()["record"]["status"] == "Late"

    dup = client.post("/api/attendance/clock-in", json={"employee_id": 1, "override_time": "2025-03-03T08:30:00"})
    assert dup.status_code == 409

    out = client.post("/api/attendance/clock-out", json={"employee_id": 1, "override_time": "2025-03-03T17:00:00"})
    assert out.status_code == 200
    assert out.get_json()["record"]["clock_out"] == "2025-03-03T17:00:00"


def test_clock_in_requires_employee(client):
    res = client.post("/api/attendance/clock-in", json={})

    assert res.status_code == 400


def test_clock_in_without_configuration(client, settings_repo):
    settings_repo.default = None

    res = client.post("/api/attendance/clock-in", json={"employee_id": 1, "override_time": "2025-03-03T08:00:00"})

    assert res.status_code == 409
    assert res.get_json()["message"] == "Shift attendance settings not found"


def test_shift_list(client):
    items = client.get("/api/shifts").get_json()["items"]

    assert [s["name"] for s in items] == ["Morning", "Old Evening", "Night"]


def test_candidates_keep_pre_assigned_visible(client, assignments_repo):
    assignments_repo.seed(shift_id=1, employee_id=3, schedule_date=date(2025, 3, 3))

    body = client.get("/api/shifts/1/candidates?start=2025-03-03&department=nursing").get_json()

    assert body["pre_assigned"] == [3]
    assert [(e["id"], e["pre_assigned"]) for e in body["items"]] == [(1, False), (2, False), (3, True)]


def test_today_record(client):
    assert client.get("/api/attendance/employees/1/today?date=2025-03-03").get_json() == {"record": None}

    client.post("/api/attendance/clock-in", json={"employee_id": 1, "override_time": "2025-03-03T08:00:00"})

    record = client.get("/api/attendance/employees/1/today?date=2025-03-03").get_json()["record"]
    assert record["status"] == "Present"
    assert record["notes"] == "Verified via manual"
