from workforce_console.departments.policy import NO_RULES_MESSAGE, DepartmentPolicy, DepartmentPolicyValidator


def test_known_department_lists_its_rules():
    status = DepartmentPolicyValidator().validate("nursing")

    assert status.valid is True
    assert status.messages == (
        "Minimum rest period: 8 hours",
        "Maximum consecutive shifts: 4",
        "Required skills: medical, patient-care",
    )


def test_unknown_or_missing_department_has_no_rules():
    validator = DepartmentPolicyValidator()

    for department in ("marketing", None, ""):
        status = validator.validate(department)
        assert status.valid is True
        assert status.messages == (NO_RULES_MESSAGE,)


def test_custom_policy_table():
    validator = DepartmentPolicyValidator({"lab": DepartmentPolicy(min_rest_hours=6, max_consecutive_shifts=2)})

    assert validator.policy_for("nursing") is None
    assert validator.validate("lab").to_dict() == {
        "valid": True,
        "messages": ["Minimum rest period: 6 hours", "Maximum consecutive shifts: 2"],
    }
