from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(frozen=True)
class DepartmentPolicy:
    min_rest_hours: int
    max_consecutive_shifts: int
    required_skills: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationStatus:
    valid: bool
    messages: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {"valid": self.valid, "messages": list(self.messages)}


DEPARTMENT_POLICIES: Mapping[str, DepartmentPolicy] = {
    "nursing": DepartmentPolicy(
        min_rest_hours=8,
        max_consecutive_shifts=4,
        required_skills=("medical", "patient-care"),
    ),
    "emergency": DepartmentPolicy(
        min_rest_hours=10,
        max_consecutive_shifts=3,
        required_skills=("emergency-response", "critical-care"),
    ),
    "production": DepartmentPolicy(
        min_rest_hours=12,
        max_consecutive_shifts=5,
        required_skills=("machine-operation",),
    ),
}

NO_RULES_MESSAGE = "No specific department rules apply"


class DepartmentPolicyValidator:
    """Informational lookup; never blocks a submission on its own."""

    def __init__(self, policies: Optional[Mapping[str, DepartmentPolicy]] = None):
        self._policies = dict(DEPARTMENT_POLICIES if policies is None else policies)

    def policy_for(self, department: Optional[str]) -> Optional[DepartmentPolicy]:
        if not department:
            return None
        return self._policies.get(department)

    def validate(self, department: Optional[str]) -> ValidationStatus:
        policy = self.policy_for(department)
        if policy is None:
            return ValidationStatus(valid=True, messages=(NO_RULES_MESSAGE,))

        messages = [
            f"Minimum rest period: {policy.min_rest_hours} hours",
            f"Maximum consecutive shifts: {policy.max_consecutive_shifts}",
        ]
        if policy.required_skills:
            messages.append(f"Required skills: {', '.join(policy.required_skills)}")
        return ValidationStatus(valid=True, messages=tuple(messages))
