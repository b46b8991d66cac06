from __future__ import annotations

from datetime import time
from typing import Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class OutsideWindowError(ValidationError):
    """Raised when a clock action happens outside its allowed window."""

    def __init__(self, action: str, start: time, end: time):
        self.action = action
        self.start = start
        self.end = end
        super().__init__(f"{action} only allowed between {start:%H:%M} and {end:%H:%M}")


class ConflictError(DomainError):
    """Raised on duplicate natural keys or an impossible state transition."""


class NotFoundError(DomainError):
    """Raised when a referenced shift or assignment does not exist."""


class ConfigurationNotFound(DomainError):
    """Raised when no attendance window can be resolved. Blocks clock actions."""


class PartialFailure(DomainError):
    """Raised when a bulk assignment is rejected by the persistence boundary."""

    def __init__(self, errors: Sequence):
        self.errors = list(errors)
        message = "\n".join(e.message for e in self.errors) or "Failed to create assignments"
        super().__init__(message)
