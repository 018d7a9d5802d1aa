"""Result types shared by the validation strategies."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ValidationResult:
    """Result of response validation.

    Attributes:
        valid: Whether the validation passed.
        errors: List of validation error messages.
        warnings: List of validation warning messages.
    """

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        status = "VALID" if self.valid else "INVALID"
        error_count = len(self.errors)
        warning_count = len(self.warnings)
        return f"ValidationResult({status}, errors={error_count}, warnings={warning_count})"

    @classmethod
    def failure(cls, message: str) -> ValidationResult:
        """Build an invalid result carrying a single error."""
        return cls(valid=False, errors=[message])

    @classmethod
    def skipped(cls, reason: str) -> ValidationResult:
        """Build a valid result for a response that could not be checked."""
        return cls(valid=True, warnings=[reason])


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Success or failure of a single compile or parse step.

    Exactly one of ``value`` and ``error`` is meaningful: ``error`` is ``None``
    on success. ``value`` may legitimately be ``None`` (e.g. the JSON document
    ``null``), so callers test ``ok`` rather than the value.
    """

    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> Outcome[T]:
        return cls(error=error)
