"""Public result models for swissqr package."""

from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, model_validator

from swissqr.codes import FieldTag, Reason


class ValidationIssue(BaseModel):
    """The first rule a record failed."""
    tag: FieldTag
    reason: Reason
    message: str

    model_config = ConfigDict(frozen=True)


class ValidationResult(BaseModel):
    """Outcome of validating one QR-bill record.

    Either ``ok`` with the normalized ``record``, or not ok with exactly one
    ``issue``. The record is accepted or rejected as a whole.
    """
    ok: bool
    record: Optional[Tuple[str, ...]] = None  # normalized record, only when ok
    issue: Optional[ValidationIssue] = None  # only when not ok

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_shape(self) -> "ValidationResult":
        if self.ok and (self.record is None or self.issue is not None):
            raise ValueError("A valid result carries a record and no issue")
        if not self.ok and (self.issue is None or self.record is not None):
            raise ValueError("An invalid result carries an issue and no record")
        return self

    @classmethod
    def valid(cls, record: Tuple[str, ...]) -> "ValidationResult":
        return cls(ok=True, record=tuple(record))

    @classmethod
    def invalid(cls, tag: FieldTag, reason: Reason, message: str) -> "ValidationResult":
        return cls(ok=False, issue=ValidationIssue(tag=tag, reason=reason, message=message))

    @property
    def tag(self) -> Optional[FieldTag]:
        return self.issue.tag if self.issue else None

    @property
    def reason(self) -> Optional[Reason]:
        return self.issue.reason if self.issue else None
