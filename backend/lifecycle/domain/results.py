"""Validation result type shared by every lifecycle check.

Pure domain logic with no external dependencies.
"""

from dataclasses import dataclass
from enum import Enum


class RejectionKind(str, Enum):
    """Machine-readable reason a mutation was rejected."""

    TERMINAL_STATE = "terminal_state"
    ILLEGAL_TRANSITION = "illegal_transition"
    PAYMENT_STAGE = "payment_stage"
    OWNERSHIP = "ownership"
    AUTOMATIC_FIELD = "automatic_field"
    READ_ONLY_ROLE = "read_only_role"
    NO_PERMISSION = "no_permission"
    PRECONDITION = "precondition"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a single check.

    An approved result carries nothing else. A rejection carries a kind for
    callers that branch on it and a message that is safe to show end users.
    """

    valid: bool
    error: str = ""
    kind: RejectionKind | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def reject(cls, kind: RejectionKind, error: str) -> "ValidationResult":
        return cls(valid=False, error=error, kind=kind)

    @property
    def rejected(self) -> bool:
        return not self.valid

    def to_dict(self) -> dict:
        """Serialize as the {valid, error, kind} shape returned to callers."""
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error, "kind": self.kind.value}
