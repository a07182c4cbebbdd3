"""Pure lifecycle domain: status graph, authorization matrix, progress model."""

from lifecycle.domain.assignment import parse_deadline, validate_deadline, validate_team_assignment
from lifecycle.domain.permissions import (
    authorize,
    validate_team_assignment_permission,
    validate_unit_head_assignment,
    writable_fields,
)
from lifecycle.domain.progress import (
    PhaseState,
    ProgressBreakdown,
    clamp_progress,
    derive_progress,
    plan_progress_write,
)
from lifecycle.domain.project import (
    DifficultyLevel,
    PaymentStage,
    Project,
    ProjectField,
    ProjectStatus,
    resolve_status,
)
from lifecycle.domain.results import RejectionKind, ValidationResult
from lifecycle.domain.roles import Actor, Role, normalize_role
from lifecycle.domain.statuses import VALID_TRANSITIONS, allowed_targets, validate_completion, validate_transition

__all__ = [
    "VALID_TRANSITIONS",
    "Actor",
    "DifficultyLevel",
    "PaymentStage",
    "PhaseState",
    "ProgressBreakdown",
    "Project",
    "ProjectField",
    "ProjectStatus",
    "RejectionKind",
    "Role",
    "ValidationResult",
    "allowed_targets",
    "authorize",
    "clamp_progress",
    "derive_progress",
    "normalize_role",
    "parse_deadline",
    "plan_progress_write",
    "resolve_status",
    "validate_completion",
    "validate_deadline",
    "validate_team_assignment",
    "validate_team_assignment_permission",
    "validate_transition",
    "validate_unit_head_assignment",
    "writable_fields",
]
