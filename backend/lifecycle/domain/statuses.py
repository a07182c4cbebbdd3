"""Status transition validation and the completion precondition.

Pure domain logic with no external dependencies.
"""

from lifecycle.domain.project import PaymentStage, Project, ProjectStatus, resolve_status
from lifecycle.domain.results import RejectionKind, ValidationResult

# Legal status graph. COMPLETED has no outgoing edges.
VALID_TRANSITIONS: dict[ProjectStatus, frozenset[ProjectStatus]] = {
    ProjectStatus.PENDING_ASSIGNMENT: frozenset({ProjectStatus.IN_PROGRESS}),
    ProjectStatus.IN_PROGRESS: frozenset({ProjectStatus.ONHOLD, ProjectStatus.COMPLETED}),
    ProjectStatus.ONHOLD: frozenset({ProjectStatus.IN_PROGRESS, ProjectStatus.COMPLETED}),
    ProjectStatus.COMPLETED: frozenset(),
}


def _display(value) -> str:
    return str(getattr(value, "value", value))


def allowed_targets(current_status: ProjectStatus | str | None) -> frozenset[ProjectStatus]:
    """Statuses reachable in one step from current_status (None is pending, unknown has none)."""
    current = resolve_status(current_status)
    if current is None:
        return frozenset()
    return VALID_TRANSITIONS[current]


def validate_transition(
    current_status: ProjectStatus | str | None,
    requested_status: ProjectStatus | str | None,
) -> ValidationResult:
    """Validate whether a status change is allowed.

    Pure function -- no side effects, no DB access.

    Args:
        current_status: Status on the snapshot; None means pending assignment
        requested_status: Status the caller wants to move to

    Returns:
        ValidationResult, rejected with TERMINAL_STATE or ILLEGAL_TRANSITION

    Rules:
        - A completed project cannot change status at all (checked first)
        - Only edges in VALID_TRANSITIONS are allowed; no self-loops
        - Unknown current or requested values are illegal transitions
    """
    current = resolve_status(current_status)

    if current == ProjectStatus.COMPLETED:
        return ValidationResult.reject(
            RejectionKind.TERMINAL_STATE,
            "Cannot change status of a completed project",
        )

    target = resolve_status(requested_status) if requested_status is not None else None
    if current is None or target not in VALID_TRANSITIONS[current]:
        shown_current = current.value if current is not None else _display(current_status)
        return ValidationResult.reject(
            RejectionKind.ILLEGAL_TRANSITION,
            f"Invalid status transition from {shown_current} to {_display(requested_status)}",
        )

    return ValidationResult.ok()


def validate_completion(project: Project) -> ValidationResult:
    """Check that a project may be marked completed.

    Independent of validate_transition: moving to COMPLETED must pass both.
    """
    if project.payment_stage == PaymentStage.FINAL:
        return ValidationResult.ok()

    stage = _display(project.payment_stage) if project.payment_stage else "not set"
    return ValidationResult.reject(
        RejectionKind.PAYMENT_STAGE,
        "Project can only be marked as completed when payment stage is 'final'. "
        f"Current stage: {stage}",
    )
