"""Field-level write authorization.

Pure domain functions. Each call decides one field for one actor against one
snapshot, so a multi-field update can be approved field by field.

Matrix:
    manager    every field, including the automatic ones
    unit_head  status, difficultyLevel, deadline, teamId on owned projects
    team_lead  read-only
    other      nothing
"""

from typing import Any

from lifecycle.domain.project import Project, ProjectField
from lifecycle.domain.results import RejectionKind, ValidationResult
from lifecycle.domain.roles import Role, normalize_role

UNIT_HEAD_FIELDS: frozenset[ProjectField] = frozenset(
    {
        ProjectField.STATUS,
        ProjectField.DIFFICULTY_LEVEL,
        ProjectField.DEADLINE,
        ProjectField.TEAM_ID,
    }
)

# Derived fields a unit head may never write, with the reason shown to them.
AUTOMATIC_FIELDS: dict[ProjectField, str] = {
    ProjectField.LIVE_PROGRESS: (
        "Progress is automatically calculated based on payment phases "
        "and cannot be manually updated"
    ),
    ProjectField.PAYMENT_STAGE: (
        "Payment stage is automatically updated based on payment processing "
        "and cannot be manually updated"
    ),
}

TEAM_LEAD_READ_ONLY = (
    "Team leads have read-only access. "
    "Progress is automatically calculated based on payment phases."
)


def owns_project(project: Project, actor_id: Any) -> bool:
    """True when actor_id is the project's assigned unit head.

    An unassigned project is owned by nobody, and a missing actor_id owns
    nothing.
    """
    if project.unit_head_id is None or actor_id is None:
        return False
    return project.unit_head_id == actor_id


def authorize(
    role: Role | str | None,
    field: ProjectField | str,
    project: Project,
    actor_id: Any = None,
) -> ValidationResult:
    """Decide whether role may write field on project.

    Args:
        role: Capability role or raw session role name
        field: Field being written (wire name or ProjectField)
        project: Current snapshot
        actor_id: Identity of the acting user, used for unit-head ownership

    Returns:
        ValidationResult; rejections carry OWNERSHIP, AUTOMATIC_FIELD,
        READ_ONLY_ROLE or NO_PERMISSION

    Ownership is checked before the field whitelist, so a unit head on an
    unowned project gets OWNERSHIP for every field.
    """
    role = normalize_role(role)
    field = ProjectField.parse(field)

    if role == Role.MANAGER:
        return ValidationResult.ok()

    if role == Role.UNIT_HEAD:
        if not owns_project(project, actor_id):
            return ValidationResult.reject(
                RejectionKind.OWNERSHIP,
                "You can only update projects assigned to you",
            )
        if field in UNIT_HEAD_FIELDS:
            return ValidationResult.ok()
        if field in AUTOMATIC_FIELDS:
            return ValidationResult.reject(RejectionKind.AUTOMATIC_FIELD, AUTOMATIC_FIELDS[field])
        return ValidationResult.reject(
            RejectionKind.NO_PERMISSION,
            "You do not have permission to update this field",
        )

    if role == Role.TEAM_LEAD:
        return ValidationResult.reject(RejectionKind.READ_ONLY_ROLE, TEAM_LEAD_READ_ONLY)

    if role == Role.OTHER:
        return ValidationResult.reject(
            RejectionKind.NO_PERMISSION,
            "You do not have permission to update projects",
        )

    # Should never reach here due to enum constraint
    raise ValueError(f"Unknown role: {role}")


def writable_fields(role: Role | str | None, project: Project, actor_id: Any = None) -> list[ProjectField]:
    """Fields role may write on project, in declaration order."""
    return [field for field in ProjectField if authorize(role, field, project, actor_id).valid]


def validate_team_assignment_permission(
    role: Role | str | None,
    project: Project,
    actor_id: Any = None,
) -> ValidationResult:
    """Only the unit head who owns a project may assign its team."""
    if normalize_role(role) != Role.UNIT_HEAD:
        return ValidationResult.reject(
            RejectionKind.NO_PERMISSION,
            "Only unit heads can assign teams",
        )
    if not owns_project(project, actor_id):
        return ValidationResult.reject(
            RejectionKind.OWNERSHIP,
            "You can only assign teams to projects assigned to you",
        )
    return ValidationResult.ok()


def validate_unit_head_assignment(role: Role | str | None) -> ValidationResult:
    """Only managers may assign a unit head."""
    if normalize_role(role) != Role.MANAGER:
        return ValidationResult.reject(
            RejectionKind.NO_PERMISSION,
            "Only managers can assign unit heads",
        )
    return ValidationResult.ok()
