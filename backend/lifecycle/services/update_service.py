"""UpdateService — composes the lifecycle domain checks for update requests.

This is the integration point where pure domain functions meet the caller's
clock, configuration and logs. Every field of an update is decided on its own,
so a request can be partially approved. The service never applies a change;
it returns the mutation the caller may apply.
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import structlog

from lifecycle.core.config import Settings, get_settings
from lifecycle.core.exceptions import MutationRejectedError
from lifecycle.core.logging import get_correlation_id
from lifecycle.domain.assignment import validate_deadline, validate_team_assignment
from lifecycle.domain.permissions import (
    authorize,
    validate_team_assignment_permission,
    validate_unit_head_assignment,
    writable_fields,
)
from lifecycle.domain.progress import ProgressBreakdown, derive_progress, plan_progress_write
from lifecycle.domain.project import Project, ProjectField, ProjectStatus
from lifecycle.domain.results import RejectionKind, ValidationResult
from lifecycle.domain.roles import Actor
from lifecycle.domain.statuses import validate_completion, validate_transition
from lifecycle.schemas.project import ProjectUpdate

logger = structlog.get_logger(__name__)


def _wire_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _field_name(field: ProjectField | str) -> str:
    return field.value if isinstance(field, ProjectField) else str(field)


@dataclass(frozen=True)
class FieldDecision:
    """Verdict on one field of an update request."""

    field: ProjectField | str
    value: Any
    result: ValidationResult
    mutation: dict | None = None

    @property
    def field_name(self) -> str:
        return _field_name(self.field)

    @property
    def approved(self) -> bool:
        return self.result.valid


@dataclass(frozen=True)
class UpdateVerdict:
    """Per-field verdicts for one update request."""

    project_id: Any
    decisions: tuple[FieldDecision, ...]
    correlation_id: str | None = None

    @property
    def approved_changes(self) -> dict[str, Any]:
        """Wire-named changes the caller may apply, from approved fields only."""
        changes: dict[str, Any] = {}
        for decision in self.decisions:
            if decision.approved and decision.mutation:
                changes.update(decision.mutation)
        return changes

    @property
    def rejections(self) -> list[FieldDecision]:
        return [d for d in self.decisions if d.result.rejected]

    @property
    def all_approved(self) -> bool:
        return not self.rejections

    def raise_if_rejected(self) -> None:
        if self.rejections:
            raise MutationRejectedError(self.project_id, self.rejections)

    def to_dict(self) -> dict:
        return {
            "projectId": self.project_id,
            "correlationId": self.correlation_id,
            "approvedChanges": self.approved_changes,
            "fields": {d.field_name: d.result.to_dict() for d in self.decisions},
        }


class UpdateService:
    """Evaluates proposed project mutations against a snapshot.

    Holds only settings and a bound logger, so one instance can serve
    concurrent requests. Callers must pass a fresh snapshot for every call.
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize with optional settings.

        Args:
            settings: Engine settings (defaults to the cached process settings)
        """
        self.settings = settings or get_settings()
        self.logger = logger.bind(component="UpdateService")

    def evaluate_update(
        self,
        actor: Actor,
        project: Project,
        changes: ProjectUpdate | Mapping[str, Any],
        *,
        now: datetime | None = None,
        correlation_id: str | None = None,
    ) -> UpdateVerdict:
        """Decide every field of an update request.

        Args:
            actor: Acting user
            project: Current snapshot
            changes: Update payload, or a mapping of field name to value
            now: Evaluation instant (for deterministic testing)
            correlation_id: Optional correlation ID for log tracking

        Returns:
            UpdateVerdict with one FieldDecision per supplied field

        Per field: authorization first, then the field's own rule. A status
        change to completed must pass both the transition graph and the
        payment-stage precondition.
        """
        now = now or datetime.now(UTC)
        correlation_id = correlation_id or get_correlation_id() or str(uuid.uuid4())

        if isinstance(changes, ProjectUpdate):
            items = changes.changes()
        else:
            items = {ProjectField.parse(name): value for name, value in changes.items()}

        decisions = tuple(
            self._decide(actor, project, field, value, items, now, correlation_id)
            for field, value in items.items()
        )
        verdict = UpdateVerdict(project_id=project.id, decisions=decisions, correlation_id=correlation_id)

        self.logger.info(
            "update_evaluated",
            project_id=project.id,
            role=actor.role.value,
            approved=[d.field_name for d in decisions if d.approved],
            rejected=[d.field_name for d in verdict.rejections],
            correlation_id=correlation_id,
        )
        return verdict

    def evaluate_team_assignment(
        self,
        actor: Actor,
        project: Project,
        team_id: Any,
        deadline: datetime | str | None = None,
        difficulty: Any = None,
        *,
        now: datetime | None = None,
        correlation_id: str | None = None,
    ) -> ValidationResult:
        """Decide a team assignment: who may assign, then whether the data is complete.

        Deadline and difficulty fall back to the snapshot's values.
        """
        now = now or datetime.now(UTC)
        correlation_id = correlation_id or get_correlation_id() or str(uuid.uuid4())

        result = validate_team_assignment_permission(actor.role, project, actor.actor_id)
        if result.valid:
            result = validate_team_assignment(
                team_id,
                deadline or project.deadline,
                difficulty or project.difficulty_level,
                now=now,
            )

        self._log_result("team_assignment_evaluated", actor, project, result, correlation_id, team_id=team_id)
        return result

    def evaluate_unit_head_assignment(
        self,
        actor: Actor,
        project: Project,
        unit_head_id: Any,
        *,
        correlation_id: str | None = None,
    ) -> ValidationResult:
        """Decide a unit head assignment. Only managers may assign one."""
        correlation_id = correlation_id or get_correlation_id() or str(uuid.uuid4())

        result = validate_unit_head_assignment(actor.role)
        if result.valid and unit_head_id is None:
            result = ValidationResult.reject(RejectionKind.PRECONDITION, "Unit head must be selected")

        self._log_result(
            "unit_head_assignment_evaluated", actor, project, result, correlation_id, unit_head_id=unit_head_id
        )
        return result

    def editable_fields(self, actor: Actor, project: Project) -> list[ProjectField]:
        """Fields the actor may write, for rendering an edit form."""
        return writable_fields(actor.role, project, actor.actor_id)

    def progress_for(self, project: Project) -> ProgressBreakdown:
        return derive_progress(project, default_client_phases=self.settings.default_client_phases)

    def _decide(
        self,
        actor: Actor,
        project: Project,
        field: ProjectField | str,
        value: Any,
        items: dict,
        now: datetime,
        correlation_id: str,
    ) -> FieldDecision:
        result = authorize(actor.role, field, project, actor.actor_id)
        if result.valid:
            result = self._check_field(project, field, value, items, now)

        mutation = self._mutation(project, field, value) if result.valid else None
        decision = FieldDecision(field=field, value=value, result=result, mutation=mutation)

        self.logger.debug(
            "field_update_evaluated",
            project_id=project.id,
            role=actor.role.value,
            field=decision.field_name,
            approved=result.valid,
            kind=result.kind.value if result.kind else None,
            correlation_id=correlation_id,
        )
        return decision

    def _check_field(
        self,
        project: Project,
        field: ProjectField | str,
        value: Any,
        items: dict,
        now: datetime,
    ) -> ValidationResult:
        if field == ProjectField.STATUS:
            result = validate_transition(project.status, value)
            if result.valid and value == ProjectStatus.COMPLETED:
                result = validate_completion(project)
            return result

        if field == ProjectField.TEAM_ID:
            # Assigning a team requires a deadline and difficulty; either may arrive in the same request.
            if project.deadline is None or project.difficulty_level is None:
                return validate_team_assignment(
                    value,
                    items.get(ProjectField.DEADLINE, project.deadline),
                    items.get(ProjectField.DIFFICULTY_LEVEL, project.difficulty_level),
                    now=now,
                )
            return ValidationResult.ok()

        if field == ProjectField.DEADLINE:
            return validate_deadline(value, now=now)

        if field == ProjectField.LIVE_PROGRESS and value is not None:
            try:
                float(value)
            except (TypeError, ValueError):
                return ValidationResult.reject(RejectionKind.PRECONDITION, "Progress must be a number")

        return ValidationResult.ok()

    def _mutation(self, project: Project, field: ProjectField | str, value: Any) -> dict[str, Any]:
        if field == ProjectField.LIVE_PROGRESS:
            write = plan_progress_write(
                project, value, default_client_phases=self.settings.default_client_phases
            )
            return {"currentPhaseProgress": write.progress}
        return {_field_name(field): _wire_value(value)}

    def _log_result(
        self,
        event: str,
        actor: Actor,
        project: Project,
        result: ValidationResult,
        correlation_id: str,
        **extra: Any,
    ) -> None:
        self.logger.info(
            event,
            project_id=project.id,
            role=actor.role.value,
            approved=result.valid,
            kind=result.kind.value if result.kind else None,
            correlation_id=correlation_id,
            **extra,
        )
