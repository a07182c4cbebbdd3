"""Project Pydantic schemas for payloads exchanged with the projects API.

Payloads use the API's camelCase names; attributes are snake_case.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, model_validator

from lifecycle.core.exceptions import InvalidSnapshotError
from lifecycle.domain.assignment import parse_deadline
from lifecycle.domain.project import DifficultyLevel, PaymentStage, Project, ProjectField, ProjectStatus


class CrackedLeadPhases(BaseModel):
    """Phase counters carried on the originating lead relation."""

    model_config = ConfigDict(populate_by_name=True)

    current_phase: int | None = Field(None, alias="currentPhase", ge=1)
    total_phases: int | None = Field(None, alias="totalPhases", ge=1)


class ProjectSnapshot(BaseModel):
    """A fetched project record, as returned by GET /projects/{id}."""

    model_config = ConfigDict(populate_by_name=True)

    id: int | str | None = None
    status: ProjectStatus | None = None
    payment_stage: PaymentStage | None = Field(None, alias="paymentStage")
    unit_head_id: int | str | None = Field(None, alias="unitHeadId")
    team_id: int | str | None = Field(None, alias="teamId")
    difficulty_level: DifficultyLevel | None = Field(None, alias="difficultyLevel")
    deadline: datetime | None = None
    description: str | None = None
    live_progress: float | None = Field(None, alias="liveProgress")
    total_phases: int | None = Field(None, alias="totalPhases", ge=1)
    current_phase: int | None = Field(None, alias="currentPhase", ge=1)
    current_phase_progress: float | None = Field(None, alias="currentPhaseProgress")
    cracked_lead_id: int | str | None = Field(None, alias="crackedLeadId")
    cracked_lead: CrackedLeadPhases | None = Field(None, alias="crackedLead")

    @model_validator(mode="after")
    def fill_phases_from_lead(self) -> "ProjectSnapshot":
        """Take phase counters from the nested lead when the flat ones are absent."""
        if self.cracked_lead is not None:
            if self.total_phases is None:
                self.total_phases = self.cracked_lead.total_phases
            if self.current_phase is None:
                self.current_phase = self.cracked_lead.current_phase
        return self

    @classmethod
    def parse_payload(cls, payload: dict[str, Any]) -> "ProjectSnapshot":
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidSnapshotError("project snapshot", str(e)) from e

    def to_domain(self) -> Project:
        return Project(
            id=self.id,
            status=self.status,
            payment_stage=self.payment_stage,
            unit_head_id=self.unit_head_id,
            team_id=self.team_id,
            difficulty_level=self.difficulty_level,
            deadline=parse_deadline(self.deadline),
            description=self.description,
            live_progress=self.live_progress,
            total_phases=self.total_phases,
            current_phase=self.current_phase,
            current_phase_progress=self.current_phase_progress,
            cracked_lead_id=self.cracked_lead_id,
        )


class ProjectUpdate(BaseModel):
    """Unified update payload for PUT /projects/{id}.

    Only fields present in the payload are evaluated. Deadlines stay as sent
    so that an unparseable value is reported as a rejection, not a schema error.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    description: str | None = None
    difficulty: DifficultyLevel | None = Field(
        None, validation_alias=AliasChoices("difficulty", "difficultyLevel")
    )
    payment_stage: PaymentStage | None = Field(None, alias="paymentStage")
    live_progress: float | None = Field(None, alias="liveProgress")
    deadline: datetime | str | None = None
    status: ProjectStatus | None = None
    team_id: int | str | None = Field(None, alias="teamId")

    @classmethod
    def parse_payload(cls, payload: dict[str, Any]) -> "ProjectUpdate":
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise InvalidSnapshotError("project update", str(e)) from e

    def changes(self) -> dict[ProjectField, Any]:
        """Explicitly supplied fields, keyed by ProjectField."""
        return {ProjectField.parse(name): value for name, value in self.model_dump(exclude_unset=True).items()}
