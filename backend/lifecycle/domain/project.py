"""Project snapshot and the enums it is built from.

Pure domain logic with no external dependencies. The snapshot is immutable:
the engine evaluates mutations against it and never changes it.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class ProjectStatus(str, Enum):
    """Project lifecycle status. A missing status means PENDING_ASSIGNMENT."""

    PENDING_ASSIGNMENT = "pending_assignment"
    IN_PROGRESS = "in_progress"
    ONHOLD = "onhold"
    COMPLETED = "completed"


def resolve_status(value: ProjectStatus | str | None) -> ProjectStatus | None:
    """Canonical status for a stored value.

    A null status means PENDING_ASSIGNMENT. Values outside the enum resolve
    to None so callers can reject them.
    """
    if value is None:
        return ProjectStatus.PENDING_ASSIGNMENT
    if isinstance(value, ProjectStatus):
        return value
    try:
        return ProjectStatus(value)
    except ValueError:
        return None


class PaymentStage(str, Enum):
    """Payment processing stage, driven by the payments subsystem."""

    INITIAL = "initial"
    IN_BETWEEN = "in_between"
    FINAL = "final"
    APPROVED = "approved"


class DifficultyLevel(str, Enum):
    VERY_EASY = "very_easy"
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    DIFFICULT = "difficult"


class ProjectField(str, Enum):
    """Writable project fields, valued by their wire names."""

    STATUS = "status"
    PAYMENT_STAGE = "paymentStage"
    LIVE_PROGRESS = "liveProgress"
    DIFFICULTY_LEVEL = "difficultyLevel"
    DEADLINE = "deadline"
    TEAM_ID = "teamId"
    DESCRIPTION = "description"
    UNIT_HEAD_ID = "unitHeadId"

    @classmethod
    def parse(cls, name: "ProjectField | str") -> "ProjectField | str":
        """Resolve a field name, keeping unknown names as plain strings.

        Accepts the enum value, the member name, and the aliases used by the
        update payload ("difficulty") and by operators ("progress").
        """
        if isinstance(name, cls):
            return name
        key = str(name)
        if key in _FIELD_ALIASES:
            return _FIELD_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            pass
        try:
            return cls[key.upper()]
        except KeyError:
            return key


_FIELD_ALIASES: dict[str, ProjectField] = {
    "progress": ProjectField.LIVE_PROGRESS,
    "difficulty": ProjectField.DIFFICULTY_LEVEL,
}


@dataclass(frozen=True)
class Project:
    """Read-only snapshot of a project record at decision time.

    A project with a cracked_lead_id originated from a sales lead and is a
    multi-phase client project. Without one it is a single-phase company
    project.
    """

    id: Any = None
    status: ProjectStatus | None = None
    payment_stage: PaymentStage | None = None
    unit_head_id: Any = None
    team_id: Any = None
    difficulty_level: DifficultyLevel | None = None
    deadline: datetime | None = None
    description: str | None = None
    live_progress: float | None = None
    total_phases: int | None = None
    current_phase: int | None = None
    current_phase_progress: float | None = None
    cracked_lead_id: Any = None

    @property
    def is_company_project(self) -> bool:
        return self.cracked_lead_id is None

    @property
    def effective_status(self) -> ProjectStatus | None:
        return resolve_status(self.status)
