"""Deterministic progress derivation.

Pure functions with no external dependencies.

A client project runs through `total_phases` sequential phases. Phases before
the current one count as 100, the current phase counts its own progress, and
later phases count 0. A company project is a single implicit phase whose
progress is the project's progress.
"""

import math
from dataclasses import dataclass
from enum import Enum

from lifecycle.domain.project import Project

DEFAULT_CLIENT_PHASES = 4
COMPANY_PHASES = 1


class PhaseState(str, Enum):
    """Position of a phase relative to the current one."""

    COMPLETED = "completed"
    CURRENT = "current"
    FUTURE = "future"


@dataclass(frozen=True)
class ProgressBreakdown:
    """Derived progress of a project."""

    overall: float
    per_phase: tuple[float, ...]
    phase_states: tuple[PhaseState, ...]
    total_phases: int
    current_phase: int
    is_company_project: bool


@dataclass(frozen=True)
class PhaseProgressWrite:
    """Where a progress write lands: always the current phase."""

    phase: int
    progress: float


def clamp_progress(value: float | None) -> float:
    """Clamp a percentage into [0, 100]. Missing or NaN values are 0."""
    if value is None:
        return 0.0
    value = float(value)
    if math.isnan(value):
        return 0.0
    return min(100.0, max(0.0, value))


def effective_phase_count(project: Project, default_client_phases: int = DEFAULT_CLIENT_PHASES) -> int:
    """Number of phases the project runs through.

    Company projects always have one phase, whatever total_phases says.
    """
    if project.is_company_project:
        return COMPANY_PHASES
    if project.total_phases is None or project.total_phases < 1:
        return default_client_phases
    return project.total_phases


def effective_current_phase(project: Project, total_phases: int) -> int:
    """Current phase, defaulting to 1 and held within [1, total_phases]."""
    current = project.current_phase or 1
    return min(total_phases, max(1, current))


def phase_state(phase_number: int, current_phase: int) -> PhaseState:
    if phase_number < current_phase:
        return PhaseState.COMPLETED
    if phase_number == current_phase:
        return PhaseState.CURRENT
    return PhaseState.FUTURE


def phase_contribution(phase_number: int, current_phase: int, current_phase_progress: float | None) -> float:
    """Completion percentage of one phase."""
    state = phase_state(phase_number, current_phase)
    if state == PhaseState.COMPLETED:
        return 100.0
    if state == PhaseState.CURRENT:
        return clamp_progress(current_phase_progress)
    return 0.0


def derive_progress(
    project: Project,
    *,
    default_client_phases: int = DEFAULT_CLIENT_PHASES,
) -> ProgressBreakdown:
    """Derive per-phase and overall progress for a project.

    Args:
        project: Snapshot to derive from
        default_client_phases: Phase count for client projects without one

    Returns:
        ProgressBreakdown computed only from total_phases, current_phase and
        current_phase_progress. The externally supplied live_progress is
        never consulted.

    Pure function -- deterministic, no side effects.
    """
    total = effective_phase_count(project, default_client_phases)

    if project.is_company_project:
        value = clamp_progress(project.current_phase_progress)
        return ProgressBreakdown(
            overall=value,
            per_phase=(value,),
            phase_states=(PhaseState.CURRENT,),
            total_phases=COMPANY_PHASES,
            current_phase=1,
            is_company_project=True,
        )

    current = effective_current_phase(project, total)
    phases = range(1, total + 1)
    per_phase = tuple(phase_contribution(p, current, project.current_phase_progress) for p in phases)

    return ProgressBreakdown(
        overall=sum(per_phase) / total,
        per_phase=per_phase,
        phase_states=tuple(phase_state(p, current) for p in phases),
        total_phases=total,
        current_phase=current,
        is_company_project=False,
    )


def plan_progress_write(
    project: Project,
    value: float | None,
    *,
    default_client_phases: int = DEFAULT_CLIENT_PHASES,
) -> PhaseProgressWrite:
    """Resolve a progress write onto the current phase.

    There is no way to write a non-current phase; advancing current_phase
    belongs to payment processing.
    """
    if project.is_company_project:
        phase = 1
    else:
        phase = effective_current_phase(project, effective_phase_count(project, default_client_phases))
    return PhaseProgressWrite(phase=phase, progress=clamp_progress(value))
