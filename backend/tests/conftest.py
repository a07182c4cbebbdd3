"""Shared test fixtures for all test groups."""

from datetime import UTC, datetime

import pytest

from lifecycle.domain.project import DifficultyLevel, PaymentStage, Project, ProjectStatus

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    """Fixed evaluation instant for deadline checks."""
    return NOW


@pytest.fixture
def client_project():
    """In-progress client project owned by unit head 7, in phase 2 of 4."""
    return Project(
        id=101,
        status=ProjectStatus.IN_PROGRESS,
        payment_stage=PaymentStage.IN_BETWEEN,
        unit_head_id=7,
        team_id=3,
        difficulty_level=DifficultyLevel.MEDIUM,
        deadline=datetime(2026, 6, 1, tzinfo=UTC),
        description="Storefront rebuild",
        live_progress=32.5,
        total_phases=4,
        current_phase=2,
        current_phase_progress=30,
        cracked_lead_id=55,
    )


@pytest.fixture
def unassigned_project():
    """Freshly created client project: no status, team, deadline or difficulty yet."""
    return Project(
        id=102,
        status=None,
        payment_stage=PaymentStage.INITIAL,
        unit_head_id=7,
        cracked_lead_id=56,
    )


@pytest.fixture
def company_project():
    """Internal company project (no originating lead)."""
    return Project(
        id=103,
        status=ProjectStatus.IN_PROGRESS,
        unit_head_id=9,
        current_phase_progress=64,
    )
