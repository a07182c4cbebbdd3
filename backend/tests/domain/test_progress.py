"""Tests for deterministic progress derivation."""
import math
from dataclasses import replace

import pytest

from lifecycle.domain.progress import (
    PhaseState,
    clamp_progress,
    derive_progress,
    effective_phase_count,
    phase_state,
    plan_progress_write,
)
from lifecycle.domain.project import Project

pytestmark = pytest.mark.unit

CLIENT = Project(cracked_lead_id=55, total_phases=4, current_phase=2, current_phase_progress=30)
COMPANY = Project(current_phase_progress=64)


class TestClampProgress:
    @pytest.mark.parametrize(
        "value,expected",
        [(-50, 0), (0, 0), (50, 50), (100, 100), (150, 100), (None, 0), (math.nan, 0), (12.5, 12.5)],
    )
    def test_clamps_into_range(self, value, expected):
        assert clamp_progress(value) == expected


class TestClientProjects:
    """Multi-phase projects derived from phase position and phase progress."""

    def test_phase_breakdown(self):
        """Phase 2 of 4 at 30% gives [100, 30, 0, 0]."""
        breakdown = derive_progress(CLIENT)
        assert breakdown.per_phase == (100, 30, 0, 0)
        assert breakdown.overall == 32.5
        assert breakdown.total_phases == 4
        assert breakdown.current_phase == 2
        assert breakdown.is_company_project is False

    @pytest.mark.parametrize(
        "raw,expected",
        [(-50, 0), (0, 0), (50, 50), (100, 100), (150, 100)],
    )
    def test_current_phase_contribution_is_clamped(self, raw, expected):
        breakdown = derive_progress(replace(CLIENT, current_phase_progress=raw))
        assert breakdown.per_phase[1] == expected
        assert 0 <= breakdown.overall <= 100

    def test_defaults_to_four_phases(self):
        breakdown = derive_progress(replace(CLIENT, total_phases=None))
        assert breakdown.total_phases == 4
        assert len(breakdown.per_phase) == 4

    def test_default_phase_count_is_configurable(self):
        breakdown = derive_progress(replace(CLIENT, total_phases=None), default_client_phases=6)
        assert breakdown.per_phase == (100, 30, 0, 0, 0, 0)

    def test_current_phase_defaults_to_first(self):
        breakdown = derive_progress(replace(CLIENT, current_phase=None, current_phase_progress=45))
        assert breakdown.per_phase == (45, 0, 0, 0)

    def test_missing_phase_progress_counts_as_zero(self):
        breakdown = derive_progress(replace(CLIENT, current_phase=3, current_phase_progress=None))
        assert breakdown.per_phase == (100, 100, 0, 0)
        assert breakdown.overall == 50

    def test_current_phase_beyond_total_is_held_at_last(self):
        breakdown = derive_progress(replace(CLIENT, total_phases=3, current_phase=5, current_phase_progress=40))
        assert breakdown.current_phase == 3
        assert breakdown.per_phase == (100, 100, 40)

    def test_final_phase_complete(self):
        breakdown = derive_progress(replace(CLIENT, current_phase=4, current_phase_progress=100))
        assert breakdown.overall == 100

    def test_supplied_aggregate_is_not_consulted(self):
        """Breakdown depends only on phase counters, never on live_progress."""
        assert derive_progress(replace(CLIENT, live_progress=99)) == derive_progress(replace(CLIENT, live_progress=None))

    def test_phase_states(self):
        breakdown = derive_progress(CLIENT)
        assert breakdown.phase_states == (
            PhaseState.COMPLETED,
            PhaseState.CURRENT,
            PhaseState.FUTURE,
            PhaseState.FUTURE,
        )


class TestCompanyProjects:
    """Company projects are a single implicit phase."""

    def test_overall_equals_phase_progress(self):
        breakdown = derive_progress(COMPANY)
        assert breakdown.overall == 64
        assert breakdown.per_phase == (64,)
        assert breakdown.is_company_project is True

    def test_supplied_phase_count_ignored(self):
        project = replace(COMPANY, total_phases=6, current_phase=3)
        assert effective_phase_count(project) == 1
        assert derive_progress(project).total_phases == 1
        assert derive_progress(project).current_phase == 1

    @pytest.mark.parametrize("raw,expected", [(-50, 0), (150, 100)])
    def test_clamped(self, raw, expected):
        assert derive_progress(replace(COMPANY, current_phase_progress=raw)).overall == expected


class TestPhaseCount:
    def test_client_with_total(self):
        assert effective_phase_count(CLIENT) == 4

    def test_client_with_invalid_total_uses_default(self):
        assert effective_phase_count(replace(CLIENT, total_phases=0)) == 4


class TestPhaseState:
    @pytest.mark.parametrize(
        "phase,current,expected",
        [(1, 2, PhaseState.COMPLETED), (2, 2, PhaseState.CURRENT), (3, 2, PhaseState.FUTURE)],
    )
    def test_relative_position(self, phase, current, expected):
        assert phase_state(phase, current) == expected


class TestPlanProgressWrite:
    """Progress writes always land on the current phase."""

    def test_targets_current_phase(self):
        write = plan_progress_write(replace(CLIENT, current_phase=3), 55)
        assert write.phase == 3
        assert write.progress == 55

    def test_value_clamped(self):
        assert plan_progress_write(CLIENT, 120).progress == 100
        assert plan_progress_write(CLIENT, -5).progress == 0

    def test_company_project_targets_single_phase(self):
        assert plan_progress_write(replace(COMPANY, current_phase=4), 10).phase == 1

    def test_missing_current_phase_targets_first(self):
        assert plan_progress_write(replace(CLIENT, current_phase=None), 10).phase == 1
