import pytest

from phasegate.lifecycle import (
    CLOSURE_MESSAGE,
    AccessLevel,
    RequirementAccess,
    evaluate_requirement_access,
    filter_requirements_by_phase,
    get_requirement_access,
)
from phasegate.project import (
    Project,
    Requirement,
    STLCPhaseName,
    Task,
    TestCase as SnapshotTestCase,
    TestCaseStatus as CaseStatus,
)

ANALYSIS = STLCPhaseName.REQUIREMENTS_ANALYSIS
PLANNING = STLCPhaseName.TEST_PLANNING
DEVELOPMENT = STLCPhaseName.TEST_CASE_DEVELOPMENT
EXECUTION = STLCPhaseName.TEST_EXECUTION
CLOSURE = STLCPhaseName.TEST_CLOSURE


def _req(phase: STLCPhaseName, *test_cases: str) -> Requirement:
    return Requirement(id="R", stlc_phase=phase, test_cases=test_cases)


class TestGetRequirementAccess:
    @pytest.mark.parametrize("current", [ANALYSIS, PLANNING])
    def test_early_phases_grant_full_access(self, current: STLCPhaseName) -> None:
        result = get_requirement_access(_req(ANALYSIS), current)

        assert result == RequirementAccess(
            access_level=AccessLevel.FULL,
            can_edit=True,
            can_view=True,
            can_delete=True,
        )

    def test_later_requirement_is_restricted(self) -> None:
        result = get_requirement_access(_req(EXECUTION), PLANNING)

        assert result.access_level == AccessLevel.RESTRICTED
        assert result.can_view
        assert not result.can_edit
        assert not result.can_delete
        assert result.message == f"Release gated to phase {EXECUTION}"

    def test_development_allows_edit_but_not_delete(self) -> None:
        result = get_requirement_access(_req(PLANNING), DEVELOPMENT)

        assert result.access_level == AccessLevel.FULL
        assert result.can_edit
        assert not result.can_delete

    def test_execution_with_linked_tests_is_full_read_only(self) -> None:
        result = get_requirement_access(_req(ANALYSIS, "tc1"), EXECUTION)

        assert result.access_level == AccessLevel.FULL
        assert result.can_view
        assert not result.can_edit
        assert not result.can_delete

    def test_execution_without_linked_tests_is_limited(self) -> None:
        result = get_requirement_access(_req(EXECUTION), EXECUTION)

        assert result.access_level == AccessLevel.LIMITED
        assert not result.can_edit
        assert result.message is None

    def test_closure_is_historical_only(self) -> None:
        result = get_requirement_access(_req(ANALYSIS, "tc1"), CLOSURE)

        assert result.access_level == AccessLevel.LIMITED
        assert result.can_view
        assert not result.can_edit
        assert not result.can_delete
        assert result.message == CLOSURE_MESSAGE

    def test_future_gate_wins_over_linked_tests(self) -> None:
        result = get_requirement_access(_req(CLOSURE, "tc1"), EXECUTION)

        assert result.access_level == AccessLevel.RESTRICTED

    @pytest.mark.parametrize("current", list(STLCPhaseName))
    @pytest.mark.parametrize("phase", list(STLCPhaseName))
    def test_every_requirement_is_viewable(
        self, phase: STLCPhaseName, current: STLCPhaseName
    ) -> None:
        assert get_requirement_access(_req(phase), current).can_view


class TestFilterRequirementsByPhase:
    def test_keeps_restricted_by_default(self) -> None:
        requirements = [
            Requirement(id="R1", stlc_phase=ANALYSIS),
            Requirement(id="R2", stlc_phase=CLOSURE),
        ]

        kept = filter_requirements_by_phase(requirements, PLANNING)

        assert [r.id for r in kept] == ["R1", "R2"]

    def test_hides_restricted_on_request(self) -> None:
        requirements = [
            Requirement(id="R1", stlc_phase=ANALYSIS),
            Requirement(id="R2", stlc_phase=CLOSURE),
            Requirement(id="R3", stlc_phase=PLANNING),
        ]

        kept = filter_requirements_by_phase(
            requirements, PLANNING, show_restricted=False
        )

        assert [r.id for r in kept] == ["R1", "R3"]


class TestEvaluateRequirementAccess:
    def test_uses_detected_phase_for_every_requirement(self) -> None:
        project = Project(
            id="p",
            tasks=(
                Task(
                    id="A",
                    test_cases=(
                        SnapshotTestCase(id="tc1", status=CaseStatus.PASSED),
                        SnapshotTestCase(id="tc2"),
                    ),
                ),
            ),
            requirements=(
                Requirement(id="R1", stlc_phase=ANALYSIS, test_cases=("tc1",)),
                Requirement(id="R2", stlc_phase=EXECUTION),
                Requirement(id="R3", stlc_phase=CLOSURE),
            ),
        )

        access = evaluate_requirement_access(project)

        assert list(access) == ["R1", "R2", "R3"]
        assert access["R1"].access_level == AccessLevel.FULL
        assert access["R2"].access_level == AccessLevel.LIMITED
        assert access["R3"].access_level == AccessLevel.RESTRICTED
