"""STLC phase classification."""

from dataclasses import dataclass

from phasegate.project import Project, STLCPhaseName


@dataclass(frozen=True, slots=True)
class STLCCounts:
    """Counters the STLC classifier works from.

    Attributes:
        tasks: Number of tasks, bugs included.
        documents: Number of documents.
        test_cases: Number of test cases.
        executed: Test cases that have been run.
        passed: Test cases whose last run passed.
    """

    tasks: int = 0
    documents: int = 0
    test_cases: int = 0
    executed: int = 0
    passed: int = 0

    @classmethod
    def from_project(cls, project: Project) -> "STLCCounts":
        """Count tasks, documents and test case outcomes in a snapshot."""
        test_cases = [tc for task in project.tasks for tc in task.test_cases]
        return cls(
            tasks=len(project.tasks),
            documents=len(project.documents),
            test_cases=len(test_cases),
            executed=sum(1 for tc in test_cases if tc.executed),
            passed=sum(1 for tc in test_cases if tc.passed),
        )


def classify_stlc_phase(counts: STLCCounts) -> STLCPhaseName:
    """Classify a project into an STLC phase.

    Rules are checked top-down and the first match wins:

    1. No tasks and no documents: requirements analysis.
    2. No test cases: test planning.
    3. No test case executed: test case development.
    4. Some test cases not executed, or some executed ones not passed:
       test execution.
    5. Every test case executed and passed: test closure.

    Args:
        counts: Snapshot counters.

    Returns:
        The STLC phase.
    """
    if counts.tasks == 0 and counts.documents == 0:
        return STLCPhaseName.REQUIREMENTS_ANALYSIS

    if counts.test_cases == 0:
        return STLCPhaseName.TEST_PLANNING

    if counts.executed == 0:
        return STLCPhaseName.TEST_CASE_DEVELOPMENT

    if counts.executed < counts.test_cases or counts.passed < counts.executed:
        return STLCPhaseName.TEST_EXECUTION

    if counts.executed == counts.test_cases == counts.passed and counts.test_cases > 0:
        return STLCPhaseName.TEST_CLOSURE

    # Counters that do not describe a real snapshot (passed > executed, ...)
    if counts.tasks > 0 and counts.test_cases == 0:
        return STLCPhaseName.TEST_PLANNING
    return STLCPhaseName.REQUIREMENTS_ANALYSIS


def detect_stlc_phase(project: Project) -> STLCPhaseName:
    """Detect the current STLC phase of a project snapshot."""
    return classify_stlc_phase(STLCCounts.from_project(project))


def stlc_phase_order(phase: STLCPhaseName) -> int:
    """Return the one-based position of an STLC phase."""
    return phase.order


def is_stlc_phase_before(phase: STLCPhaseName, other: STLCPhaseName) -> bool:
    """Return True if ``phase`` comes strictly before ``other``."""
    return phase.is_before(other)


def is_stlc_phase_after(phase: STLCPhaseName, other: STLCPhaseName) -> bool:
    """Return True if ``phase`` comes strictly after ``other``."""
    return phase.is_after(other)
