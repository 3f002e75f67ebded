"""Data models for project snapshots.

This module defines the enums and dataclasses that make up a project
snapshot: tasks with their test cases and BDD scenarios, documents, SDLC
phases and requirements. All models are frozen dataclasses with slots, and
every collection is a tuple, so a snapshot can only change by building a new
one.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Self

# =============================================================================
# Status Enums
# =============================================================================


class TaskStatus(StrEnum):
    """Task workflow status values.

    ``BLOCKED`` is only set by integrations; it counts as not done.
    """

    TO_DO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"
    BLOCKED = "Blocked"


class TestCaseStatus(StrEnum):
    """Test case execution status values."""

    NOT_RUN = "Not Run"
    PASSED = "Passed"
    FAILED = "Failed"
    BLOCKED = "Blocked"


class PhaseStatus(StrEnum):
    """SDLC phase status values.

    ``COMPLETED`` doubles as the sentinel reported as the current phase once
    no phase is in progress.
    """

    NOT_STARTED = "Não Iniciado"
    IN_PROGRESS = "Em Andamento"
    COMPLETED = "Concluído"


# =============================================================================
# Type Enums
# =============================================================================


class TaskType(StrEnum):
    """Task categorization types.

    Bugs are excluded from delivery counts and never expected to carry
    test cases.
    """

    EPIC = "Epic"
    STORY = "História"
    TASK = "Tarefa"
    BUG = "Bug"


class BugSeverity(StrEnum):
    """Bug severity values, most severe first."""

    CRITICAL = "Crítico"
    HIGH = "Alto"
    MEDIUM = "Médio"
    LOW = "Baixo"


# =============================================================================
# Phase Enums
# =============================================================================


class PhaseName(StrEnum):
    """The ten SDLC phases in delivery order."""

    REQUEST = "Request"
    ANALYSIS = "Analysis"
    DESIGN = "Design"
    ANALYSIS_AND_CODE = "Analysis and Code"
    BUILD = "Build"
    TEST = "Test"
    RELEASE = "Release"
    DEPLOY = "Deploy"
    OPERATE = "Operate"
    MONITOR = "Monitor"

    @property
    def order(self) -> int:
        """One-based position of the phase in delivery order."""
        return _PHASE_ORDER[self]


class STLCPhaseName(StrEnum):
    """The five STLC phases in testing order.

    Comparisons between phases go through ``order``; member values are the
    user-facing names and carry no ordering of their own.
    """

    REQUIREMENTS_ANALYSIS = "Análise de Requisitos"
    TEST_PLANNING = "Planejamento de Testes"
    TEST_CASE_DEVELOPMENT = "Desenvolvimento de Casos de Teste"
    TEST_EXECUTION = "Execução de Testes"
    TEST_CLOSURE = "Encerramento do Teste"

    @property
    def order(self) -> int:
        """One-based position of the phase in testing order."""
        return _STLC_ORDER[self]

    def is_before(self, other: Self) -> bool:
        """Return True if this phase comes strictly before ``other``."""
        return self.order < other.order

    def is_after(self, other: Self) -> bool:
        """Return True if this phase comes strictly after ``other``."""
        return self.order > other.order


_PHASE_ORDER: dict[PhaseName, int] = {
    name: index for index, name in enumerate(PhaseName, start=1)
}
_STLC_ORDER: dict[STLCPhaseName, int] = {
    name: index for index, name in enumerate(STLCPhaseName, start=1)
}


# =============================================================================
# Value Objects
# =============================================================================


@dataclass(frozen=True, slots=True)
class TestCase:
    """Test case attached to a task.

    Attributes:
        id: Unique test case identifier.
        status: Latest execution status.
        is_automated: Whether the test case is automated.
        description: Free-form description.
    """

    id: str
    status: TestCaseStatus = TestCaseStatus.NOT_RUN
    is_automated: bool = False
    description: str = ""

    @property
    def executed(self) -> bool:
        """Whether the test case has been run at least once."""
        return self.status != TestCaseStatus.NOT_RUN

    @property
    def passed(self) -> bool:
        """Whether the last run passed."""
        return self.status == TestCaseStatus.PASSED


@dataclass(frozen=True, slots=True)
class BddScenario:
    """Given/When/Then scenario describing a task's expected behavior."""

    id: str
    title: str = ""


@dataclass(frozen=True, slots=True)
class Document:
    """Document attached to a project."""

    name: str
    content: str = ""


# =============================================================================
# Entities
# =============================================================================


@dataclass(frozen=True, slots=True)
class Task:
    """Unit of delivery work.

    Attributes:
        id: Unique task identifier.
        status: Workflow status.
        task_type: Task category.
        title: Human-readable title.
        dependencies: IDs of tasks this task depends on, in declaration order.
        test_cases: Test cases attached to the task.
        bdd_scenarios: BDD scenarios attached to the task.
        severity: Severity for bugs.
        parent_id: ID of the parent task (e.g. an epic).
    """

    id: str
    status: TaskStatus = TaskStatus.TO_DO
    task_type: TaskType = TaskType.TASK
    title: str = ""
    dependencies: tuple[str, ...] = ()
    test_cases: tuple[TestCase, ...] = ()
    bdd_scenarios: tuple[BddScenario, ...] = ()
    severity: BugSeverity | None = None
    parent_id: str | None = None

    @property
    def is_done(self) -> bool:
        """Whether the task has reached the done status."""
        return self.status == TaskStatus.DONE

    @property
    def is_bug(self) -> bool:
        """Whether the task is a bug."""
        return self.task_type == TaskType.BUG


@dataclass(frozen=True, slots=True)
class Phase:
    """SDLC phase with its derived status.

    Attributes:
        name: Phase name.
        status: Derived phase status.
        summary: Optional summary supplied by the surrounding application.
        test_types: Test types associated with the phase.
    """

    name: PhaseName
    status: PhaseStatus = PhaseStatus.NOT_STARTED
    summary: str | None = None
    test_types: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Requirement:
    """Requirement tracked against the testing lifecycle.

    Attributes:
        id: Unique requirement identifier.
        stlc_phase: STLC phase during which the requirement is actioned.
        status: Free-form status maintained by the surrounding application.
        title: Human-readable title.
        test_cases: IDs of linked test cases.
    """

    id: str
    stlc_phase: STLCPhaseName
    status: str = ""
    title: str = ""
    test_cases: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Project:
    """Immutable project snapshot.

    Attributes:
        id: Project identifier.
        name: Project name.
        description: Project description.
        tasks: Tasks in the project.
        documents: Documents attached to the project.
        phases: SDLC phases as last stored by the surrounding application.
        requirements: Requirements tracked for the project.
    """

    id: str
    name: str = ""
    description: str = ""
    tasks: tuple[Task, ...] = ()
    documents: tuple[Document, ...] = ()
    phases: tuple[Phase, ...] = ()
    requirements: tuple[Requirement, ...] = ()

    def get_task(self, task_id: str) -> Task | None:
        """Return the task with the given ID, or None."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def has_task(self, task_id: str) -> bool:
        """Return True if the snapshot contains a task with the given ID."""
        return self.get_task(task_id) is not None
