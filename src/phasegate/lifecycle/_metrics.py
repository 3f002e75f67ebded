"""Project metrics derived from a snapshot.

The counters computed here feed the SDLC completion predicates and the
reporting views of the surrounding application.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from phasegate.project import BugSeverity, Project, TaskType, TestCase


@dataclass(frozen=True, slots=True)
class ModuleQuality:
    """Pass rate of the test cases under one epic.

    Attributes:
        module: First word of the epic title.
        quality: Percentage of passed test cases, 100 when there are none.
    """

    module: str
    quality: int


@dataclass(frozen=True, slots=True)
class ProjectMetrics:
    """Aggregate counters for a project snapshot.

    Percentages are integers rounded half up.

    Attributes:
        total_tasks: Number of non-bug tasks.
        done_tasks: Number of non-bug tasks that are done.
        tasks_with_test_cases: Non-bug tasks with at least one test case.
        total_documents: Number of documents.
        total_test_cases: Test cases across all tasks.
        executed_test_cases: Test cases that have been run.
        passed_test_cases: Test cases whose last run passed.
        automated_test_cases: Test cases marked as automated.
        has_bdd_scenarios: Whether any task carries BDD scenarios.
        test_coverage: Share of non-bug tasks with test cases.
        automation_ratio: Share of automated test cases.
        test_pass_rate: Share of executed test cases that passed.
        open_bugs: Bugs that are not done.
        closed_bugs: Bugs that are done.
        bugs_by_severity: Open bugs per severity; a missing severity counts
            as medium.
        quality_by_module: Pass rate per epic.
    """

    total_tasks: int = 0
    done_tasks: int = 0
    tasks_with_test_cases: int = 0
    total_documents: int = 0
    total_test_cases: int = 0
    executed_test_cases: int = 0
    passed_test_cases: int = 0
    automated_test_cases: int = 0
    has_bdd_scenarios: bool = False
    test_coverage: int = 0
    automation_ratio: int = 0
    test_pass_rate: int = 0
    open_bugs: int = 0
    closed_bugs: int = 0
    bugs_by_severity: Mapping[BugSeverity, int] = field(
        default_factory=lambda: MappingProxyType(dict.fromkeys(BugSeverity, 0))
    )
    quality_by_module: tuple[ModuleQuality, ...] = ()

    @property
    def has_documents_or_tasks(self) -> bool:
        """Whether the project has any document or task, bugs included."""
        return self.total_documents > 0 or self.total_tasks + self.total_bugs > 0

    @property
    def total_bugs(self) -> int:
        """Number of bugs, open or closed."""
        return self.open_bugs + self.closed_bugs

    @property
    def all_tasks_done(self) -> bool:
        """Whether there is at least one non-bug task and all are done."""
        return self.total_tasks > 0 and self.done_tasks == self.total_tasks

    @property
    def all_tests_executed(self) -> bool:
        """Whether there is at least one test case and all have been run."""
        return (
            self.total_test_cases > 0
            and self.executed_test_cases == self.total_test_cases
        )

    @property
    def no_open_bugs(self) -> bool:
        """Whether every bug is done."""
        return self.open_bugs == 0


def compute_project_metrics(project: Project) -> ProjectMetrics:
    """Compute aggregate metrics for a project snapshot.

    Args:
        project: The project snapshot.

    Returns:
        The project metrics.
    """
    test_cases = [tc for task in project.tasks for tc in task.test_cases]
    work = [task for task in project.tasks if not task.is_bug]
    bugs = [task for task in project.tasks if task.is_bug]
    open_bugs = [bug for bug in bugs if not bug.is_done]

    total_tasks = len(work)
    tasks_with_test_cases = sum(1 for task in work if task.test_cases)
    total_test_cases = len(test_cases)
    executed = sum(1 for tc in test_cases if tc.executed)
    passed = sum(1 for tc in test_cases if tc.passed)
    automated = sum(1 for tc in test_cases if tc.is_automated)

    by_severity = dict.fromkeys(BugSeverity, 0)
    for bug in open_bugs:
        by_severity[bug.severity or BugSeverity.MEDIUM] += 1

    return ProjectMetrics(
        total_tasks=total_tasks,
        done_tasks=sum(1 for task in work if task.is_done),
        tasks_with_test_cases=tasks_with_test_cases,
        total_documents=len(project.documents),
        total_test_cases=total_test_cases,
        executed_test_cases=executed,
        passed_test_cases=passed,
        automated_test_cases=automated,
        has_bdd_scenarios=any(task.bdd_scenarios for task in project.tasks),
        test_coverage=percentage(tasks_with_test_cases, total_tasks),
        automation_ratio=percentage(automated, total_test_cases),
        test_pass_rate=percentage(passed, executed),
        open_bugs=len(open_bugs),
        closed_bugs=len(bugs) - len(open_bugs),
        bugs_by_severity=MappingProxyType(by_severity),
        quality_by_module=_quality_by_module(project),
    )


def percentage(part: int, whole: int) -> int:
    """Return ``part`` as a percentage of ``whole``, rounded half up.

    Returns 0 when ``whole`` is 0.
    """
    if whole <= 0:
        return 0
    return math.floor(part * 100 / whole + 0.5)


def _quality_by_module(project: Project) -> tuple[ModuleQuality, ...]:
    modules: list[ModuleQuality] = []
    for epic in project.tasks:
        if epic.task_type != TaskType.EPIC:
            continue
        children: list[TestCase] = [
            tc
            for task in project.tasks
            if task.parent_id == epic.id
            for tc in task.test_cases
        ]
        passed = sum(1 for tc in children if tc.passed)
        quality = percentage(passed, len(children)) if children else 100
        name = epic.title.split(" ")[0] if epic.title else epic.id
        modules.append(ModuleQuality(module=name, quality=quality))

    return tuple(modules) or (ModuleQuality(module="Geral", quality=100),)
