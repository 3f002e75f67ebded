"""Per-task SDLC position and next-step hints."""

from phasegate.project import PhaseName, Task, TaskStatus, TestCaseStatus

NEXT_STEP_WRITE_BDD = "Write BDD scenarios to define the expected behavior"
NEXT_STEP_GENERATE_TESTS = "Generate test cases to validate the feature"
NEXT_STEP_EXECUTE_TESTS = "Execute the test cases to validate the implementation"
NEXT_STEP_MARK_DONE = "All test cases passed; mark the task as done"
NEXT_STEP_FIX_FAILURES = "Some test cases failed; review and fix the reported issues"


def get_task_phase(task: Task) -> PhaseName:
    """Place a single task in the SDLC.

    Tasks that are started or done are placed by how far their testing has
    come; other tasks only reach analysis once they carry BDD scenarios.

    Args:
        task: The task to place.

    Returns:
        The phase the task is in.
    """
    if task.status in (TaskStatus.DONE, TaskStatus.IN_PROGRESS):
        if any(tc.executed for tc in task.test_cases):
            return PhaseName.TEST
        if task.test_cases:
            return PhaseName.DESIGN

    if task.bdd_scenarios:
        return PhaseName.ANALYSIS
    return PhaseName.REQUEST


def get_next_step_for_task(task: Task) -> str | None:
    """Suggest the next action for a task.

    Args:
        task: The task to advise on.

    Returns:
        A short suggestion, or None when the task is done or no suggestion
        applies.
    """
    if task.is_done:
        return None
    if not task.bdd_scenarios:
        return NEXT_STEP_WRITE_BDD
    if not task.test_cases:
        return NEXT_STEP_GENERATE_TESTS
    if any(not tc.executed for tc in task.test_cases):
        return NEXT_STEP_EXECUTE_TESTS
    if all(tc.passed for tc in task.test_cases):
        return NEXT_STEP_MARK_DONE
    if any(tc.status == TestCaseStatus.FAILED for tc in task.test_cases):
        return NEXT_STEP_FIX_FAILURES
    return None
