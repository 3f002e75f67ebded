# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, TC003
"""Dependency graph commands."""

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter

from phasegate.exceptions import CircularDependencyError
from phasegate.graph import (
    build_graph,
    can_add_dependency,
    execution_order,
    get_blocked_tasks,
    get_ready_tasks,
)
from phasegate.project import Project

from ._context import CLIContext, OutputFormat
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    format_table,
    load_snapshot,
)

__all__ = ["deps_app", "graph"]

deps_app = App(name="deps", help="Validate task dependency edges", help_on_error=True)


def _graph_to_dict(project: Project) -> FormattableData:
    graph = build_graph(project.tasks)
    try:
        order: list[str] | None = list(execution_order(project))
        cycle: list[str] = []
    except CircularDependencyError as e:
        order = None
        cycle = e.cycle or []

    return {
        "nodes": [
            {
                "task_id": node.task_id,
                "dependencies": list(node.dependencies),
                "dependents": list(node.dependents),
            }
            for node in graph.nodes.values()
        ],
        "ready": [task.id for task in get_ready_tasks(project)],
        "blocked": [task.id for task in get_blocked_tasks(project)],
        "execution_order": order,
        "cycle": cycle,
    }


def graph(
    snapshot: Path,
    /,
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the task dependency graph with ready and blocked tasks

    Exits with a validation error if the snapshot already contains a cycle.

    Args:
        snapshot: Path to the project snapshot (JSON).
        format_: Output format.
    """
    logger = CLIContext.get_current().get_logger("graph")
    project = load_snapshot(snapshot, logger)
    data = _graph_to_dict(project)

    if format_ == OutputFormat.JSON:
        print(format_json(data))
    else:
        ready = set(data["ready"])
        rows = [
            [
                node["task_id"],
                ", ".join(node["dependencies"]) or "-",
                ", ".join(node["dependents"]) or "-",
                "ready" if node["task_id"] in ready else "blocked",
            ]
            for node in data["nodes"]
        ]
        print(format_table(["Task", "Depends on", "Dependents", "State"], rows))
        if data["execution_order"] is not None:
            print(f"\nExecution order: {' -> '.join(data['execution_order'])}")

    if data["cycle"]:
        logger.warning("cycle_detected", cycle=data["cycle"])
        msg = f"Circular dependency detected: {' -> '.join(data['cycle'])}"
        exit_with_error(msg, ExitCode.VALIDATION_ERROR)


@deps_app.command(name="check")
def check(
    snapshot: Path,
    task_id: str,
    dependency_id: str,
    /,
    *,
    format_: Annotated[
        OutputFormat,
        Parameter(name=["--format", "-f"], help="Output format"),
    ] = OutputFormat.TABLE,
) -> None:
    """Check whether a task may depend on another task

    Exits with a validation error when the edge would be rejected.

    Args:
        snapshot: Path to the project snapshot (JSON).
        task_id: The task that would receive the dependency.
        dependency_id: The task it would depend on.
        format_: Output format.
    """
    logger = CLIContext.get_current().get_logger("deps check")
    project = load_snapshot(snapshot, logger)

    result = can_add_dependency(task_id, dependency_id, project)
    if result.missing_task is not None:
        exit_with_error(result.reason or "Task not found", ExitCode.NOT_FOUND)

    if format_ == OutputFormat.JSON:
        print(
            format_json(
                {
                    "task_id": task_id,
                    "dependency_id": dependency_id,
                    "can_add": result.can_add,
                    "reason": result.reason,
                    "cycle": list(result.cycle),
                }
            )
        )
    elif result.can_add:
        print(f"OK: {task_id} may depend on {dependency_id}")
    else:
        print(f"Rejected: {result.reason}")

    if not result.can_add:
        logger.info(
            "dependency_rejected",
            task_id=task_id,
            dependency_id=dependency_id,
            reason=result.reason,
        )
        raise SystemExit(ExitCode.VALIDATION_ERROR)
