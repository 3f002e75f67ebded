"""Dependency graph engine.

This module builds dependency graphs from project snapshots, validates new
dependency edges so the graph stays acyclic, applies copy-on-write edge
mutations and classifies tasks as blocked or ready. Every function is pure:
it reads the snapshot it is given and returns new values.
"""

from collections.abc import Iterable
from dataclasses import replace
from types import MappingProxyType

import rustworkx as rx

from phasegate.exceptions import (
    CircularDependencyError,
    DependencyError,
    SelfReferenceError,
    TaskNotFoundError,
)
from phasegate.graph._models import DependencyCheck, DependencyGraph, DependencyNode
from phasegate.project import Project, Task, TaskStatus

__all__ = [
    "add_dependency",
    "build_graph",
    "can_add_dependency",
    "execution_order",
    "find_cycle",
    "get_blocked_tasks",
    "get_dependencies",
    "get_dependents",
    "get_ready_tasks",
    "remove_dependency",
]


# =============================================================================
# Graph Construction
# =============================================================================


def build_graph(tasks: Iterable[Task]) -> DependencyGraph:
    """Build a dependency graph from a task list.

    Each task's declared dependencies become its outgoing edges, and each
    task is recorded as a dependent of every known task it depends on.
    Duplicate declarations collapse to one edge.

    Args:
        tasks: Tasks to include in the graph.

    Returns:
        The dependency graph.
    """
    task_list = list(tasks)
    dependencies: dict[str, list[str]] = {}
    dependents: dict[str, list[str]] = {}

    for task in task_list:
        declared = dependencies.setdefault(task.id, [])
        for dep_id in task.dependencies:
            if dep_id not in declared:
                declared.append(dep_id)
        _ = dependents.setdefault(task.id, [])

    for task in task_list:
        for dep_id in dependencies[task.id]:
            dep_dependents = dependents.get(dep_id)
            if dep_dependents is not None and task.id not in dep_dependents:
                dep_dependents.append(task.id)

    nodes = {
        task_id: DependencyNode(
            task_id=task_id,
            dependencies=tuple(deps),
            dependents=tuple(dependents[task_id]),
        )
        for task_id, deps in dependencies.items()
    }
    return DependencyGraph(nodes=MappingProxyType(nodes))


# =============================================================================
# Queries
# =============================================================================


def get_dependencies(task_id: str, project: Project) -> list[Task]:
    """Return the tasks a task directly depends on.

    Dependencies that are not part of the snapshot are skipped.

    Args:
        task_id: The dependent task.
        project: The project snapshot.

    Returns:
        Dependency tasks in snapshot order, or an empty list if the task is
        unknown.
    """
    task = project.get_task(task_id)
    if task is None or not task.dependencies:
        return []

    wanted = set(task.dependencies)
    return [t for t in project.tasks if t.id in wanted]


def get_dependents(task_id: str, project: Project) -> list[Task]:
    """Return the tasks that directly depend on a task.

    Args:
        task_id: The task depended upon.
        project: The project snapshot.

    Returns:
        Dependent tasks in snapshot order.
    """
    return [t for t in project.tasks if task_id in t.dependencies]


def get_blocked_tasks(project: Project) -> list[Task]:
    """Return tasks with at least one known dependency that is not done.

    Args:
        project: The project snapshot.

    Returns:
        Blocked tasks in snapshot order.
    """
    statuses = _status_index(project)
    return [
        task
        for task in project.tasks
        if any(
            dep_id in statuses and statuses[dep_id] != TaskStatus.DONE
            for dep_id in task.dependencies
        )
    ]


def get_ready_tasks(project: Project) -> list[Task]:
    """Return tasks whose known dependencies are all done.

    Tasks without dependencies are always ready.

    Args:
        project: The project snapshot.

    Returns:
        Ready tasks in snapshot order.
    """
    statuses = _status_index(project)
    return [
        task
        for task in project.tasks
        if all(
            statuses[dep_id] == TaskStatus.DONE
            for dep_id in task.dependencies
            if dep_id in statuses
        )
    ]


def find_cycle(project: Project) -> tuple[str, ...]:
    """Find a dependency cycle in a snapshot supplied from outside.

    Args:
        project: The project snapshot.

    Returns:
        Task IDs forming the cycle, or an empty tuple if there is none.
    """
    return build_graph(project.tasks).find_cycle()


def execution_order(project: Project) -> tuple[str, ...]:
    """Order task IDs so every task follows all of its dependencies.

    Args:
        project: The project snapshot.

    Returns:
        Task IDs in execution order, ties broken by snapshot order.

    Raises:
        CircularDependencyError: If the snapshot already contains a cycle.
    """
    graph = build_graph(project.tasks)
    cycle = graph.find_cycle()
    if cycle:
        msg = f"Circular dependency detected: {' -> '.join(cycle)}"
        raise CircularDependencyError(msg, cycle=list(cycle))

    try:
        return graph.topological_order()
    except rx.DAGHasCycle as e:
        msg = "Circular dependency detected"
        raise CircularDependencyError(msg) from e


# =============================================================================
# Validation and Mutation
# =============================================================================


def can_add_dependency(
    task_id: str, dependency_id: str, project: Project
) -> DependencyCheck:
    """Check whether ``task_id`` may depend on ``dependency_id``.

    The edge is rejected if either task is not part of the snapshot, if it
    is a self-dependency, or if ``dependency_id`` already depends on
    ``task_id`` transitively, since the new edge would then close a cycle.

    Args:
        task_id: The task that would receive the dependency.
        dependency_id: The task it would depend on.
        project: The project snapshot.

    Returns:
        The check outcome, with a reason when rejected.
    """
    try:
        _validate_dependency(task_id, dependency_id, build_graph(project.tasks))
    except TaskNotFoundError as e:
        # KeyError quotes its message in str(), so read it from args
        return DependencyCheck(
            can_add=False, reason=e.args[0], missing_task=e.task_id
        )
    except CircularDependencyError as e:
        return DependencyCheck(
            can_add=False, reason=str(e), cycle=tuple(e.cycle or ())
        )
    except DependencyError as e:
        return DependencyCheck(can_add=False, reason=str(e))
    return DependencyCheck(can_add=True)


def add_dependency(task_id: str, dependency_id: str, project: Project) -> Project:
    """Return a snapshot where ``task_id`` depends on ``dependency_id``.

    Adding a dependency that is already declared leaves the task unchanged.

    Args:
        task_id: The task that receives the dependency.
        dependency_id: The task it depends on.
        project: The project snapshot.

    Returns:
        A new project snapshot.

    Raises:
        SelfReferenceError: If the task would depend on itself.
        CircularDependencyError: If the edge would close a cycle.
        TaskNotFoundError: If either task is not part of the snapshot.
    """
    _validate_dependency(task_id, dependency_id, build_graph(project.tasks))

    tasks = tuple(
        replace(task, dependencies=(*task.dependencies, dependency_id))
        if task.id == task_id and dependency_id not in task.dependencies
        else task
        for task in project.tasks
    )
    return replace(project, tasks=tasks)


def remove_dependency(task_id: str, dependency_id: str, project: Project) -> Project:
    """Return a snapshot where ``task_id`` no longer depends on ``dependency_id``.

    Args:
        task_id: The task losing the dependency.
        dependency_id: The dependency to drop.
        project: The project snapshot.

    Returns:
        A new project snapshot.

    Raises:
        TaskNotFoundError: If ``task_id`` is not part of the snapshot.
    """
    if not project.has_task(task_id):
        msg = f"Task not found: {task_id}"
        raise TaskNotFoundError(msg, task_id=task_id)

    tasks = tuple(
        replace(
            task,
            dependencies=tuple(d for d in task.dependencies if d != dependency_id),
        )
        if task.id == task_id
        else task
        for task in project.tasks
    )
    return replace(project, tasks=tasks)


def _validate_dependency(
    task_id: str, dependency_id: str, graph: DependencyGraph
) -> None:
    for known in (task_id, dependency_id):
        if known not in graph:
            msg = f"Task not found: {known}"
            raise TaskNotFoundError(msg, task_id=known)

    if task_id == dependency_id:
        msg = f"Task {task_id} cannot depend on itself (self-dependency)"
        raise SelfReferenceError(msg, task_id=task_id, dependency_id=dependency_id)

    # The new edge is task -> dependency, so a cycle exists iff the
    # dependency already reaches the task through its own dependencies.
    path = graph.path(dependency_id, task_id)
    if path is not None:
        cycle = [task_id, *path]
        msg = (
            f"Adding {dependency_id} as a dependency of {task_id} would create "
            f"a circular dependency: {' -> '.join(cycle)}"
        )
        raise CircularDependencyError(
            msg, task_id=task_id, dependency_id=dependency_id, cycle=cycle
        )


def _status_index(project: Project) -> dict[str, TaskStatus]:
    return {task.id: task.status for task in project.tasks}
