# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
# pyright: reportExplicitAny=false
"""Project snapshot loading.

This module turns the JSON snapshot emitted by the surrounding application
into an immutable :class:`Project`. Keys follow the application's camelCase
wire format (``testCases``, ``bddScenarios``, ``stlcPhase``, ...). Snapshots
are only read here; writing them back belongs to the caller.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, TypeVar

import orjson

from phasegate.exceptions import SnapshotIOError, SnapshotParseError
from phasegate.project._models import (
    BddScenario,
    BugSeverity,
    Document,
    Phase,
    PhaseName,
    PhaseStatus,
    Project,
    Requirement,
    STLCPhaseName,
    Task,
    TaskStatus,
    TaskType,
    TestCase,
    TestCaseStatus,
)

__all__ = ["load_project", "project_from_dict"]


def load_project(path: Path) -> Project:
    """Read a project snapshot from a JSON file.

    Args:
        path: Path to the JSON snapshot.

    Returns:
        The parsed project snapshot.

    Raises:
        SnapshotIOError: If the file cannot be read.
        SnapshotParseError: If the content is not a valid snapshot.
    """
    try:
        content = path.read_bytes()
    except OSError as e:
        msg = f"Failed to read snapshot: {e}"
        raise SnapshotIOError(msg, path=path, cause=e) from e

    try:
        data = orjson.loads(content)
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SnapshotParseError(msg, path=path, cause=e) from e

    if not isinstance(data, dict):
        msg = f"Expected JSON object, got {type(data).__name__}"
        raise SnapshotParseError(msg, path=path)

    try:
        return project_from_dict(data)
    except SnapshotParseError as e:
        e.path = path
        raise


def project_from_dict(data: dict[str, Any]) -> Project:
    """Build a project snapshot from its dictionary form.

    Missing optional collections are treated as empty.

    Args:
        data: Snapshot dictionary.

    Returns:
        The parsed project snapshot.

    Raises:
        SnapshotParseError: If a field has the wrong shape or an unknown
            enum value.
    """
    return Project(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        description=str(data.get("description", "")),
        tasks=tuple(
            _task_from_dict(item, f"tasks[{i}]")
            for i, item in enumerate(_records(data, "tasks", "project"))
        ),
        documents=tuple(
            Document(
                name=str(_require(item, "name", f"documents[{i}]")),
                content=str(item.get("content", "")),
            )
            for i, item in enumerate(_records(data, "documents", "project"))
        ),
        phases=tuple(
            _phase_from_dict(item, f"phases[{i}]")
            for i, item in enumerate(_records(data, "phases", "project"))
        ),
        requirements=tuple(
            _requirement_from_dict(item, f"requirements[{i}]")
            for i, item in enumerate(_records(data, "requirements", "project"))
        ),
    )


def _task_from_dict(data: dict[str, Any], where: str) -> Task:
    severity = data.get("severity")
    parent_id = data.get("parentId")
    return Task(
        id=str(_require(data, "id", where)),
        status=_enum(
            TaskStatus, data.get("status", TaskStatus.TO_DO), f"{where}.status"
        ),
        task_type=_enum(TaskType, data.get("type", TaskType.TASK), f"{where}.type"),
        title=str(data.get("title", "")),
        dependencies=tuple(str(dep) for dep in _list(data, "dependencies", where)),
        test_cases=tuple(
            TestCase(
                id=str(_require(tc, "id", f"{where}.testCases[{j}]")),
                status=_enum(
                    TestCaseStatus,
                    tc.get("status", TestCaseStatus.NOT_RUN),
                    f"{where}.testCases[{j}].status",
                ),
                is_automated=_bool(
                    tc, "isAutomated", f"{where}.testCases[{j}]", default=False
                ),
                description=str(tc.get("description", "")),
            )
            for j, tc in enumerate(_records(data, "testCases", where))
        ),
        bdd_scenarios=tuple(
            BddScenario(
                id=str(_require(sc, "id", f"{where}.bddScenarios[{j}]")),
                title=str(sc.get("title", "")),
            )
            for j, sc in enumerate(_records(data, "bddScenarios", where))
        ),
        severity=(
            _enum(BugSeverity, severity, f"{where}.severity")
            if severity is not None
            else None
        ),
        parent_id=str(parent_id) if parent_id is not None else None,
    )


def _phase_from_dict(data: dict[str, Any], where: str) -> Phase:
    summary = data.get("summary")
    return Phase(
        name=_enum(PhaseName, _require(data, "name", where), f"{where}.name"),
        status=_enum(
            PhaseStatus, data.get("status", PhaseStatus.NOT_STARTED), f"{where}.status"
        ),
        summary=str(summary) if summary is not None else None,
        test_types=tuple(str(t) for t in _list(data, "testTypes", where)),
    )


def _requirement_from_dict(data: dict[str, Any], where: str) -> Requirement:
    return Requirement(
        id=str(_require(data, "id", where)),
        stlc_phase=_enum(
            STLCPhaseName, _require(data, "stlcPhase", where), f"{where}.stlcPhase"
        ),
        status=str(data.get("status", "")),
        title=str(data.get("title", "")),
        test_cases=tuple(str(tc) for tc in _list(data, "testCases", where)),
    )


# =============================================================================
# Field Helpers
# =============================================================================


def _require(data: dict[str, Any], key: str, where: str) -> Any:
    if key not in data or data[key] is None:
        msg = f"Missing required field '{key}' in {where}"
        raise SnapshotParseError(msg, field=f"{where}.{key}")
    return data[key]


def _list(data: dict[str, Any], key: str, where: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        msg = f"Expected list for '{key}' in {where}, got {type(value).__name__}"
        raise SnapshotParseError(msg, field=f"{where}.{key}")
    return value


def _bool(data: dict[str, Any], key: str, where: str, *, default: bool) -> bool:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, bool):
        kind = type(value).__name__
        msg = f"Expected boolean for '{key}' in {where}, got {kind}"
        raise SnapshotParseError(msg, field=f"{where}.{key}")
    return value


E = TypeVar("E", bound=StrEnum)


def _enum(enum_type: type[E], value: Any, where: str) -> E:
    try:
        return enum_type(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_type)
        msg = f"Invalid value {value!r} for {where} (expected one of: {allowed})"
        raise SnapshotParseError(msg, field=where, cause=e) from e


def _records(data: dict[str, Any], key: str, where: str) -> list[dict[str, Any]]:
    items = _list(data, key, where)
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            msg = f"Expected object for {where}.{key}[{i}], got {type(item).__name__}"
            raise SnapshotParseError(msg, field=f"{where}.{key}[{i}]")
    return items
