from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from phasegate.exceptions import SnapshotIOError, SnapshotParseError
from phasegate.project import (
    BugSeverity,
    PhaseName,
    PhaseStatus,
    STLCPhaseName,
    TaskStatus,
    TaskType,
    TestCaseStatus as CaseStatus,
    load_project,
    project_from_dict,
)


class TestProjectFromDict:
    def test_parses_sample_snapshot(self, sample_snapshot: dict[str, Any]) -> None:
        project = project_from_dict(sample_snapshot)

        assert project.id == "p1"
        assert [t.id for t in project.tasks] == ["A", "B", "C", "BUG-1"]
        assert project.documents[0].name == "scope.md"
        assert [r.id for r in project.requirements] == ["R1", "R2"]

    def test_parses_task_fields(self, sample_snapshot: dict[str, Any]) -> None:
        project = project_from_dict(sample_snapshot)
        task_a = project.tasks[0]
        task_b = project.tasks[1]

        assert task_a.status == TaskStatus.DONE
        assert task_a.test_cases[0].status == CaseStatus.PASSED
        assert task_a.test_cases[0].is_automated is True
        assert task_a.bdd_scenarios[0].title == "Add item"
        assert task_b.dependencies == ("A",)

    def test_parses_bug_severity(self, sample_snapshot: dict[str, Any]) -> None:
        bug = project_from_dict(sample_snapshot).tasks[3]

        assert bug.task_type == TaskType.BUG
        assert bug.severity == BugSeverity.HIGH
        assert bug.is_bug

    def test_parses_requirement_phase(self, sample_snapshot: dict[str, Any]) -> None:
        project = project_from_dict(sample_snapshot)

        assert project.requirements[0].stlc_phase == STLCPhaseName.REQUIREMENTS_ANALYSIS
        assert project.requirements[0].test_cases == ("tc1",)
        assert project.requirements[1].test_cases == ()

    def test_parses_stored_phases(self) -> None:
        project = project_from_dict(
            {
                "id": "p",
                "phases": [
                    {
                        "name": "Design",
                        "status": "Em Andamento",
                        "summary": "Mockups",
                        "testTypes": ["usability"],
                    }
                ],
            }
        )

        phase = project.phases[0]
        assert phase.name == PhaseName.DESIGN
        assert phase.status == PhaseStatus.IN_PROGRESS
        assert phase.summary == "Mockups"
        assert phase.test_types == ("usability",)

    def test_missing_collections_are_empty(self) -> None:
        project = project_from_dict({"id": "empty"})

        assert project.tasks == ()
        assert project.documents == ()
        assert project.phases == ()
        assert project.requirements == ()

    def test_task_defaults(self) -> None:
        task = project_from_dict({"tasks": [{"id": "T"}]}).tasks[0]

        assert task.status == TaskStatus.TO_DO
        assert task.task_type == TaskType.TASK
        assert task.dependencies == ()
        assert task.severity is None

    def test_rejects_unknown_status(self) -> None:
        with pytest.raises(SnapshotParseError, match="Invalid value 'Later'") as exc:
            project_from_dict({"tasks": [{"id": "T", "status": "Later"}]})

        assert exc.value.field == "tasks[0].status"

    def test_rejects_missing_task_id(self) -> None:
        with pytest.raises(SnapshotParseError, match="Missing required field 'id'"):
            project_from_dict({"tasks": [{"title": "No id"}]})

    def test_rejects_non_list_dependencies(self) -> None:
        with pytest.raises(SnapshotParseError, match="Expected list"):
            project_from_dict({"tasks": [{"id": "T", "dependencies": "A"}]})

    @pytest.mark.parametrize("value", ["false", 0])
    def test_rejects_non_bool_automation_flag(self, value: object) -> None:
        test_case = {"id": "tc", "isAutomated": value}
        snapshot = {"tasks": [{"id": "T", "testCases": [test_case]}]}

        with pytest.raises(SnapshotParseError, match="Expected boolean") as exc:
            project_from_dict(snapshot)

        assert exc.value.field == "tasks[0].testCases[0].isAutomated"

    def test_rejects_requirement_without_phase(self) -> None:
        with pytest.raises(SnapshotParseError, match="stlcPhase"):
            project_from_dict({"requirements": [{"id": "R"}]})


class TestLoadProject:
    def test_loads_snapshot_file(
        self,
        write_snapshot: Callable[[dict[str, Any]], Path],
        sample_snapshot: dict[str, Any],
    ) -> None:
        project = load_project(write_snapshot(sample_snapshot))

        assert project.name == "Checkout"
        assert len(project.tasks) == 4

    def test_missing_file_raises_io_error(self, tmp_path: Path) -> None:
        path = tmp_path / "missing.json"

        with pytest.raises(SnapshotIOError) as exc:
            load_project(path)

        assert exc.value.path == path

    def test_invalid_json_raises_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(SnapshotParseError, match="Invalid JSON"):
            load_project(path)

    def test_non_object_raises_parse_error(self, tmp_path: Path) -> None:
        path = tmp_path / "list.json"
        path.write_text("[]")

        with pytest.raises(SnapshotParseError, match="Expected JSON object"):
            load_project(path)

    def test_parse_error_carries_path(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text('{"tasks": [{"id": "T", "type": "Chore"}]}')

        with pytest.raises(SnapshotParseError) as exc:
            load_project(path)

        assert exc.value.path == path
