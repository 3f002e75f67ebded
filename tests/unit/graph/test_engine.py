import pytest

from phasegate.exceptions import (
    CircularDependencyError,
    DependencyError,
    SelfReferenceError,
    TaskNotFoundError,
)
from phasegate.graph import (
    add_dependency,
    build_graph,
    can_add_dependency,
    execution_order,
    find_cycle,
    get_blocked_tasks,
    get_dependencies,
    get_dependents,
    get_ready_tasks,
    remove_dependency,
)
from phasegate.project import Project, Task, TaskStatus


def _project(*tasks: Task) -> Project:
    return Project(id="p", tasks=tasks)


@pytest.fixture
def chain() -> Project:
    """C depends on B, B depends on A."""
    return _project(
        Task(id="A"),
        Task(id="B", dependencies=("A",)),
        Task(id="C", dependencies=("B",)),
    )


class TestBuildGraph:
    def test_records_dependencies_and_dependents(self, chain: Project) -> None:
        graph = build_graph(chain.tasks)

        assert list(graph) == ["A", "B", "C"]
        assert graph.nodes["B"].dependencies == ("A",)
        assert graph.nodes["A"].dependents == ("B",)
        assert graph.nodes["C"].dependents == ()

    def test_collapses_duplicate_declarations(self) -> None:
        graph = build_graph([Task(id="A"), Task(id="B", dependencies=("A", "A"))])

        assert graph.nodes["B"].dependencies == ("A",)
        assert graph.nodes["A"].dependents == ("B",)

    def test_keeps_dangling_dependency_without_node(self) -> None:
        graph = build_graph([Task(id="A", dependencies=("GHOST",))])

        assert graph.nodes["A"].dependencies == ("GHOST",)
        assert "GHOST" not in graph
        assert len(graph) == 1

    def test_edges_point_from_task_to_dependency(self, chain: Project) -> None:
        assert build_graph(chain.tasks).edges == (("B", "A"), ("C", "B"))

    def test_nodes_are_read_only(self, chain: Project) -> None:
        graph = build_graph(chain.tasks)

        with pytest.raises(TypeError):
            graph.nodes["D"] = graph.nodes["A"]  # pyright: ignore[reportIndexIssue]


class TestGraphPath:
    def test_finds_transitive_path(self, chain: Project) -> None:
        graph = build_graph(chain.tasks)

        assert graph.path("C", "A") == ["C", "B", "A"]
        assert graph.reaches("C", "A")

    def test_returns_none_against_edge_direction(self, chain: Project) -> None:
        graph = build_graph(chain.tasks)

        assert graph.path("A", "C") is None
        assert not graph.reaches("A", "C")

    def test_handles_long_chains_without_recursion(self) -> None:
        tasks = [Task(id="t0")] + [
            Task(id=f"t{i}", dependencies=(f"t{i - 1}",)) for i in range(1, 3000)
        ]
        graph = build_graph(tasks)

        path = graph.path("t2999", "t0")

        assert path is not None
        assert len(path) == 3000


class TestQueries:
    def test_get_dependencies(self, chain: Project) -> None:
        assert [t.id for t in get_dependencies("C", chain)] == ["B"]
        assert get_dependencies("A", chain) == []

    def test_get_dependencies_of_unknown_task_is_empty(self, chain: Project) -> None:
        assert get_dependencies("Z", chain) == []

    def test_get_dependencies_skips_dangling_ids(self) -> None:
        project = _project(Task(id="A"), Task(id="B", dependencies=("A", "GHOST")))

        assert [t.id for t in get_dependencies("B", project)] == ["A"]

    def test_get_dependents(self, chain: Project) -> None:
        assert [t.id for t in get_dependents("A", chain)] == ["B"]
        assert get_dependents("C", chain) == []


class TestBlockedAndReady:
    def test_classifies_by_dependency_status(self) -> None:
        project = _project(
            Task(id="A", status=TaskStatus.DONE),
            Task(id="B", status=TaskStatus.IN_PROGRESS),
            Task(id="C", dependencies=("A",)),
            Task(id="D", dependencies=("A", "B")),
        )

        assert [t.id for t in get_ready_tasks(project)] == ["A", "B", "C"]
        assert [t.id for t in get_blocked_tasks(project)] == ["D"]

    def test_blocked_dependency_status_counts_as_not_done(self) -> None:
        project = _project(
            Task(id="A", status=TaskStatus.BLOCKED),
            Task(id="B", dependencies=("A",)),
        )

        assert [t.id for t in get_blocked_tasks(project)] == ["B"]

    def test_dangling_dependencies_are_ignored(self) -> None:
        project = _project(Task(id="A", dependencies=("GHOST",)))

        assert [t.id for t in get_ready_tasks(project)] == ["A"]
        assert get_blocked_tasks(project) == []

    def test_empty_project(self) -> None:
        project = _project()

        assert get_ready_tasks(project) == []
        assert get_blocked_tasks(project) == []


class TestCanAddDependency:
    def test_accepts_edge_that_keeps_graph_acyclic(self, chain: Project) -> None:
        result = can_add_dependency("C", "A", chain)

        assert result.can_add
        assert result.reason is None
        assert result.cycle == ()

    def test_rejects_self_dependency(self, chain: Project) -> None:
        result = can_add_dependency("A", "A", chain)

        assert not result.can_add
        assert result.reason is not None
        assert "self-dependency" in result.reason

    def test_rejects_edge_closing_a_cycle(self, chain: Project) -> None:
        result = can_add_dependency("A", "C", chain)

        assert not result.can_add
        assert result.reason is not None
        assert "circular dependency" in result.reason
        assert result.cycle == ("A", "C", "B", "A")

    def test_rejects_direct_two_cycle(self) -> None:
        project = _project(Task(id="A"), Task(id="B", dependencies=("A",)))

        result = can_add_dependency("A", "B", project)

        assert not result.can_add
        assert result.cycle == ("A", "B", "A")

    @pytest.mark.parametrize(("task_id", "dependency_id"), [("Z", "A"), ("A", "Z")])
    def test_rejects_unknown_task(
        self, chain: Project, task_id: str, dependency_id: str
    ) -> None:
        result = can_add_dependency(task_id, dependency_id, chain)

        assert not result.can_add
        assert result.reason == "Task not found: Z"
        assert result.missing_task == "Z"
        assert result.cycle == ()

    def test_unknown_task_is_reported_before_self_dependency(
        self, chain: Project
    ) -> None:
        result = can_add_dependency("Z", "Z", chain)

        assert result.missing_task == "Z"


class TestAddDependency:
    def test_returns_new_snapshot_with_edge(self, chain: Project) -> None:
        updated = add_dependency("C", "A", chain)

        task = updated.get_task("C")
        assert task is not None
        assert task.dependencies == ("B", "A")
        assert chain.get_task("C") == Task(id="C", dependencies=("B",))

    def test_existing_edge_is_not_duplicated(self, chain: Project) -> None:
        updated = add_dependency("C", "B", chain)

        task = updated.get_task("C")
        assert task is not None
        assert task.dependencies == ("B",)

    def test_rejects_cycle_and_leaves_snapshot_unchanged(
        self, chain: Project
    ) -> None:
        with pytest.raises(CircularDependencyError) as exc:
            add_dependency("A", "C", chain)

        assert exc.value.task_id == "A"
        assert exc.value.dependency_id == "C"
        assert exc.value.cycle == ["A", "C", "B", "A"]
        assert chain.get_task("A") == Task(id="A")

    def test_rejects_self_dependency(self, chain: Project) -> None:
        with pytest.raises(SelfReferenceError, match="cannot depend on itself"):
            add_dependency("B", "B", chain)

    def test_dependency_errors_are_value_errors(self, chain: Project) -> None:
        with pytest.raises(ValueError):  # noqa: PT011
            add_dependency("B", "B", chain)
        assert issubclass(CircularDependencyError, DependencyError)

    @pytest.mark.parametrize(("task_id", "dependency_id"), [("Z", "A"), ("A", "Z")])
    def test_unknown_task_raises_not_found(
        self, chain: Project, task_id: str, dependency_id: str
    ) -> None:
        with pytest.raises(TaskNotFoundError) as exc:
            add_dependency(task_id, dependency_id, chain)

        assert exc.value.task_id == "Z"


class TestRemoveDependency:
    def test_removes_edge(self, chain: Project) -> None:
        updated = remove_dependency("C", "B", chain)

        task = updated.get_task("C")
        assert task is not None
        assert task.dependencies == ()

    def test_undeclared_dependency_is_a_no_op(self, chain: Project) -> None:
        assert remove_dependency("C", "A", chain) == chain

    def test_unknown_task_raises_not_found(self, chain: Project) -> None:
        with pytest.raises(TaskNotFoundError):
            remove_dependency("Z", "A", chain)

    def test_removal_unblocks_task(self) -> None:
        project = _project(Task(id="A"), Task(id="B", dependencies=("A",)))

        updated = remove_dependency("B", "A", project)

        assert get_blocked_tasks(updated) == []


class TestCyclesAndOrder:
    def test_execution_order_follows_dependencies(self) -> None:
        project = _project(
            Task(id="C", dependencies=("B",)),
            Task(id="A"),
            Task(id="B", dependencies=("A",)),
        )

        assert execution_order(project) == ("A", "B", "C")

    def test_execution_order_breaks_ties_by_snapshot_order(self) -> None:
        project = _project(Task(id="X"), Task(id="A"), Task(id="M"))

        assert execution_order(project) == ("X", "A", "M")

    def test_find_cycle_in_acyclic_snapshot(self, chain: Project) -> None:
        assert find_cycle(chain) == ()

    def test_find_cycle_in_external_snapshot(self) -> None:
        project = _project(
            Task(id="A", dependencies=("B",)),
            Task(id="B", dependencies=("A",)),
        )

        cycle = find_cycle(project)

        assert cycle[0] == cycle[-1]
        assert set(cycle) == {"A", "B"}

    def test_find_cycle_reports_self_loop(self) -> None:
        project = _project(Task(id="A", dependencies=("A",)))

        assert find_cycle(project) == ("A", "A")

    def test_execution_order_rejects_cyclic_snapshot(self) -> None:
        project = _project(
            Task(id="A", dependencies=("B",)),
            Task(id="B", dependencies=("A",)),
        )

        with pytest.raises(CircularDependencyError) as exc:
            execution_order(project)

        assert exc.value.cycle is not None
        assert set(exc.value.cycle) == {"A", "B"}
