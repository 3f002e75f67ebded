"""Data models for task dependency graphs.

A graph is derived from a project's task list on demand and never stored.
Edges point from a task to the tasks it depends on.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

import rustworkx as rx


@dataclass(frozen=True, slots=True)
class DependencyNode:
    """Node in a task dependency graph.

    Attributes:
        task_id: The task ID.
        dependencies: IDs of tasks this task depends on, in declaration order.
        dependents: IDs of tasks that depend on this task, in snapshot order.
    """

    task_id: str
    dependencies: tuple[str, ...] = ()
    dependents: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Outcome of validating a prospective dependency edge.

    Attributes:
        can_add: Whether the edge may be added.
        reason: Why the edge was rejected.
        cycle: Task IDs of the cycle the edge would close, if any.
        missing_task: ID of the task absent from the snapshot, if any.
    """

    can_add: bool
    reason: str | None = None
    cycle: tuple[str, ...] = ()
    missing_task: str | None = None


@dataclass(frozen=True, slots=True)
class DependencyGraph:
    """Task dependency graph keyed by task ID.

    Dependencies that name tasks absent from the snapshot are kept on the
    declaring node but have no node of their own.

    Attributes:
        nodes: Read-only mapping of task ID to node, in snapshot order.
    """

    nodes: Mapping[str, DependencyNode] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __contains__(self, task_id: object) -> bool:
        return task_id in self.nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, task_id: str) -> DependencyNode | None:
        """Return the node for a task, or None if the task is unknown."""
        return self.nodes.get(task_id)

    @property
    def edges(self) -> tuple[tuple[str, str], ...]:
        """All edges as (task_id, dependency_id) tuples."""
        return tuple(
            (node.task_id, dep_id)
            for node in self.nodes.values()
            for dep_id in node.dependencies
        )

    def path(self, start: str, target: str) -> list[str] | None:
        """Find a dependency path from ``start`` to ``target``.

        Walks dependency edges depth-first with an explicit stack, so deep
        chains do not grow the interpreter stack.

        Args:
            start: Task ID to start from.
            target: Task ID to reach.

        Returns:
            The task IDs along the path, both ends included, or None if
            ``target`` is not reachable.
        """
        parents: dict[str, str] = {}
        visited: set[str] = set()
        stack = [start]

        while stack:
            current = stack.pop()
            if current == target:
                path = [current]
                while current != start:
                    current = parents[current]
                    path.append(current)
                path.reverse()
                return path
            if current in visited:
                continue
            visited.add(current)

            node = self.nodes.get(current)
            if node is None:
                continue
            # Reversed so the first declared dependency is explored first
            for dep_id in reversed(node.dependencies):
                if dep_id not in visited:
                    parents[dep_id] = current
                    stack.append(dep_id)

        return None

    def reaches(self, start: str, target: str) -> bool:
        """Return True if ``start`` transitively depends on ``target``."""
        return self.path(start, target) is not None

    def to_rustworkx(self) -> "tuple[rx.PyDiGraph[str, None], dict[str, int]]":
        """Build a rustworkx digraph of the known tasks.

        Edges point from a task to each of its dependencies; dangling
        dependencies are skipped.

        Returns:
            Tuple of (graph, mapping of task ID to node index).
        """
        graph: rx.PyDiGraph[str, None] = rx.PyDiGraph()
        indices: dict[str, int] = {}
        for task_id in self.nodes:
            indices[task_id] = graph.add_node(task_id)

        for task_id, dep_id in self.edges:
            if dep_id in indices:
                _ = graph.add_edge(indices[task_id], indices[dep_id], None)

        return graph, indices

    def find_cycle(self) -> tuple[str, ...]:
        """Find a dependency cycle among the known tasks.

        Returns:
            Task IDs forming the cycle with the first ID repeated at the end,
            or an empty tuple if the graph is acyclic.
        """
        graph, _ = self.to_rustworkx()
        if len(graph) == 0 or rx.is_directed_acyclic_graph(graph):
            return ()

        for component in rx.strongly_connected_components(graph):
            source = component[0]
            if graph.has_edge(source, source):
                return (graph[source], graph[source])
            if len(component) == 1:
                continue
            cycle_edges = rx.digraph_find_cycle(graph, source)
            if cycle_edges:
                cycle_ids = [graph[edge_source] for edge_source, _ in cycle_edges]
                _, last_target = cycle_edges[-1]
                cycle_ids.append(graph[last_target])
                return tuple(cycle_ids)

        return ()

    def topological_order(self) -> tuple[str, ...]:
        """Order known tasks so each task follows all of its dependencies.

        Ties are broken by snapshot order.

        Returns:
            Task IDs in execution order.

        Raises:
            rustworkx.DAGHasCycle: If the graph contains a cycle.
        """
        graph: rx.PyDiGraph[str, None] = rx.PyDiGraph()
        indices: dict[str, int] = {}
        sort_keys: dict[str, str] = {}
        for position, task_id in enumerate(self.nodes):
            indices[task_id] = graph.add_node(task_id)
            sort_keys[task_id] = f"{position:010d}"

        # Reversed edges: a dependency must come before its dependents
        for task_id, dep_id in self.edges:
            if dep_id in indices:
                _ = graph.add_edge(indices[dep_id], indices[task_id], None)

        ordered = rx.lexicographical_topological_sort(
            graph, key=lambda task_id: sort_keys[task_id]
        )
        return tuple(ordered)
