"""Task dependency graph engine.

This package derives dependency graphs from project snapshots, validates
dependency edges so the graph stays acyclic, and classifies tasks as blocked
or ready to run.
"""

from phasegate.graph._engine import (
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
from phasegate.graph._models import DependencyCheck, DependencyGraph, DependencyNode

__all__ = [
    "DependencyCheck",
    "DependencyGraph",
    "DependencyNode",
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
