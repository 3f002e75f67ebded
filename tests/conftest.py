"""Shared test fixtures for phasegate tests."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import orjson
import pytest
from rich.console import Console

WriteSnapshotFunc = Callable[[dict[str, Any]], Path]


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )


@pytest.fixture
def write_snapshot(tmp_path: Path) -> WriteSnapshotFunc:
    """Return a function that writes a snapshot dict to a JSON file."""

    def _write(data: dict[str, Any]) -> Path:
        path = tmp_path / "snapshot.json"
        path.write_bytes(orjson.dumps(data))
        return path

    return _write


@pytest.fixture
def sample_snapshot() -> dict[str, Any]:
    """Snapshot with a three-task chain, a bug and two requirements."""
    return {
        "id": "p1",
        "name": "Checkout",
        "documents": [{"name": "scope.md", "content": "Scope"}],
        "tasks": [
            {
                "id": "A",
                "title": "Cart API",
                "status": "Done",
                "bddScenarios": [{"id": "s1", "title": "Add item"}],
                "testCases": [
                    {"id": "tc1", "status": "Passed", "isAutomated": True},
                ],
            },
            {
                "id": "B",
                "title": "Payment",
                "status": "In Progress",
                "dependencies": ["A"],
                "testCases": [{"id": "tc2", "status": "Not Run"}],
            },
            {"id": "C", "title": "Receipt", "dependencies": ["B"]},
            {
                "id": "BUG-1",
                "type": "Bug",
                "status": "To Do",
                "severity": "Alto",
            },
        ],
        "requirements": [
            {
                "id": "R1",
                "stlcPhase": "Análise de Requisitos",
                "testCases": ["tc1"],
            },
            {"id": "R2", "stlcPhase": "Encerramento do Teste"},
        ],
    }
