import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from phasegate.cli import CLIContext


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep PHASEGATE_* variables of the host out of every test."""
    for key in list(os.environ):
        if key.startswith("PHASEGATE_"):
            monkeypatch.delenv(key)
    yield
    CLIContext.reset()
