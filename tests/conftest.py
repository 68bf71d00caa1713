"""Shared pytest configuration, marker assignment and fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from bilicache_tool.application.events import RunEvent


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        path = Path(str(item.fspath))
        parts = set(path.parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


class RecordingReporter:
    """Reporter double that keeps every emitted event."""

    def __init__(self) -> None:
        self.events: list[RunEvent] = []

    def emit(self, event: RunEvent) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[RunEvent]:
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def reporter() -> RecordingReporter:
    """Return a fresh recording reporter."""
    return RecordingReporter()


@pytest.fixture
def cache_tree(tmp_path: Path) -> Path:
    """Build ``root/a/entry.json`` and ``root/b/c/entry.json``."""
    root = tmp_path / "cache"
    (root / "a").mkdir(parents=True)
    (root / "b" / "c").mkdir(parents=True)
    (root / "a" / "entry.json").write_text("{}", encoding="utf-8")
    (root / "b" / "c" / "entry.json").write_text('{"x":1}', encoding="utf-8")
    return root
