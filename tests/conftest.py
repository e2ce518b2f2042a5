from __future__ import annotations

from pathlib import Path

import pytest

from resmon.runtime import RuntimeMemory


class FakeRuntime:
    def __init__(self, processors: int = 4, affinity: int | None = 2, memory: RuntimeMemory | None = None) -> None:
        self.processors = processors
        self.affinity = affinity
        self.mem = memory or RuntimeMemory(max=8 * 1024**3, total=512 * 1024**2, free=256 * 1024**2)

    def available_processors(self) -> int:
        return self.processors

    def affinity_processors(self) -> int | None:
        return self.affinity

    def memory(self) -> RuntimeMemory:
        return self.mem


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create a synthetic cgroup tree: {relative path: content}."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def runtime() -> FakeRuntime:
    return FakeRuntime()


@pytest.fixture
def make_tree(tmp_path):
    def _make(files: dict[str, str]) -> Path:
        return write_tree(tmp_path, files)
    return _make
