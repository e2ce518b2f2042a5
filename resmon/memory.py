"""Memory section: runtime memory figures plus cgroup limit, usage and selected stats."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import cgroup
from .cgroup import CgroupVersion, read_text
from .config import CGROUP_ROOT, V1_MEMORY_STAT_KEYS, V1_UNLIMITED_THRESHOLD, V2_MEMORY_STAT_KEYS
from .parsers import parse_int, parse_v2_memory_max, select_stat, v1_memory_limit
from .runtime import HostRuntime, RuntimeMemory

logger = logging.getLogger(__name__)


@dataclass
class MemoryReport:
    version: CgroupVersion
    runtime: RuntimeMemory
    limit: int | str | None = None  # bytes, or UNLIMITED
    usage: int | None = None
    stat: dict[str, int] = field(default_factory=dict)
    error: str | None = None


def _read_memory_v2(report: MemoryReport, root: Path) -> None:
    content = read_text(root, cgroup.V2_MEMORY_MAX)
    if content is not None:
        report.limit = parse_v2_memory_max(content)
    content = read_text(root, cgroup.V2_MEMORY_CURRENT)
    if content is not None:
        report.usage = parse_int(content, "memory.current")
    content = read_text(root, cgroup.V2_MEMORY_STAT)
    if content is not None:
        report.stat = select_stat(content, V2_MEMORY_STAT_KEYS)


def _read_memory_v1(report: MemoryReport, root: Path, threshold: int) -> None:
    content = read_text(root, cgroup.V1_MEMORY_LIMIT)
    if content is not None:
        report.limit = v1_memory_limit(parse_int(content, "memory.limit_in_bytes"), threshold)
    content = read_text(root, cgroup.V1_MEMORY_USAGE)
    if content is not None:
        report.usage = parse_int(content, "memory.usage_in_bytes")
    content = read_text(root, cgroup.V1_MEMORY_STAT)
    if content is not None:
        report.stat = select_stat(content, V1_MEMORY_STAT_KEYS)


def read_memory(
    version: CgroupVersion,
    root: Path = CGROUP_ROOT,
    runtime: Any = None,
    v1_unlimited_threshold: int = V1_UNLIMITED_THRESHOLD,
) -> MemoryReport:
    """Build the memory section for one iteration. Never raises on unreadable cgroup data."""
    runtime = runtime or HostRuntime()
    runtime_memory = runtime.memory()
    report = MemoryReport(version=version, runtime=runtime_memory)
    try:
        if version is CgroupVersion.V2:
            _read_memory_v2(report, Path(root))
        else:
            _read_memory_v1(report, Path(root), v1_unlimited_threshold)
    except (OSError, ValueError) as err:
        logger.warning("Unable to read cgroup memory info: %s", err)
        return MemoryReport(version=version, runtime=runtime_memory, error=str(err))
    return report
