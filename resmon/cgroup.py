"""Cgroup version detection and the pseudo-file layout of both schemas."""
from __future__ import annotations

import enum
import logging
from pathlib import Path

from .config import CGROUP_ROOT

logger = logging.getLogger(__name__)


class CgroupVersion(enum.Enum):
    V1 = "v1"
    V2 = "v2"

    def __str__(self) -> str:
        return self.name


# Presence of this file is the whole v2 signal; its content is never parsed.
V2_CONTROLLERS = "cgroup.controllers"

# cgroup v2 (unified hierarchy)
V2_CPU_MAX = "cpu.max"
V2_CPU_STAT = "cpu.stat"
V2_MEMORY_MAX = "memory.max"
V2_MEMORY_CURRENT = "memory.current"
V2_MEMORY_STAT = "memory.stat"

# cgroup v1 (one hierarchy per controller)
V1_CPU_QUOTA = "cpu/cpu.cfs_quota_us"
V1_CPU_PERIOD = "cpu/cpu.cfs_period_us"
V1_CPUACCT_USAGE = "cpu,cpuacct/cpuacct.usage"
V1_MEMORY_LIMIT = "memory/memory.limit_in_bytes"
V1_MEMORY_USAGE = "memory/memory.usage_in_bytes"
V1_MEMORY_STAT = "memory/memory.stat"


def detect_cgroup_version(root: Path = CGROUP_ROOT) -> CgroupVersion:
    """V2 when the unified hierarchy's controllers list exists under root, else V1."""
    if (Path(root) / V2_CONTROLLERS).exists():
        return CgroupVersion.V2
    return CgroupVersion.V1


def read_text(root: Path, rel: str) -> str | None:
    """Read a pseudo-file fully. Returns None if it does not exist; other OS errors propagate."""
    path = Path(root) / rel
    try:
        return path.read_text()
    except (FileNotFoundError, NotADirectoryError):
        logger.debug("cgroup file %s not present", path)
        return None


def sources(version: CgroupVersion, root: Path = CGROUP_ROOT) -> list[tuple[str, list[Path]]]:
    """(section, [paths]) read for the given version, in report order."""
    root = Path(root)
    if version is CgroupVersion.V2:
        cpu = [V2_CPU_MAX, V2_CPU_STAT]
        memory = [V2_MEMORY_MAX, V2_MEMORY_CURRENT, V2_MEMORY_STAT]
    else:
        cpu = [V1_CPU_QUOTA, V1_CPU_PERIOD, V1_CPUACCT_USAGE]
        memory = [V1_MEMORY_LIMIT, V1_MEMORY_USAGE, V1_MEMORY_STAT]
    return [
        ("CPU", [root / rel for rel in cpu]),
        ("Memory", [root / rel for rel in memory]),
    ]
