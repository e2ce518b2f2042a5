"""CPU section: processor counts plus cgroup quota, period and accounting."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from . import cgroup
from .cgroup import CgroupVersion, read_text
from .config import CGROUP_ROOT
from .parsers import cpu_limit_cores, parse_cpu_max, parse_int, parse_keyed_lines, v1_cpu_limit_cores
from .runtime import HostRuntime

logger = logging.getLogger(__name__)


@dataclass
class CpuReport:
    version: CgroupVersion
    available_processors: int
    affinity_processors: int | None = None
    quota_us: int | None = None  # None for v2 "max" or when not readable
    period_us: int | None = None
    limit_cores: float | str | None = None  # quota / period, or UNLIMITED
    stat: list[tuple[str, str]] | None = None  # v2 cpu.stat, verbatim
    usage_nanos: int | None = None  # v1 cpuacct.usage
    error: str | None = None


def _read_cpu_v2(report: CpuReport, root: Path) -> None:
    content = read_text(root, cgroup.V2_CPU_MAX)
    if content is not None:
        report.quota_us, report.period_us = parse_cpu_max(content)
        report.limit_cores = cpu_limit_cores(report.quota_us, report.period_us)
    content = read_text(root, cgroup.V2_CPU_STAT)
    if content is not None:
        report.stat = parse_keyed_lines(content)


def _read_cpu_v1(report: CpuReport, root: Path) -> None:
    quota_text = read_text(root, cgroup.V1_CPU_QUOTA)
    period_text = read_text(root, cgroup.V1_CPU_PERIOD)
    # Quota is only meaningful together with its period
    if quota_text is not None and period_text is not None:
        report.quota_us = parse_int(quota_text, "cpu.cfs_quota_us")
        report.period_us = parse_int(period_text, "cpu.cfs_period_us")
        report.limit_cores = v1_cpu_limit_cores(report.quota_us, report.period_us)
    usage_text = read_text(root, cgroup.V1_CPUACCT_USAGE)
    if usage_text is not None:
        report.usage_nanos = parse_int(usage_text, "cpuacct.usage")


def read_cpu(version: CgroupVersion, root: Path = CGROUP_ROOT, runtime: Any = None) -> CpuReport:
    """Build the CPU section for one iteration. Never raises on unreadable cgroup data.

    Malformed or unreadable cgroup files replace the cgroup fields with a diagnostic in
    `error`; processor counts from the runtime are always kept.
    """
    runtime = runtime or HostRuntime()
    available = runtime.available_processors()
    affinity = runtime.affinity_processors()
    report = CpuReport(version=version, available_processors=available, affinity_processors=affinity)
    try:
        if version is CgroupVersion.V2:
            _read_cpu_v2(report, Path(root))
        else:
            _read_cpu_v1(report, Path(root))
    except (OSError, ValueError) as err:
        logger.warning("Unable to read cgroup CPU info: %s", err)
        return CpuReport(
            version=version,
            available_processors=available,
            affinity_processors=affinity,
            error=str(err),
        )
    return report
