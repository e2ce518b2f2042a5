"""Text rendering of a sample: separators, timestamp header, CPU and memory blocks."""
from __future__ import annotations

from datetime import datetime

from .cgroup import CgroupVersion
from .config import SEPARATOR_WIDTH, UNLIMITED
from .cpu import CpuReport
from .memory import MemoryReport

LINE_THICK = "=" * SEPARATOR_WIDTH
LINE_THIN = "-" * SEPARATOR_WIDTH
INDENT = "  "
TIMESTAMP_FMT = "%Y-%m-%d %H:%M:%S"

KIB = 1024
MIB = 1024 * 1024
GIB = 1024 * 1024 * 1024


def format_bytes(n: int) -> str:
    """Binary-scaled size: whole bytes below 1 KiB, else two decimals in KB/MB/GB."""
    if n < KIB:
        return f"{n} B"
    if n < MIB:
        return f"{n / KIB:.2f} KB"
    if n < GIB:
        return f"{n / MIB:.2f} MB"
    return f"{n / GIB:.2f} GB"


def format_number(n: int) -> str:
    """Integer with thousands separators (e.g. 1,234,567)."""
    return f"{n:,}"


def format_cores(limit: float | str) -> str:
    if limit == UNLIMITED:
        return UNLIMITED
    return f"{limit:.2f} cores"


def format_limit(limit: int | str) -> str:
    if limit == UNLIMITED:
        return UNLIMITED
    return format_bytes(limit)


def render_banner(version: CgroupVersion) -> list[str]:
    return [
        LINE_THICK,
        "Resource Monitor Started",
        LINE_THICK,
        f"Detected cgroup version: {version}",
        LINE_THICK,
        "",
    ]


def _cpu_lines(cpu: CpuReport) -> list[str]:
    lines = ["CPU Resources:", f"{INDENT}Available Processors: {cpu.available_processors}"]
    if cpu.affinity_processors is not None:
        lines.append(f"{INDENT}Affinity Processors: {cpu.affinity_processors}")
    if cpu.error is not None:
        lines.append(f"{INDENT}Unable to read cgroup CPU info: {cpu.error}")
        return lines

    if cpu.version is CgroupVersion.V2:
        if cpu.limit_cores is not None:
            quota = "max" if cpu.quota_us is None else cpu.quota_us
            period = "" if cpu.period_us is None else f" {cpu.period_us}"
            lines.append(f"{INDENT}cgroup v2 cpu.max: {quota}{period}")
    else:
        if cpu.quota_us is not None:
            lines.append(f"{INDENT}cgroup v1 cpu.cfs_quota_us: {cpu.quota_us}")
        if cpu.period_us is not None:
            lines.append(f"{INDENT}cgroup v1 cpu.cfs_period_us: {cpu.period_us}")
    if cpu.limit_cores is not None:
        lines.append(f"{INDENT}CPU Limit: {format_cores(cpu.limit_cores)}")

    if cpu.stat is not None:
        lines.append(f"{INDENT}cgroup v2 cpu.stat:")
        lines.extend(f"{INDENT * 2}{key} {value}".rstrip() for key, value in cpu.stat)
    if cpu.usage_nanos is not None:
        lines.append(f"{INDENT}Total CPU usage (nanoseconds): {format_number(cpu.usage_nanos)}")
    return lines


def _memory_lines(memory: MemoryReport) -> list[str]:
    rt = memory.runtime
    lines = [
        "Memory Resources:",
        f"{INDENT}Runtime Max Memory: {format_bytes(rt.max)}",
        f"{INDENT}Runtime Total Memory: {format_bytes(rt.total)}",
        f"{INDENT}Runtime Used Memory: {format_bytes(rt.used)}",
        f"{INDENT}Runtime Free Memory: {format_bytes(rt.free)}",
    ]
    if memory.error is not None:
        lines.append(f"{INDENT}Unable to read cgroup memory info: {memory.error}")
        return lines

    if memory.version is CgroupVersion.V2:
        limit_name, usage_name, stat_name = "cgroup v2 memory.max", "cgroup v2 memory.current", "cgroup v2 memory.stat"
    else:
        limit_name, usage_name, stat_name = (
            "cgroup v1 memory.limit_in_bytes",
            "cgroup v1 memory.usage_in_bytes",
            "cgroup v1 memory.stat",
        )
    if memory.limit is not None:
        lines.append(f"{INDENT}{limit_name}: {format_limit(memory.limit)}")
    if memory.usage is not None:
        lines.append(f"{INDENT}{usage_name}: {format_bytes(memory.usage)}")
    if memory.stat:
        lines.append(f"{INDENT}{stat_name} (selected):")
        lines.extend(f"{INDENT * 2}{key}: {format_bytes(value)}" for key, value in memory.stat.items())
    return lines


def render_report(timestamp: datetime, cpu: CpuReport, memory: MemoryReport) -> list[str]:
    """Lines for one report, bounded by separators and headed by the timestamp."""
    return [
        f"[{timestamp.strftime(TIMESTAMP_FMT)}]",
        LINE_THIN,
        *_cpu_lines(cpu),
        "",
        *_memory_lines(memory),
        "",
        LINE_THICK,
        "",
    ]
