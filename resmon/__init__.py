"""Container resource monitor: cgroup v1/v2 CPU and memory limits and usage."""

from .cgroup import CgroupVersion, detect_cgroup_version
from .cpu import CpuReport, read_cpu
from .memory import MemoryReport, read_memory
from .monitor import Sample, run_monitor, take_sample

__all__ = [
    "CgroupVersion",
    "detect_cgroup_version",
    "CpuReport",
    "read_cpu",
    "MemoryReport",
    "read_memory",
    "Sample",
    "run_monitor",
    "take_sample",
]
