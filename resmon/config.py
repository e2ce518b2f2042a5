"""Shared configuration for the resource monitor."""

import os
from pathlib import Path

# Root of the cgroup filesystem; override to point at a copied or simulated tree.
CGROUP_ROOT = Path(os.environ.get("RESMON_CGROUP_ROOT") or "/sys/fs/cgroup")

REPORT_INTERVAL_SEC = 5.0

# cgroup v1 has no textual "unlimited" marker; the kernel reports a huge page-aligned
# value instead. Anything at or above this threshold is treated as no limit.
V1_UNLIMITED_THRESHOLD = int(os.environ.get("RESMON_V1_UNLIMITED_THRESHOLD") or 2**60)

# memory.stat keys surfaced in the report, per schema
V1_MEMORY_STAT_KEYS = ("cache", "rss", "mapped_file", "inactive_anon")
V2_MEMORY_STAT_KEYS = ("anon", "file", "kernel_stack", "slab")

# Sentinel for a limit that the cgroup reports as unbounded
UNLIMITED = "unlimited"

SEPARATOR_WIDTH = 80
