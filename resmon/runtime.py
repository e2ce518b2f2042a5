"""Host runtime facts: processor count and this process's memory figures (via psutil)."""
from __future__ import annotations

import logging
from dataclasses import dataclass

import psutil

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeMemory:
    """Memory as seen by the running interpreter, in bytes."""

    max: int  # physical memory of the host
    total: int  # virtual size of this process
    free: int  # mapped but not resident

    @property
    def used(self) -> int:
        return self.total - self.free


class HostRuntime:
    """Reads processor and memory facts for the current process."""

    def __init__(self, process: psutil.Process | None = None) -> None:
        self.process = process or psutil.Process()

    def available_processors(self) -> int:
        return psutil.cpu_count(logical=True) or 1

    def affinity_processors(self) -> int | None:
        """CPUs this process may be scheduled on. None where the platform has no affinity API."""
        if not hasattr(self.process, "cpu_affinity"):
            return None
        try:
            return len(self.process.cpu_affinity())
        except psutil.Error as err:
            logger.debug("cpu_affinity unavailable: %s", err)
            return None

    def memory(self) -> RuntimeMemory:
        info = self.process.memory_info()
        return RuntimeMemory(
            max=psutil.virtual_memory().total,
            total=info.vms,
            free=max(0, info.vms - info.rss),
        )
