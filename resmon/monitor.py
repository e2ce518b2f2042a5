"""Reporting loop: sample CPU and memory every interval until the stop event is set."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from .cgroup import CgroupVersion
from .config import CGROUP_ROOT, REPORT_INTERVAL_SEC
from .cpu import CpuReport, read_cpu
from .memory import MemoryReport, read_memory
from .report import render_report

logger = logging.getLogger(__name__)


@dataclass
class Sample:
    timestamp: datetime
    cpu: CpuReport
    memory: MemoryReport


def take_sample(version: CgroupVersion, root: Path = CGROUP_ROOT, runtime: Any = None) -> Sample:
    """Read both sections once. The version is passed in, never re-detected."""
    timestamp = datetime.now()
    return Sample(
        timestamp=timestamp,
        cpu=read_cpu(version, root, runtime),
        memory=read_memory(version, root, runtime),
    )


def _print_report(text: str) -> None:
    print(text, flush=True)


def run_monitor(
    sampler: Callable[[], Sample],
    stop_event: threading.Event,
    interval_sec: float = REPORT_INTERVAL_SEC,
    emit: Callable[[str], None] | None = None,
    iterations: int | None = None,
) -> int:
    """Emit one rendered sample per iteration, waiting interval_sec between them, until stop_event is set.

    A failing iteration is logged and skipped; the loop carries on with the next one.
    iterations bounds the number of iterations (None = run until stopped). Returns the
    number of reports emitted.
    """
    emit = emit or _print_report
    emitted = 0
    done = 0
    while not stop_event.is_set():
        try:
            sample = sampler()
            text = "\n".join(render_report(sample.timestamp, sample.cpu, sample.memory))
            # Nothing is printed once cancellation has been observed
            if stop_event.is_set():
                break
            emit(text)
            emitted += 1
        except Exception:
            logger.exception("Error reading resources (iteration %d)", done + 1)
        done += 1
        if iterations is not None and done >= iterations:
            break
        if stop_event.wait(interval_sec):
            break
    logger.debug("Monitor loop stopped after %d iteration(s), %d report(s)", done, emitted)
    return emitted
