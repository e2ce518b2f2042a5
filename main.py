#!/usr/bin/env python3
"""
Container resource monitor: prints the cgroup CPU and memory limits and usage this
process runs under, every 5 seconds, until interrupted.
Detects cgroup v1 or v2 once at startup and reads the matching pseudo-files.
"""
import argparse
import logging
import signal
import threading
from functools import partial
from pathlib import Path

from resmon.cgroup import detect_cgroup_version, sources
from resmon.config import CGROUP_ROOT, REPORT_INTERVAL_SEC
from resmon.monitor import run_monitor, take_sample
from resmon.report import render_banner
from resmon.runtime import HostRuntime

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _install_stop_handlers(stop_event: threading.Event) -> dict:
    """SIGINT/SIGTERM set stop_event, which also cuts the wait between reports short. Returns previous handlers."""

    def _handler(signum, _frame) -> None:
        if not stop_event.is_set():
            logger.info("Interrupted (%s), exiting...", signal.Signals(signum).name)
        stop_event.set()

    previous = {}
    for signum in (signal.SIGINT, signal.SIGTERM):
        previous[signum] = signal.signal(signum, _handler)
    return previous


def main() -> None:
    p = argparse.ArgumentParser(
        description="Print cgroup v1/v2 CPU and memory limits and usage of this container periodically",
    )
    p.add_argument(
        "--interval",
        type=float,
        default=REPORT_INTERVAL_SEC,
        help=f"Seconds between reports (default: {REPORT_INTERVAL_SEC:g})",
    )
    p.add_argument(
        "--cgroup-root",
        type=Path,
        default=CGROUP_ROOT,
        help=f"Root of the cgroup filesystem (default: {CGROUP_ROOT})",
    )
    p.add_argument("--count", type=int, default=0, help="Stop after N iterations (0 = run until interrupted)")
    p.add_argument("--debug", action="store_true", help="Debug logging and print which files each section reads")
    args = p.parse_args()

    if args.interval <= 0:
        p.error("--interval must be > 0")
    if args.count < 0:
        p.error("--count must be >= 0")
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    # Decided once; every iteration reads with this version even if the filesystem changes
    version = detect_cgroup_version(args.cgroup_root)
    for line in render_banner(version):
        print(line)
    if args.debug:
        print("Metrics sources:")
        for section, paths in sources(version, args.cgroup_root):
            print(f"  {section}: {', '.join(str(path) for path in paths)}")
        print()

    stop_event = threading.Event()
    previous_handlers = _install_stop_handlers(stop_event)
    runtime = HostRuntime()
    sampler = partial(take_sample, version, args.cgroup_root, runtime)
    try:
        run_monitor(sampler, stop_event, interval_sec=args.interval, iterations=args.count or None)
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting...")
    finally:
        for signum, handler in previous_handlers.items():
            if handler is not None:
                signal.signal(signum, handler)


if __name__ == "__main__":
    main()
