import logging
import signal
import sys
import threading

import main
from conftest import FakeRuntime
from resmon.cgroup import CgroupVersion
from resmon.monitor import run_monitor, take_sample


def test_cli_single_report(make_tree, monkeypatch, capsys):
    root = make_tree({
        "cgroup.controllers": "",
        "cpu.max": "200000 100000\n",
        "memory.max": "max\n",
        "memory.stat": "anon 2048\nsock 0\n",
    })
    monkeypatch.setattr(sys, "argv", ["resmon", "--cgroup-root", str(root), "--count", "1", "--interval", "0.01"])
    before = signal.getsignal(signal.SIGTERM)
    main.main()
    out = capsys.readouterr().out
    assert "Detected cgroup version: V2" in out
    assert "  CPU Limit: 2.00 cores" in out
    assert "  cgroup v2 memory.max: unlimited" in out
    assert "    anon: 2.00 KB" in out
    assert "sock" not in out
    assert out.count("CPU Resources:") == 1
    assert signal.getsignal(signal.SIGTERM) == before


def test_cli_debug_lists_sources(tmp_path, monkeypatch, capsys):
    root_logger = logging.getLogger()
    level = root_logger.level
    monkeypatch.setattr(sys, "argv", ["resmon", "--cgroup-root", str(tmp_path), "--count", "1", "--debug"])
    try:
        main.main()
    finally:
        root_logger.setLevel(level)
    out = capsys.readouterr().out
    assert "Detected cgroup version: V1" in out
    assert "cpu.cfs_quota_us" in out


def test_sigterm_stops_monitor_mid_wait(tmp_path, caplog):
    stop = threading.Event()
    before = {signum: signal.getsignal(signum) for signum in (signal.SIGINT, signal.SIGTERM)}
    previous = main._install_stop_handlers(stop)
    out: list[str] = []

    def emit(text):
        out.append(text)
        signal.raise_signal(signal.SIGTERM)

    try:
        with caplog.at_level(logging.INFO, logger="main"):
            emitted = run_monitor(
                lambda: take_sample(CgroupVersion.V1, tmp_path, FakeRuntime()),
                stop,
                interval_sec=3600,
                emit=emit,
            )
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
    assert emitted == 1
    assert stop.is_set()
    assert "Interrupted (SIGTERM), exiting..." in caplog.text
    assert previous == before
    assert {signum: signal.getsignal(signum) for signum in previous} == before
