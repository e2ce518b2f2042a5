"""Pure parsers for cgroup pseudo-file contents: text in, structured values out.

Every parser raises ValueError on content that does not match its schema; callers
turn that into a per-section diagnostic.
"""
from __future__ import annotations

import re

from .config import UNLIMITED, V1_UNLIMITED_THRESHOLD

_INT_RE = re.compile(r"[+-]?\d+")

# Literal used by cgroup v2 for an unbounded quota or limit
V2_MAX_TOKEN = "max"


def parse_int(text: str, source: str = "value") -> int:
    """Parse a single decimal integer, ignoring surrounding whitespace."""
    token = text.strip()
    if not _INT_RE.fullmatch(token):
        raise ValueError(f"{source}: expected an integer, got {token!r}")
    return int(token)


def parse_cpu_max(text: str) -> tuple[int | None, int | None]:
    """Parse cgroup v2 cpu.max ("<quota|max> <period>"). Quota is None for "max".

    With a "max" quota the period is informational only: it is kept when numeric and
    None otherwise.
    """
    tokens = text.split()
    if len(tokens) != 2:
        raise ValueError(f"cpu.max: expected 2 fields, got {len(tokens)} in {text.strip()!r}")
    if tokens[0] == V2_MAX_TOKEN:
        period = int(tokens[1]) if _INT_RE.fullmatch(tokens[1]) else None
        return None, period
    return parse_int(tokens[0], "cpu.max quota"), parse_int(tokens[1], "cpu.max period")


def cpu_limit_cores(quota: int | None, period: int | None) -> float | str:
    """Core-equivalent limit for a quota/period pair; UNLIMITED when there is no quota."""
    if quota is None:
        return UNLIMITED
    if period is None or period <= 0:
        raise ValueError(f"cpu period must be positive, got {period}")
    return quota / period


def v1_cpu_limit_cores(quota: int, period: int) -> float | str:
    """cpu.cfs_quota_us of -1 (or any value <= 0) means no quota was set."""
    if quota <= 0:
        return UNLIMITED
    return cpu_limit_cores(quota, period)


def parse_v2_memory_max(text: str) -> int | str:
    """memory.max is either "max" or a byte count."""
    if text.strip() == V2_MAX_TOKEN:
        return UNLIMITED
    return parse_int(text, "memory.max")


def v1_memory_limit(value: int, threshold: int = V1_UNLIMITED_THRESHOLD) -> int | str:
    """memory.limit_in_bytes at or above threshold means no limit was set."""
    if value >= threshold:
        return UNLIMITED
    return value


def parse_keyed_lines(text: str) -> list[tuple[str, str]]:
    """Every non-blank "key value" line, in file order, values kept as text."""
    pairs: list[tuple[str, str]] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = line.split(None, 1)
        pairs.append((parts[0], parts[1].strip() if len(parts) > 1 else ""))
    return pairs


def select_stat(text: str, keys: tuple[str, ...] | frozenset[str]) -> dict[str, int]:
    """Allow-listed "key value" lines of a memory.stat file as byte counts, in file order.

    Lines whose key is not allow-listed are skipped without being parsed.
    """
    wanted = frozenset(keys)
    selected: dict[str, int] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) != 2 or parts[0] not in wanted:
            continue
        selected[parts[0]] = parse_int(parts[1], f"memory.stat {parts[0]}")
    return selected
