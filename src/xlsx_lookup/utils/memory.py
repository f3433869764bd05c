"""Memory management utilities."""

from __future__ import annotations

import psutil

from xlsx_lookup.utils.config import get_max_memory_mb


def check_memory(limit_mb: float | None = None) -> None:
    """Raise if current process exceeds memory budget."""
    from xlsx_lookup.utils.errors import MemoryExceededError

    if limit_mb is None:
        limit_mb = get_max_memory_mb()
    memory_mb = get_memory_mb()
    if memory_mb > limit_mb:
        raise MemoryExceededError(memory_mb, limit_mb)


def get_memory_mb() -> float:
    """Return current process memory in MB."""
    return psutil.Process().memory_info().rss / 1024 / 1024
