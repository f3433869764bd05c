"""Snapshot cache keyed by build parameters and invalidated by file modification time.

Two kinds of key live in the store:

- the freshness key (one per file path) records the modification time the
  last build saw;
- the identity key (one per path/sheet/header/lookup-column combination)
  holds the built :class:`IndexedSheet`.

Every variant of a file shares one freshness key, so after any rebuild the
recorded time moves forward for all of them. A variant is rebuilt when its
identity key is missing or when the recorded time is older than the file.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable

from xlsx_lookup.snapshot.sheet import IndexedSheet
from xlsx_lookup.snapshot.store import InMemoryStore, KeyValueStore
from xlsx_lookup.utils.constants import FRESHNESS_KEY_TEMPLATE, IDENTITY_KEY_TEMPLATE
from xlsx_lookup.utils.memory import check_memory
from xlsx_lookup.utils.validation import validate_file

logger = logging.getLogger(__name__)

SheetBuilder = Callable[..., IndexedSheet]


def freshness_key(filepath: str) -> str:
    return FRESHNESS_KEY_TEMPLATE.format(path=filepath)


def identity_key(
    filepath: str,
    sheet_name: str,
    has_header: bool,
    lookup_column: int | str | None,
) -> str:
    if lookup_column is None:
        column_text = ""
    elif isinstance(lookup_column, int):
        # "#2" keeps positional columns apart from a header literally named "2"
        column_text = f"#{lookup_column}"
    else:
        column_text = lookup_column
    return IDENTITY_KEY_TEMPLATE.format(
        path=filepath,
        sheet=sheet_name,
        has_header="True" if has_header else "False",
        lookup_column=column_text,
    )


def _build_sheet(
    filepath: str,
    sheet_name: str,
    has_header: bool,
    lookup_column: int | str | None,
) -> IndexedSheet:
    sheet = IndexedSheet.build(
        filepath, sheet_name, has_header=has_header, lookup_column=lookup_column
    )
    check_memory()
    return sheet


class SnapshotCache:
    """Builds :class:`IndexedSheet` objects at most once per file version.

    The check-then-build sequence runs under a lock dedicated to the identity
    key, so concurrent callers asking for the same variant wait for a single
    build while other variants proceed independently.
    """

    def __init__(
        self,
        store: KeyValueStore | None = None,
        builder: SheetBuilder | None = None,
    ):
        self.store: KeyValueStore = store if store is not None else InMemoryStore()
        self._builder = builder or _build_sheet
        self._key_locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def get_or_build(
        self,
        filepath: str | Path,
        sheet_name: str,
        has_header: bool = False,
        lookup_column: int | str | None = None,
    ) -> IndexedSheet:
        """Return the cached snapshot, rebuilding it when missing or older than the file.

        Build failures (duplicate headers, unknown lookup header, I/O errors)
        propagate and leave the store untouched, so the next call retries.
        """
        validate_file(filepath)
        path = str(filepath)
        modified = os.stat(path).st_mtime_ns

        ts_key = freshness_key(path)
        sheet_key = identity_key(path, sheet_name, has_header, lookup_column)

        with self._lock_for(sheet_key):
            reason = self._stale_reason(ts_key, sheet_key, modified)
            if reason is not None:
                logger.info("Building snapshot %s (%s)", sheet_key, reason)
                sheet = self._builder(path, sheet_name, has_header, lookup_column)
                self.store.add(ts_key, modified)
                self.store.add(sheet_key, sheet)
            return self.store[sheet_key]

    def _stale_reason(self, ts_key: str, sheet_key: str, modified: int) -> str | None:
        if not self.store.contains(sheet_key):
            return "miss"
        recorded, found = self.store.try_get(ts_key)
        if not found or recorded is None:
            recorded = 0
        if recorded < modified:
            return "stale"
        return None

    def invalidate(self, filepath: str | Path) -> None:
        """Forget the recorded modification time so every variant of *filepath* rebuilds."""
        self.store.add(freshness_key(str(filepath)), 0)


_default_cache: SnapshotCache | None = None
_default_lock = threading.Lock()


def default_cache() -> SnapshotCache:
    """Process-wide cache backed by an in-memory store."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = SnapshotCache()
        return _default_cache


def get_or_build(
    filepath: str | Path,
    sheet_name: str,
    has_header: bool = False,
    lookup_column: int | str | None = None,
) -> IndexedSheet:
    """Shortcut for :meth:`SnapshotCache.get_or_build` on the process-wide cache."""
    return default_cache().get_or_build(filepath, sheet_name, has_header, lookup_column)
