"""Process-wide store of diagnostic records, keyed by NaN payload index."""

from __future__ import annotations

import logging
import threading

from .errors import DiagnosticRecord, RegistryFault

logger = logging.getLogger(__name__)


class ErrorRegistry:
    """Maps monotonically issued indices to diagnostic records.

    The lock covers only the counter and the dict; no caller ever holds it
    across float arithmetic.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counter: int = 0
        self._records: dict[int, DiagnosticRecord] = {}

    def insert(self, record: DiagnosticRecord) -> int:
        with self._lock:
            self._counter += 1
            index = self._counter
            self._records[index] = record
        logger.debug("registered diagnostic %d: %s", index, record)
        return index

    def remove(self, index: int) -> DiagnosticRecord:
        with self._lock:
            record = self._records.pop(index, None)
        if record is None:
            raise RegistryFault(
                f"no diagnostic registered under index {index} "
                "(payload consumed twice or corrupted)"
            )
        logger.debug("consumed diagnostic %d", index)
        return record

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, index: object) -> bool:
        with self._lock:
            return index in self._records


_registry: ErrorRegistry | None = None
_registry_lock = threading.Lock()


def get_registry() -> ErrorRegistry:
    """Return the registry, creating it on first use."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = ErrorRegistry()
    return _registry
