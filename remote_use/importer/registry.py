# ==============================
# Import Registry
# ==============================
"""
Process-wide record of completed imports.

Design:
- namespace -> ImportRecord (at most one per namespace)
- A repeated import of the same (namespace, source) is a no-op when the earlier
  import covers the request: a full import covers everything, a filtered one
  only the names it bound
- Thread-safe: a single lock guards every check and every write
- Never pruned; clear() exists for tests and explicit resets
"""

from __future__ import annotations

import threading
from typing import Dict, Iterable, List, Optional

from remote_use.contracts.import_schema import ImportRecord


class ImportRegistry:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: Dict[str, ImportRecord] = {}

    def is_already_loaded(self, namespace: str, source: str, entities: Optional[Iterable[str]] = None) -> bool:
        """
        True if namespace was populated from source.

        entities=None asks for everything at source and only a complete import
        satisfies it; otherwise the earlier imports must have bound every name.
        """
        with self._lock:
            rec = self._records.get(namespace)
            if rec is None or rec.source != source:
                return False
            if entities is None:
                return rec.complete
            return set(entities) <= rec.entities

    def record_import(
        self, namespace: str, source: str, entities: Iterable[str], *, complete: bool = False
    ) -> ImportRecord:
        with self._lock:
            names = frozenset(entities)
            prev = self._records.get(namespace)
            if prev is not None and prev.source == source:
                names = names | prev.entities
                complete = complete or prev.complete
            rec = ImportRecord(namespace=namespace, source=source, entities=names, complete=complete)
            self._records[namespace] = rec
            return rec

    def get(self, namespace: str) -> Optional[ImportRecord]:
        with self._lock:
            return self._records.get(namespace)

    def records(self) -> List[ImportRecord]:
        with self._lock:
            return list(self._records.values())

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
