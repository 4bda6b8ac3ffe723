# ==============================
# Access Client Contract
# ==============================
"""
Access client contract for remote_use.

Rules:
- The importer talks to remote locations ONLY through this interface.
- request() never raises for remote failures; it returns a ResultEnvelope.
- Timeouts/retries are the concrete client's concern, not the importer's.

Actions used by the importer:
- child_metas: {address: metadata} for every child of a package
- list: children of a package ({"detail": True} -> dicts with name/type/uri)
- meta: metadata of a single entity
- call: invoke a function ({"args": {...}, "argv": [...]})
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

from remote_use.contracts.result_schema import ResultEnvelope

ACTION_CHILD_METAS = "child_metas"
ACTION_LIST = "list"
ACTION_META = "meta"
ACTION_CALL = "call"

KNOWN_ACTIONS: Tuple[str, ...] = (ACTION_CHILD_METAS, ACTION_LIST, ACTION_META, ACTION_CALL)


class AccessClient(ABC):
    """Base class for all access clients (local + http)."""

    name: str
    schemes: Tuple[str, ...] = ()

    @abstractmethod
    def request(self, action: str, url: str, extra: Optional[Dict[str, Any]] = None) -> ResultEnvelope:
        """
        Execute one action against url.

        extra:
- action specific options (detail, args, argv)
        """
        raise NotImplementedError
