# ==============================
# Inclusion Filter
# ==============================
"""
Restrict discovered entities to a requested subset.

The whole include set is checked before anything is filtered, so a missing
name fails the import with zero bindings.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from remote_use.contracts.errors import UnknownEntity
from remote_use.contracts.import_schema import DiscoveredEntity


def filter_entities(
    entities: List[DiscoveredEntity],
    include: Optional[Iterable[str]],
    *,
    source: str,
) -> List[DiscoveredEntity]:
    wanted = list(include or [])
    if not wanted:
        return list(entities)

    available = {e.name for e in entities}
    for name in wanted:
        if name not in available:
            raise UnknownEntity(f"'{name}' does not exist under {source}", payload={"entity": name, "source": source})

    wanted_set = set(wanted)
    return [e for e in entities if e.name in wanted_set]
