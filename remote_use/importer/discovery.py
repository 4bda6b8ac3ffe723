# ==============================
# Discovery Strategy Selector
# ==============================
"""
Enumerate the callable entities at a location.

Strategy:
1. child_metas: one round trip returning metadata for every child.
   Only children whose metadata declares `args` are callable.
2. If the server answers 502 (action not supported): list with detail=True,
   keep entries of type "function", leave metadata for a later meta request.

Any other non-200 answer is a DiscoveryError carrying the remote status.
Output order is response order.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from remote_use.access.base import ACTION_CHILD_METAS, ACTION_LIST, AccessClient
from remote_use.contracts.errors import DiscoveryError
from remote_use.contracts.import_schema import DiscoveredEntity, LocationDescriptor
from remote_use.contracts.result_schema import STATUS_ACTION_UNSUPPORTED

logger = logging.getLogger(__name__)


def discover(loc: LocationDescriptor, client: AccessClient) -> List[DiscoveredEntity]:
    url = loc.url
    res = client.request(ACTION_CHILD_METAS, url)
    if res.ok:
        return _from_child_metas(loc, res.payload if isinstance(res.payload, Mapping) else {})
    if res.status != STATUS_ACTION_UNSUPPORTED:
        raise DiscoveryError.from_remote(action=ACTION_CHILD_METAS, url=url, remote=res)

    logger.debug("child_metas not supported by %s, falling back to list", url)
    res = client.request(ACTION_LIST, url, {"detail": True})
    if not res.ok:
        raise DiscoveryError.from_remote(action=ACTION_LIST, url=url, remote=res)
    return _from_listing(loc, res.payload if isinstance(res.payload, list) else [])


def entity_name(address: str) -> str:
    """Final path segment of an address."""
    return address.rstrip("/").rsplit("/", 1)[-1]


def _from_child_metas(loc: LocationDescriptor, metas: Mapping[str, Any]) -> List[DiscoveredEntity]:
    entities: List[DiscoveredEntity] = []
    for address, meta in metas.items():
        if not isinstance(meta, dict) or meta.get("args") is None:
            continue
        entities.append(
            DiscoveredEntity(name=entity_name(address), remote_address=loc.resolve(address), metadata=meta)
        )
    return entities


def _from_listing(loc: LocationDescriptor, entries: List[Any]) -> List[DiscoveredEntity]:
    entities: List[DiscoveredEntity] = []
    for entry in entries:
        if not isinstance(entry, dict) or entry.get("type") != "function":
            continue
        address = entry.get("uri") or entry.get("name")
        if not address:
            continue
        entities.append(DiscoveredEntity(name=entity_name(address), remote_address=loc.resolve(address)))
    return entities
