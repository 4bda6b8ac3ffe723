# ==============================
# Proxy Synthesizer
# ==============================
"""
Create local callables that forward to remote functions.

Rules:
- Each proxy captures its own remote address at construction time.
- Calling a proxy issues exactly one `call` request and returns the access
  client's envelope unchanged; remote errors are not re-interpreted here.
- Metadata is fetched lazily when discovery did not supply it; a failed fetch
  aborts the batch (entities already bound stay bound).
- Published metadata is a copy; the remote's own document is never mutated.
"""

from __future__ import annotations

import copy
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from remote_use.access.base import ACTION_CALL, ACTION_META, AccessClient
from remote_use.contracts.errors import DiscoveryError
from remote_use.contracts.import_schema import DiscoveredEntity
from remote_use.contracts.result_schema import ResultEnvelope
from remote_use.importer.namespaces import Namespace


class RemoteProxy:
    """Local stand-in for one remote function."""

    def __init__(self, *, name: str, namespace: str, remote_address: str, client: AccessClient) -> None:
        self.remote_address = remote_address
        self.client = client
        self.namespace = namespace
        self.__name__ = name
        self.__qualname__ = f"{namespace}.{name}"

    def __call__(self, *args: Any, **kwargs: Any) -> ResultEnvelope:
        extra: Dict[str, Any] = {"args": dict(kwargs)}
        if args:
            extra["argv"] = list(args)
        return self.client.request(ACTION_CALL, self.remote_address, extra)

    def __repr__(self) -> str:
        return f"<RemoteProxy {self.__qualname__} -> {self.remote_address}>"


def provenance_note(prefix: str, source: str, when: datetime) -> str:
    return f"{prefix} from {source} on {when.isoformat(timespec='seconds')}"


def fetch_metadata(entity: DiscoveredEntity, client: AccessClient) -> Dict[str, Any]:
    if entity.metadata is not None:
        return entity.metadata
    res = client.request(ACTION_META, entity.remote_address)
    if not res.ok:
        raise DiscoveryError.from_remote(action=ACTION_META, url=entity.remote_address, remote=res)
    return res.payload if isinstance(res.payload, dict) else {}


def synthesize(
    entity: DiscoveredEntity,
    namespace: Namespace,
    client: AccessClient,
    *,
    note: Optional[str] = None,
) -> RemoteProxy:
    meta = fetch_metadata(entity, client)

    published = copy.deepcopy(meta)
    if note:
        published["_note"] = note

    proxy = RemoteProxy(
        name=entity.name,
        namespace=namespace.name,
        remote_address=entity.remote_address,
        client=client,
    )
    summary = published.get("summary")
    if isinstance(summary, str):
        proxy.__doc__ = summary
    namespace.bind(entity.name, proxy, published)
    return proxy


def synthesize_all(
    entities: Sequence[DiscoveredEntity],
    namespace: Namespace,
    client: AccessClient,
    *,
    note: Optional[str] = None,
) -> List[str]:
    """Bind entities in order; returns the bound names."""
    bound: List[str] = []
    for entity in entities:
        synthesize(entity, namespace, client, note=note)
        bound.append(entity.name)
    return bound
