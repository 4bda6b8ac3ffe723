# ==============================
# Access Router
# ==============================
"""
Scheme-based dispatch across access clients.

The importer holds a single AccessClient; the router is that client in
production and fans requests out to the backend registered for the URL scheme.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from remote_use.access.base import AccessClient
from remote_use.access.http_backend import HttpAccessClient
from remote_use.access.local_backend import LocalAccessClient
from remote_use.config.schema import Settings
from remote_use.contracts.errors import InvalidLocation
from remote_use.contracts.result_schema import STATUS_NOT_IMPLEMENTED, ResultEnvelope
from remote_use.importer.location import parse


class AccessRouter(AccessClient):
    name: str = "router"

    def __init__(self, clients: Iterable[AccessClient], *, local_scheme: str = "py") -> None:
        self.local_scheme = local_scheme
        self._by_scheme: Dict[str, AccessClient] = {}
        for client in clients:
            for scheme in client.schemes:
                self._by_scheme[scheme.lower()] = client
        self.schemes = tuple(self._by_scheme)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AccessRouter":
        access = settings.access
        local = LocalAccessClient(
            scheme=access.local_scheme, actions=access.local_actions, packages=access.local_packages
        )
        http = HttpAccessClient.from_config(access)
        return cls([local, http], local_scheme=access.local_scheme)

    def client_for(self, scheme: str) -> Optional[AccessClient]:
        return self._by_scheme.get(scheme.lower())

    def request(self, action: str, url: str, extra: Optional[Dict[str, Any]] = None) -> ResultEnvelope:
        try:
            loc = parse(url, local_scheme=self.local_scheme)
        except InvalidLocation as exc:
            return exc.to_envelope()
        client = self.client_for(loc.scheme)
        if client is None:
            return ResultEnvelope.fail(STATUS_NOT_IMPLEMENTED, f"No access client for scheme '{loc.scheme}'")
        return client.request(action, url, extra)
