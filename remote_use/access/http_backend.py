# ==============================
# HTTP Access Backend
# ==============================
"""
HTTP backend for remote packages served by gateway/api (or any compatible server).

Wire format:
- POST <url> with JSON body {"action": ..., **extra}
- Response body is an envelope: [status, message, payload] or {"status", "message", "payload"}

Rules:
- Transport failures become 500 envelopes; nothing is raised to the importer.
- No retries here. A session with a retrying adapter can be injected instead.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from remote_use.access.base import AccessClient
from remote_use.config.schema import AccessConfig
from remote_use.contracts.result_schema import STATUS_INTERNAL, ResultEnvelope

logger = logging.getLogger(__name__)


class HttpAccessClient(AccessClient):
    name: str = "http"
    schemes = ("http", "https")

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.timeout = timeout
        self.headers = {"Accept": "application/json"}
        if headers:
            self.headers.update(headers)
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: AccessConfig, *, session: Optional[requests.Session] = None) -> "HttpAccessClient":
        headers = {"User-Agent": config.user_agent}
        headers.update(config.headers)
        return cls(timeout=config.timeout_seconds, headers=headers, session=session)

    def request(self, action: str, url: str, extra: Optional[Dict[str, Any]] = None) -> ResultEnvelope:
        body: Dict[str, Any] = {"action": action}
        body.update(extra or {})
        try:
            resp = self.session.post(url, json=body, headers=self.headers, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning("HTTP %s request to %s failed: %s", action, url, exc)
            return ResultEnvelope.fail(STATUS_INTERNAL, f"Network failure: {exc}")

        try:
            data = resp.json()
        except ValueError:
            status = resp.status_code if resp.status_code >= 400 else STATUS_INTERNAL
            return ResultEnvelope.fail(status, f"Invalid response from server (HTTP {resp.status_code})")

        try:
            return ResultEnvelope.from_wire(data)
        except ValueError as exc:
            return ResultEnvelope.fail(STATUS_INTERNAL, f"Invalid response from server: {exc}")
