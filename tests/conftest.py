# ==============================
# Testing Fixtures
# ==============================
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from remote_use.access.base import ACTION_CALL, AccessClient
from remote_use.config.schema import Settings
from remote_use.contracts.result_schema import ResultEnvelope
from remote_use.importer.engine import RemoteUseEngine, reset_engine

Scripted = Union[ResultEnvelope, Callable[[Optional[Dict[str, Any]]], ResultEnvelope]]

SOURCE = "http://example.com/api/My/Math/"


class FakeAccessClient(AccessClient):
    """
    Scripted access client.

    responses maps (action, url) to an envelope (or a callable taking extra).
    Unscripted calls echo their address + extra; anything else is a 404.
    """

    name = "fake"
    schemes = ("http", "https", "py", "pm")

    def __init__(self, responses: Optional[Dict[Tuple[str, str], Scripted]] = None) -> None:
        self.responses: Dict[Tuple[str, str], Scripted] = dict(responses or {})
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    def script(self, action: str, url: str, response: Scripted) -> None:
        self.responses[(action, url)] = response

    def request(self, action: str, url: str, extra: Optional[Dict[str, Any]] = None) -> ResultEnvelope:
        self.calls.append((action, url, extra))
        scripted = self.responses.get((action, url))
        if scripted is None:
            if action == ACTION_CALL:
                return ResultEnvelope.success({"url": url, "extra": extra})
            return ResultEnvelope.fail(404, f"Not scripted: {action} {url}")
        if callable(scripted):
            return scripted(extra)
        return scripted

    def actions(self) -> List[str]:
        return [action for action, _, _ in self.calls]


def math_metas() -> Dict[str, Any]:
    return {
        SOURCE + "add": {"v": 1.1, "summary": "Add", "args": {"a": {"req": True}, "b": {"req": True}}},
        SOURCE + "sub": {"v": 1.1, "summary": "Subtract", "args": {"a": {"req": True}, "b": {"req": True}}},
        SOURCE + "PI": {"v": 1.1, "summary": "Not a function"},
    }


@pytest.fixture
def source() -> str:
    return SOURCE


@pytest.fixture
def fake_client() -> FakeAccessClient:
    return FakeAccessClient()


@pytest.fixture
def math_client() -> FakeAccessClient:
    """Source exposing add/sub through child_metas."""
    client = FakeAccessClient()
    client.script("child_metas", SOURCE, ResultEnvelope.success(math_metas()))
    return client


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def engine_factory(settings: Settings) -> Callable[[AccessClient], RemoteUseEngine]:
    """Fresh engine per test: new namespace table and import registry."""

    def _make(client: AccessClient, *, settings_override: Optional[Settings] = None) -> RemoteUseEngine:
        return RemoteUseEngine(client=client, settings=settings_override or settings)

    return _make


@pytest.fixture(autouse=True)
def _reset_default_engine():
    reset_engine()
    yield
    reset_engine()
