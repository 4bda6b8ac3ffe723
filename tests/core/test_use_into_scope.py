# ==============================
# use() Import-Into-Scope Tests
# ==============================
from __future__ import annotations

import pytest

from remote_use.contracts.errors import RemoteImportError
from remote_use.contracts.result_schema import ResultEnvelope
from remote_use.importer import engine as engine_module
from remote_use.importer.engine import ALL


def test_binds_requested_names_into_scope(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)
    scope = {"__name__": "app.math_client"}

    bound = engine.use(source, "add", scope=scope)

    assert list(bound) == ["add"]
    assert "sub" not in scope
    assert scope["add"](a=1, b=2).ok
    assert engine.imports.get("app.math_client").source == source


@pytest.mark.parametrize("names", [(), (ALL,)])
def test_binds_everything(engine_factory, math_client, source, names) -> None:
    scope = {"__name__": "app.math_client"}
    engine_factory(math_client).use(source, *names, scope=scope)
    assert {"add", "sub"} <= set(scope)


def test_second_use_short_circuits(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)
    scope = {"__name__": "app.math_client"}
    engine.use(source, scope=scope)
    engine.use(source, scope=scope)
    assert math_client.actions() == ["child_metas"]


def test_explicit_target(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)
    scope: dict = {}
    engine.use(source, "sub", scope=scope, target="My.Math")
    assert engine.namespaces.get("My.Math").names() == ["sub"]
    assert "sub" in scope


def test_failure_raises(engine_factory, fake_client, source) -> None:
    fake_client.script("child_metas", source, ResultEnvelope.fail(500, "down"))
    with pytest.raises(RemoteImportError, match="Can't use"):
        engine_factory(fake_client).use(source, scope={"__name__": "app"})


def test_missing_name_raises(engine_factory, math_client, source) -> None:
    with pytest.raises(RemoteImportError, match="'missing'"):
        engine_factory(math_client).use(source, "missing", scope={"__name__": "app"})


def test_requires_source_and_target(engine_factory, math_client) -> None:
    engine = engine_factory(math_client)
    with pytest.raises(RemoteImportError, match="specify source"):
        engine.use("", scope={"__name__": "app"})
    with pytest.raises(RemoteImportError, match="target"):
        engine.use("http://x/", scope={})


def test_use_everything_after_narrower_import_binds_all(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)
    assert engine.use_remote_package(source, "app", include=["add"]).ok

    scope = {"__name__": "app"}
    bound = engine.use(source, scope=scope)

    assert sorted(bound) == ["add", "sub"]
    assert {"add", "sub"} <= set(scope)
    assert math_client.actions() == ["child_metas", "child_metas"]


def test_module_level_use_forwards_allow_overwrite(engine_factory, math_client, source, monkeypatch) -> None:
    engine = engine_factory(math_client)
    other = "http://example.com/api/Other/Math/"
    math_client.script("child_metas", other, ResultEnvelope.success({other + "mul": {"v": 1.1, "args": {}}}))
    monkeypatch.setattr(engine_module, "get_engine", lambda: engine)
    scope = {"__name__": "app"}

    engine_module.use(source, scope=scope)
    with pytest.raises(RemoteImportError, match="409"):
        engine_module.use(other, scope=scope)
    bound = engine_module.use(other, scope=scope, allow_overwrite=True)

    assert "mul" in bound
    assert engine.imports.get("app").source == other
