# ==============================
# use_remote_package Tests
# ==============================
from __future__ import annotations

import pytest

from remote_use.config.schema import ImporterConfig, Settings
from remote_use.contracts.result_schema import ResultEnvelope


def test_scenario_a_bulk_metadata(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)

    res = engine.use_remote_package(source, "My.Math")

    assert res.status == 200
    assert res.message == "OK"
    ns = engine.namespaces.get("My.Math")
    assert ns.names() == ["add", "sub"]
    assert ns.meta("add")["_note"].startswith(f"Imported by remote_use from {source}")
    rec = engine.imports.get("My.Math")
    assert rec.source == source
    assert rec.entities == frozenset({"add", "sub"})

    out = ns.add(a=1, b=2)
    assert out.payload == {"url": source + "add", "extra": {"args": {"a": 1, "b": 2}}}


def test_scenario_b_fallback_with_lazy_meta(engine_factory, fake_client, source) -> None:
    fake_client.script("child_metas", source, ResultEnvelope.fail(502, "Action not implemented"))
    fake_client.script(
        "list", source, ResultEnvelope.success([{"name": "pyth", "type": "function", "uri": source + "pyth"}])
    )
    fake_client.script("meta", source + "pyth", ResultEnvelope.success({"summary": "Hypotenuse", "args": {}}))
    engine = engine_factory(fake_client)

    res = engine.use_remote_package(source, "My.Math")

    assert res.ok
    assert fake_client.actions() == ["child_metas", "list", "meta"]
    assert engine.namespaces.get("My.Math").names() == ["pyth"]
    assert engine.namespaces.meta("My.Math", "pyth")["summary"] == "Hypotenuse"


def test_scenario_c_missing_include_binds_nothing(engine_factory, fake_client, source) -> None:
    fake_client.script("child_metas", source, ResultEnvelope.success({source + "add": {"args": {}}}))
    engine = engine_factory(fake_client)

    res = engine.use_remote_package(source, "My.Math", include=["missing"])

    assert res.status == 400
    assert "'missing'" in res.message
    assert source in res.message
    ns = engine.namespaces.get("My.Math")
    assert ns is None or ns.names() == []
    assert engine.imports.get("My.Math") is None


def test_scenario_d_second_import_is_registry_hit(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)

    assert engine.use_remote_package(source, "My.Math").ok
    calls_after_first = len(math_client.calls)
    second = engine.use_remote_package(source, "My.Math")

    assert second.ok
    assert len(math_client.calls) == calls_after_first


def test_include_subset_then_wider_include_rediscovers(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)

    assert engine.use_remote_package(source, "My.Math", include=["add"]).ok
    assert engine.namespaces.get("My.Math").names() == ["add"]
    assert engine.use_remote_package(source, "My.Math", include=["add"]).ok
    assert math_client.actions() == ["child_metas"]

    assert engine.use_remote_package(source, "My.Math", include=["sub"]).ok
    assert math_client.actions() == ["child_metas", "child_metas"]
    assert engine.imports.get("My.Math").entities == frozenset({"add", "sub"})


def test_include_subset_then_full_import_rediscovers(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client)

    assert engine.use_remote_package(source, "My.Math", include=["add"]).ok
    assert engine.use_remote_package(source, "My.Math").ok

    assert math_client.actions() == ["child_metas", "child_metas"]
    assert engine.namespaces.get("My.Math").names() == ["add", "sub"]
    assert engine.imports.get("My.Math").complete

    assert engine.use_remote_package(source, "My.Math").ok
    assert engine.use_remote_package(source, "My.Math", include=["sub"]).ok
    assert math_client.actions() == ["child_metas", "child_metas"]


@pytest.mark.parametrize("target", ["My Math", "My.2Math", "1abc", "My::Math", "x.import"])
def test_invalid_target_fails_before_discovery(engine_factory, math_client, source, target) -> None:
    engine = engine_factory(math_client)

    res = engine.use_remote_package(source, target)

    assert res.status == 500
    assert target in res.message
    assert math_client.calls == []


@pytest.mark.parametrize("src,target", [(None, "My.Math"), ("", "My.Math"), ("   ", "My.Math"), ("http://x/My/", None), ("http://x/My/", "")])
def test_missing_source_or_target(engine_factory, math_client, src, target) -> None:
    res = engine_factory(math_client).use_remote_package(src, target)
    assert res.status == 400
    assert res.message.startswith("Please specify")
    assert math_client.calls == []


def test_invalid_location(engine_factory, math_client) -> None:
    res = engine_factory(math_client).use_remote_package("not a url", "My.Math")
    assert res.status == 400
    assert math_client.calls == []


def test_discovery_failure_preserves_remote_status(engine_factory, fake_client, source) -> None:
    fake_client.script("child_metas", source, ResultEnvelope.fail(401, "Unauthorized"))
    res = engine_factory(fake_client).use_remote_package(source, "My.Math")
    assert res.status == 500
    assert res.payload["remote"] == {"status": 401, "message": "Unauthorized", "payload": None}


def test_invalid_remote_entity_name_is_rejected(engine_factory, fake_client, source) -> None:
    fake_client.script("child_metas", source, ResultEnvelope.success({"ok_name": {"args": {}}, "bad-name": {"args": {}}}))
    engine = engine_factory(fake_client)

    res = engine.use_remote_package(source, "My.Math")

    assert res.status == 500
    assert "bad-name" in res.message
    assert engine.imports.get("My.Math") is None


def test_partial_binding_on_meta_failure_does_not_record(engine_factory, fake_client, source) -> None:
    fake_client.script("child_metas", source, ResultEnvelope.fail(502, "Action not implemented"))
    fake_client.script(
        "list",
        source,
        ResultEnvelope.success(
            [{"type": "function", "uri": source + "a"}, {"type": "function", "uri": source + "b"}]
        ),
    )
    fake_client.script("meta", source + "a", ResultEnvelope.success({"args": {}}))
    fake_client.script("meta", source + "b", ResultEnvelope.fail(500, "boom"))
    engine = engine_factory(fake_client)

    res = engine.use_remote_package(source, "My.Math")

    assert res.status == 500
    assert engine.namespaces.get("My.Math").names() == ["a"]
    assert engine.imports.get("My.Math") is None


def test_different_source_same_namespace_conflicts(engine_factory, math_client, source) -> None:
    other = "http://other.example/api/Math/"
    math_client.script("child_metas", other, ResultEnvelope.success({other + "add": {"args": {}}}))
    engine = engine_factory(math_client)
    assert engine.use_remote_package(source, "My.Math").ok

    res = engine.use_remote_package(other, "My.Math")

    assert res.status == 409
    assert res.payload["previous_source"] == source
    assert engine.imports.get("My.Math").source == source


def test_allow_overwrite_replaces_colliding_bindings(engine_factory, math_client, source) -> None:
    other = "http://other.example/api/Math/"
    math_client.script("child_metas", other, ResultEnvelope.success({other + "add": {"args": {}}}))
    engine = engine_factory(math_client)
    assert engine.use_remote_package(source, "My.Math").ok

    assert engine.use_remote_package(other, "My.Math", allow_overwrite=True).ok

    ns = engine.namespaces.get("My.Math")
    assert ns.resolve("add").remote_address == other + "add"
    assert ns.resolve("sub").remote_address == source + "sub"
    assert engine.imports.get("My.Math").source == other


def test_allow_overwrite_from_settings(engine_factory, math_client, source) -> None:
    other = "http://other.example/api/Math/"
    math_client.script("child_metas", other, ResultEnvelope.success({other + "add": {"args": {}}}))
    engine = engine_factory(math_client, settings_override=Settings(importer=ImporterConfig(allow_overwrite=True)))
    assert engine.use_remote_package(source, "My.Math").ok
    assert engine.use_remote_package(other, "My.Math").ok


def test_annotation_can_be_disabled(engine_factory, math_client, source) -> None:
    engine = engine_factory(math_client, settings_override=Settings(importer=ImporterConfig(annotate_metadata=False)))
    assert engine.use_remote_package(source, "My.Math").ok
    assert "_note" not in engine.namespaces.meta("My.Math", "add")
