# ==============================
# CLI Entrypoint
# ==============================
"""
CLI for remote_use.

Supported commands:
  remote-use list py:/remote_use/demo/arith/ --detail
  remote-use meta py:/remote_use/demo/arith/pyth
  remote-use call py:/remote_use/demo/arith/pyth --args '{"a": 3, "b": 4}'
  remote-use load http://localhost:8000/api/remote_use/demo/arith/ --into demo.arith --include add sub
  remote-use load-legacy py:/remote_use/demo/arith/
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from remote_use.access.base import ACTION_CALL, ACTION_LIST, ACTION_META
from remote_use.config.loader import load_settings
from remote_use.contracts.result_schema import ResultEnvelope
from remote_use.importer.engine import RemoteUseEngine
from remote_use.logging.logger import bootstrap_logger


def _json_load(text: str) -> Dict[str, Any]:
    try:
        value = json.loads(text)
    except ValueError as exc:
        raise SystemExit(f"Invalid JSON arguments: {exc}") from exc
    if not isinstance(value, dict):
        raise SystemExit("JSON arguments must be an object.")
    return value


def _load_args_arg(args: Optional[str], args_file: Optional[str]) -> Dict[str, Any]:
    if args and args_file:
        raise SystemExit("Provide only one of --args or --args-file.")
    if args_file:
        return _json_load(Path(args_file).read_text(encoding="utf-8"))
    if args:
        return _json_load(args)
    return {}


def _print_json(obj: Any) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False, default=str))


def _emit(res: ResultEnvelope, **extra: Any) -> int:
    body = res.to_dict()
    body.update(extra)
    _print_json(body)
    return 0 if res.ok else 1


def cmd_list(engine: RemoteUseEngine, *, url: str, detail: bool) -> int:
    return _emit(engine.client.request(ACTION_LIST, url, {"detail": True} if detail else None))


def cmd_meta(engine: RemoteUseEngine, *, url: str) -> int:
    return _emit(engine.client.request(ACTION_META, url))


def cmd_call(engine: RemoteUseEngine, *, url: str, args: Dict[str, Any]) -> int:
    return _emit(engine.client.request(ACTION_CALL, url, {"args": args}))


def cmd_load(engine: RemoteUseEngine, *, url: str, into: str, include: List[str]) -> int:
    res = engine.use_remote_package(url, into, include)
    ns = engine.namespaces.get(into)
    return _emit(res, functions=ns.list() if ns is not None else {})


def cmd_load_legacy(engine: RemoteUseEngine, *, url: str, into: Optional[str]) -> int:
    return _emit(engine.load_remote_module(url, into))


def main(argv: Optional[List[str]] = None, *, engine: Optional[RemoteUseEngine] = None) -> int:
    ap = argparse.ArgumentParser(prog="remote-use")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_list = sub.add_parser("list", help="List the children of a package")
    ap_list.add_argument("url")
    ap_list.add_argument("--detail", action="store_true", help="Include type and uri of each child")

    ap_meta = sub.add_parser("meta", help="Show metadata of a package or function")
    ap_meta.add_argument("url")

    ap_call = sub.add_parser("call", help="Call a remote function")
    ap_call.add_argument("url")
    ap_call.add_argument("--args", help="JSON object string", default=None)
    ap_call.add_argument("--args-file", help="Path to JSON file with arguments", default=None)

    ap_load = sub.add_parser("load", help="Discover and bind a package into a namespace")
    ap_load.add_argument("url")
    ap_load.add_argument("--into", required=True, help="Target namespace, e.g. My.Math")
    ap_load.add_argument("--include", nargs="*", default=[], help="Only bind these functions")

    ap_legacy = sub.add_parser("load-legacy", help="Bind function names only (no metadata)")
    ap_legacy.add_argument("url")
    ap_legacy.add_argument("--into", default=None, help="Target namespace (derived from url if omitted)")

    args = ap.parse_args(argv)

    if engine is None:
        settings = load_settings()
        bootstrap_logger(settings)
        engine = RemoteUseEngine.from_settings(settings)

    if args.cmd == "list":
        return cmd_list(engine, url=args.url, detail=args.detail)
    if args.cmd == "meta":
        return cmd_meta(engine, url=args.url)
    if args.cmd == "call":
        return cmd_call(engine, url=args.url, args=_load_args_arg(args.args, args.args_file))
    if args.cmd == "load":
        return cmd_load(engine, url=args.url, into=args.into, include=args.include)
    if args.cmd == "load-legacy":
        return cmd_load_legacy(engine, url=args.url, into=args.into)

    raise SystemExit("Unknown command")


if __name__ == "__main__":
    raise SystemExit(main())
