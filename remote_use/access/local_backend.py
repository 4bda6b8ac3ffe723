# ==============================
# Local Access Backend
# ==============================
"""
Local backend serves in-process Python modules as remote packages.

Addressing (scheme `py`):
- py:/remote_use/demo/arith/     -> module remote_use.demo.arith (package)
- py:/remote_use/demo/arith/add  -> function add in that module

Metadata:
- A module may define META = {"func_name": {...}} (summary, args, result_naked, ...)
- Functions without a META entry get metadata generated from their signature
- META entries for non-functions are listed as type "variable"

Exposure:
- Only modules at or below one of `packages` (dotted prefixes) are imported.
  Any other module path answers 404 and is never imported.

Rules:
- Never raises for request-level failures; always returns ResultEnvelope.
- Functions are naked by default: their return value becomes the payload.
  META entries with result_naked=False return a [status, message, payload] triple.
"""

from __future__ import annotations

import importlib
import inspect
import logging
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from remote_use.access.base import (
    ACTION_CALL,
    ACTION_CHILD_METAS,
    ACTION_LIST,
    ACTION_META,
    KNOWN_ACTIONS,
    AccessClient,
)
from remote_use.contracts.errors import InvalidLocation
from remote_use.contracts.result_schema import (
    STATUS_ACTION_UNSUPPORTED,
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL,
    STATUS_NOT_FOUND,
    ResultEnvelope,
)
from remote_use.importer.location import DEFAULT_LOCAL_SCHEME, parse

logger = logging.getLogger(__name__)

META_ATTR = "META"
DEFAULT_PACKAGES = ("remote_use.demo",)


class LocalAccessClient(AccessClient):
    name: str = "local"

    def __init__(
        self,
        *,
        scheme: str = DEFAULT_LOCAL_SCHEME,
        actions: Optional[Iterable[str]] = None,
        packages: Optional[Iterable[str]] = None,
    ) -> None:
        self.scheme = scheme
        self.schemes = (scheme,)
        self.actions = frozenset(actions) if actions is not None else frozenset(KNOWN_ACTIONS)
        self.packages = tuple(packages) if packages is not None else DEFAULT_PACKAGES

    def request(self, action: str, url: str, extra: Optional[Dict[str, Any]] = None) -> ResultEnvelope:
        extra = extra or {}
        if action not in KNOWN_ACTIONS or action not in self.actions:
            return ResultEnvelope.fail(STATUS_ACTION_UNSUPPORTED, f"Action '{action}' not implemented")

        try:
            loc = parse(url, local_scheme=self.scheme)
        except InvalidLocation as exc:
            return exc.to_envelope()
        if loc.scheme != self.scheme:
            return ResultEnvelope.fail(STATUS_BAD_REQUEST, f"Unsupported scheme '{loc.scheme}' for local access")

        if loc.is_package:
            module_name = loc.path.strip("/").replace("/", ".")
            entity = None
        else:
            module_path, _, entity = loc.path.rpartition("/")
            module_name = module_path.strip("/").replace("/", ".")

        if not self.exposes(module_name):
            logger.warning("Refused access to unexposed module %s", module_name)
            return ResultEnvelope.fail(STATUS_NOT_FOUND, f"Can't find package `{module_name}`")
        module = _import(module_name)
        if module is None:
            return ResultEnvelope.fail(STATUS_NOT_FOUND, f"Can't find package `{module_name}`")

        if action == ACTION_LIST:
            if entity is not None:
                return ResultEnvelope.fail(STATUS_BAD_REQUEST, "Action 'list' requires a package URL (ending with /)")
            return self._list(module, detail=bool(extra.get("detail")))
        if action == ACTION_CHILD_METAS:
            if entity is not None:
                return ResultEnvelope.fail(STATUS_BAD_REQUEST, "Action 'child_metas' requires a package URL (ending with /)")
            return ResultEnvelope.success({name: meta for name, _, meta in _children(module)})
        if action == ACTION_META:
            if entity is None:
                return ResultEnvelope.success(_module_meta(module))
            return self._meta(module, entity)
        if entity is None:
            return ResultEnvelope.fail(STATUS_BAD_REQUEST, "Action 'call' requires a function URL")
        return self._call(module, entity, args=extra.get("args") or {}, argv=extra.get("argv") or [])

    def exposes(self, module_name: str) -> bool:
        return any(module_name == p or module_name.startswith(p + ".") for p in self.packages)

    def _list(self, module: ModuleType, *, detail: bool) -> ResultEnvelope:
        entries: List[Any] = []
        for name, kind, _ in _children(module):
            entries.append({"name": name, "type": kind, "uri": name} if detail else name)
        return ResultEnvelope.success(entries)

    def _meta(self, module: ModuleType, entity: str) -> ResultEnvelope:
        for name, _, meta in _children(module):
            if name == entity:
                return ResultEnvelope.success(meta)
        return ResultEnvelope.fail(STATUS_NOT_FOUND, f"No such entity `{entity}` in `{module.__name__}`")

    def _call(self, module: ModuleType, entity: str, *, args: Dict[str, Any], argv: List[Any]) -> ResultEnvelope:
        func = _public_functions(module).get(entity)
        if func is None:
            return ResultEnvelope.fail(STATUS_NOT_FOUND, f"No such function `{entity}` in `{module.__name__}`")
        meta = _declared_meta(module).get(entity) or {}
        try:
            result = func(*argv, **args)
        except Exception as exc:
            logger.warning("Local function %s.%s died: %s", module.__name__, entity, exc)
            return ResultEnvelope.fail(STATUS_INTERNAL, f"Function died: {exc}")
        if meta.get("result_naked", True):
            return ResultEnvelope.success(result)
        try:
            return ResultEnvelope.from_wire(result)
        except ValueError as exc:
            return ResultEnvelope.fail(STATUS_INTERNAL, f"Invalid result from `{entity}`: {exc}")


# ==============================
# Helpers
# ==============================
def _import(module_name: str) -> Optional[ModuleType]:
    if not module_name:
        return None
    try:
        return importlib.import_module(module_name)
    except ImportError as exc:
        logger.debug("Can't import %s: %s", module_name, exc)
        return None


def _declared_meta(module: ModuleType) -> Dict[str, Dict[str, Any]]:
    meta = getattr(module, META_ATTR, None)
    return meta if isinstance(meta, dict) else {}


def _public_functions(module: ModuleType) -> Dict[str, Callable[..., Any]]:
    out: Dict[str, Callable[..., Any]] = {}
    for name, obj in vars(module).items():
        if name.startswith("_"):
            continue
        if inspect.isfunction(obj) and obj.__module__ == module.__name__:
            out[name] = obj
    return out


def _children(module: ModuleType) -> List[Tuple[str, str, Dict[str, Any]]]:
    """(name, type, meta) for every child, in definition order."""
    declared = _declared_meta(module)
    funcs = _public_functions(module)
    out: List[Tuple[str, str, Dict[str, Any]]] = []
    for name, func in funcs.items():
        out.append((name, "function", declared.get(name) or _signature_meta(func)))
    for name, meta in declared.items():
        if name not in funcs:
            out.append((name, "variable", dict(meta)))
    return out


def _signature_meta(func: Callable[..., Any]) -> Dict[str, Any]:
    args: Dict[str, Dict[str, Any]] = {}
    pos = 0
    for param in inspect.signature(func).parameters.values():
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        spec: Dict[str, Any] = {"req": param.default is param.empty}
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            spec["pos"] = pos
            pos += 1
        args[param.name] = spec
    meta: Dict[str, Any] = {"v": 1.1, "args": args}
    doc = inspect.getdoc(func)
    if doc:
        meta["summary"] = doc.splitlines()[0]
    return meta


def _module_meta(module: ModuleType) -> Dict[str, Any]:
    meta: Dict[str, Any] = {"v": 1.1}
    doc = inspect.getdoc(module)
    if doc:
        meta["summary"] = doc.splitlines()[0]
    return meta
