# ==============================
# Namespace Table
# ==============================
"""
Explicit owned tables for synthesized bindings.

Design:
- One Namespace per target name (e.g. "My.Math")
- Namespace stores name -> proxy callable and name -> published metadata
- Callers resolve bindings through the table (or attribute access on the
  Namespace) instead of relying on module globals

Not locked: concurrent imports into the same namespace must be serialized by the caller.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional


class Namespace:
    def __init__(self, name: str) -> None:
        self.name = name
        self._bindings: Dict[str, Callable[..., Any]] = {}
        self._metas: Dict[str, Optional[Dict[str, Any]]] = {}

    def bind(self, name: str, func: Callable[..., Any], meta: Optional[Dict[str, Any]] = None) -> None:
        self._bindings[name] = func
        self._metas[name] = meta

    def resolve(self, name: str) -> Callable[..., Any]:
        func = self._bindings.get(name)
        if func is None:
            raise KeyError(f"Unknown function: {self.name}.{name}")
        return func

    def meta(self, name: str) -> Optional[Dict[str, Any]]:
        if name not in self._metas:
            raise KeyError(f"Unknown function: {self.name}.{name}")
        return self._metas[name]

    def names(self) -> List[str]:
        return list(self._bindings)

    def list(self) -> Dict[str, Dict[str, Any]]:
        return {k: {"name": k, "meta": self._metas.get(k)} for k in self._bindings}

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._bindings[name]
        except KeyError:
            raise AttributeError(f"Namespace {self.name!r} has no function {name!r}") from None

    def __repr__(self) -> str:
        return f"<Namespace {self.name} ({len(self._bindings)} functions)>"


class NamespaceTable:
    def __init__(self) -> None:
        self._namespaces: Dict[str, Namespace] = {}

    def ensure(self, name: str) -> Namespace:
        ns = self._namespaces.get(name)
        if ns is None:
            ns = Namespace(name)
            self._namespaces[name] = ns
        return ns

    def get(self, name: str) -> Optional[Namespace]:
        return self._namespaces.get(name)

    def resolve(self, namespace: str, name: str) -> Callable[..., Any]:
        ns = self._namespaces.get(namespace)
        if ns is None:
            raise KeyError(f"Unknown namespace: {namespace}")
        return ns.resolve(name)

    def meta(self, namespace: str, name: str) -> Optional[Dict[str, Any]]:
        ns = self._namespaces.get(namespace)
        if ns is None:
            raise KeyError(f"Unknown namespace: {namespace}")
        return ns.meta(name)

    def names(self) -> List[str]:
        return list(self._namespaces)

    def clear(self) -> None:
        self._namespaces.clear()
