# ==============================
# Remote Use Engine
# ==============================
"""
Public entry points for using remote packages as local namespaces.

Operations:
- use_remote_package(source, target, include): discover + bind into target
- load_remote_module(source, target): legacy name-only variant
- use(source, *names, scope=globals()): bind into a caller scope, raise on failure

Rules:
- Public operations never raise for expected failures; they return ResultEnvelope.
  use() is the exception: it converts any non-200 result into RemoteImportError.
- Local validation happens before any access-client request.
- The import registry is updated only after every entity was bound.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Callable, Dict, Iterable, List, MutableMapping, Optional

from remote_use.access.base import ACTION_LIST, AccessClient
from remote_use.access.router import AccessRouter
from remote_use.config.loader import load_settings
from remote_use.config.schema import Settings
from remote_use.contracts.errors import (
    NamespaceConflict,
    RemoteImportError,
    RemoteUseError,
)
from remote_use.contracts.result_schema import (
    STATUS_BAD_REQUEST,
    STATUS_INTERNAL,
    ResultEnvelope,
)
from remote_use.importer.discovery import discover, entity_name
from remote_use.importer.filtering import filter_entities
from remote_use.importer.location import parse
from remote_use.importer.namespaces import NamespaceTable
from remote_use.importer.registry import ImportRegistry
from remote_use.importer.synthesis import RemoteProxy, provenance_note, synthesize_all
from remote_use.logging.logger import LogContext, with_context
from remote_use.utils.validation import (
    is_valid_name,
    is_valid_namespace,
    require_non_empty,
    validate_name,
    validate_namespace,
)

logger = logging.getLogger(__name__)

ALL = ":all"


class RemoteUseEngine:
    def __init__(
        self,
        *,
        client: AccessClient,
        settings: Optional[Settings] = None,
        namespaces: Optional[NamespaceTable] = None,
        imports: Optional[ImportRegistry] = None,
    ) -> None:
        self.client = client
        self.settings = settings or Settings()
        self.namespaces = namespaces or NamespaceTable()
        self.imports = imports or ImportRegistry()

    @classmethod
    def from_settings(cls, settings: Settings, *, client: Optional[AccessClient] = None) -> "RemoteUseEngine":
        return cls(client=client or AccessRouter.from_settings(settings), settings=settings)

    # ==============================
    # Current variant
    # ==============================
    def use_remote_package(
        self,
        source: Optional[str],
        target: Optional[str],
        include: Optional[Iterable[str]] = None,
        *,
        allow_overwrite: Optional[bool] = None,
    ) -> ResultEnvelope:
        log = with_context(logger, LogContext(namespace=target, source=source))
        log.debug("-> use_remote_package(source=%s, target=%s, include=%s)", source, target, include)
        try:
            source = require_non_empty(source, what="source")
            target = require_non_empty(target, what="target")
            wanted = list(include or [])
            validate_namespace(target)
            loc = parse(source, local_scheme=self.settings.access.local_scheme)
            url = loc.url

            if self.imports.is_already_loaded(target, url, wanted or None):
                log.info("%s already loaded into %s, skipped", url, target)
                return ResultEnvelope.success()
            self._check_conflict(target, url, allow_overwrite)

            entities = discover(loc, self.client)
            selected = filter_entities(entities, wanted, source=url)
            for entity in selected:
                validate_name(entity.name)

            ns = self.namespaces.ensure(target)
            bound = synthesize_all(selected, ns, self.client, note=self._note(url))
        except RemoteUseError as exc:
            log.warning("use_remote_package failed: %s - %s", exc.status, exc.message)
            return exc.to_envelope()

        self.imports.record_import(target, url, bound, complete=not wanted)
        log.debug("<- use_remote_package() bound=%s", bound)
        return ResultEnvelope.success()

    def _check_conflict(self, target: str, url: str, allow_overwrite: Optional[bool]) -> None:
        rec = self.imports.get(target)
        if rec is None or rec.source == url:
            return
        allowed = self.settings.importer.allow_overwrite if allow_overwrite is None else allow_overwrite
        if allowed:
            logger.info("Overwriting namespace %s (was %s, now %s)", target, rec.source, url)
            return
        raise NamespaceConflict(
            f"Namespace `{target}` was already imported from {rec.source}",
            payload={"namespace": target, "previous_source": rec.source, "source": url},
        )

    def _note(self, url: str) -> Optional[str]:
        cfg = self.settings.importer
        if not cfg.annotate_metadata:
            return None
        return provenance_note(cfg.note_prefix, url, datetime.now(timezone.utc))

    # ==============================
    # Legacy variant
    # ==============================
    def load_remote_module(self, source: Optional[str], target: Optional[str] = None) -> ResultEnvelope:
        """
        Bind every function name listed at source, without fetching metadata.

        target defaults to the module name derived from source
        (pm://Foo::Bar -> Foo.Bar). Invalid function names are logged and skipped.
        """
        logger.debug("-> load_remote_module(source=%s, target=%s)", source, target)
        try:
            source = require_non_empty(source, what="source")
            loc = parse(source, local_scheme=self.settings.access.local_scheme)
        except RemoteUseError as exc:
            return exc.to_envelope()

        orig = loc.module_name()
        if not orig:
            return ResultEnvelope.fail(STATUS_BAD_REQUEST, "Source doesn't contain module name")
        target = target or orig
        if not is_valid_namespace(target):
            return ResultEnvelope.fail(STATUS_INTERNAL, f"Invalid module name `{target}`")

        res = self.client.request(ACTION_LIST, loc.url)
        if not res.ok:
            return ResultEnvelope.wrap_remote(f"Can't request action 'list' on URL {loc.url}", res)

        all_entities: List[str] = []
        for entry in res.payload if isinstance(res.payload, list) else []:
            address = (entry.get("uri") or entry.get("name")) if isinstance(entry, dict) else entry
            if not isinstance(address, str) or not address:
                logger.warning("Skipping malformed list entry %r from %s", entry, loc.url)
                continue
            all_entities.append(entity_name(address))

        ns = self.namespaces.ensure(target)
        loaded: List[str] = []
        for name in all_entities:
            if not is_valid_name(name):
                logger.error("Can't load function `%s`: invalid name", name)
                continue
            proxy = RemoteProxy(name=name, namespace=target, remote_address=loc.child(name), client=self.client)
            ns.bind(name, proxy)
            loaded.append(name)

        logger.debug("<- load_remote_module() loaded=%s", loaded)
        return ResultEnvelope.success(
            {
                "original_source": loc.url,
                "target": target,
                "all_entities": all_entities,
                "loaded_entities": loaded,
            }
        )

    # ==============================
    # Import-into-scope entry point
    # ==============================
    def use(
        self,
        source: Optional[str],
        *names: str,
        scope: MutableMapping[str, Any],
        target: Optional[str] = None,
        allow_overwrite: Optional[bool] = None,
    ) -> Dict[str, Callable[..., Any]]:
        """
        Bind remote functions into scope (typically the caller's globals()).

        names: explicit function names, or nothing / ALL for every function.
        target: namespace to populate, defaults to scope["__name__"].
        Raises RemoteImportError on any failure.
        """
        if not source:
            raise RemoteImportError("use: Please specify source as first argument")
        target = target or scope.get("__name__")
        if not target:
            raise RemoteImportError("use: Can't determine target namespace, pass target=")

        include = [] if (not names or ALL in names) else list(names)
        res = self.use_remote_package(source, target, include, allow_overwrite=allow_overwrite)
        if not res.ok:
            raise RemoteImportError(f"use: Can't use {source}: {res.status} - {res.message}")

        ns = self.namespaces.ensure(target)
        exported: Dict[str, Callable[..., Any]] = {}
        for name in include or ns.names():
            if name not in ns:
                raise RemoteImportError(f"use: function `{name}` is not available from {source}")
            exported[name] = ns.resolve(name)
        scope.update(exported)
        return exported


# ==============================
# Process-wide default engine
# ==============================
@lru_cache(maxsize=1)
def get_engine() -> RemoteUseEngine:
    return RemoteUseEngine.from_settings(load_settings())


def reset_engine() -> None:
    get_engine.cache_clear()


def use(
    source: str,
    *names: str,
    scope: MutableMapping[str, Any],
    target: Optional[str] = None,
    allow_overwrite: Optional[bool] = None,
) -> Dict[str, Callable[..., Any]]:
    """Module-level shortcut for get_engine().use(...)."""
    return get_engine().use(source, *names, scope=scope, target=target, allow_overwrite=allow_overwrite)
