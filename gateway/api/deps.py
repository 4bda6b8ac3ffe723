# ==============================
# API Dependencies / Singletons
# ==============================
from __future__ import annotations

from functools import lru_cache

from remote_use.access.local_backend import LocalAccessClient
from remote_use.config.loader import load_settings
from remote_use.config.schema import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def get_local_client() -> LocalAccessClient:
    access = get_settings().access
    return LocalAccessClient(
        scheme=access.local_scheme, actions=access.local_actions, packages=access.local_packages
    )
