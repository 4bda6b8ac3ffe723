# ==============================
# Validation Helpers
# ==============================
"""
Identifier validators used before any binding happens.

Names end up as live bindings in a shared namespace, so only conservative
identifiers are accepted: word characters, not starting with a digit, not a
Python keyword.

No side effects.
"""

from __future__ import annotations

import keyword
import re
from typing import Optional

from remote_use.contracts.errors import InvalidIdentifier, MissingArgument


_NAME_RE = re.compile(r"(?!\d)\w+", re.ASCII)
_NAMESPACE_RE = re.compile(r"(?!\d)\w+(\.(?!\d)\w+)*", re.ASCII)


def is_valid_name(name: str) -> bool:
    return bool(name) and bool(_NAME_RE.fullmatch(name)) and not keyword.iskeyword(name)


def is_valid_namespace(namespace: str) -> bool:
    if not namespace or not _NAMESPACE_RE.fullmatch(namespace):
        return False
    return not any(keyword.iskeyword(seg) for seg in namespace.split("."))


def validate_name(name: str) -> str:
    """Bare identifier for a single entity (e.g. `pyth`)."""
    if not is_valid_name(name):
        raise InvalidIdentifier(f"Invalid entity name `{name}`")
    return name


def validate_namespace(namespace: str) -> str:
    """Dotted identifier for a target namespace (e.g. `My.Math`)."""
    if not is_valid_namespace(namespace):
        raise InvalidIdentifier(f"Invalid module name `{namespace}`")
    return namespace


def require_non_empty(value: Optional[str], *, what: str) -> str:
    """Required operation argument, stripped of surrounding whitespace."""
    if value is None or not str(value).strip():
        raise MissingArgument(f"Please specify {what}")
    return str(value).strip()
