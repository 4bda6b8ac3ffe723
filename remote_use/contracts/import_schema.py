# ==============================
# Import Contracts
# ==============================
"""
Data contracts for the discovery + proxy synthesis pipeline.

Intended usage:
- importer/location.py produces LocationDescriptor
- importer/discovery.py produces DiscoveredEntity
- importer/registry.py stores ImportRecord
"""

# ==============================
# Imports
# ==============================
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field


# ==============================
# Models
# ==============================
class LocationDescriptor(BaseModel):
    """Parsed source address (scheme + path). Immutable."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    scheme: str = Field(..., description="Lowercased URL scheme (py, http, https, pm, ...).")
    path: str = Field(..., min_length=1, description="Hierarchical path, non-empty.")
    authority: str = Field(default="", description="host[:port] for //-style addresses.")

    @property
    def url(self) -> str:
        if self.authority:
            return f"{self.scheme}://{self.authority}{self.path}"
        return f"{self.scheme}:{self.path}"

    @property
    def is_package(self) -> bool:
        return self.path.endswith("/")

    def child(self, name: str) -> str:
        return self.url.rstrip("/") + "/" + name

    def resolve(self, address: str) -> str:
        """Absolute addresses pass through; relative ones become children of this location."""
        if ":" in address.split("/", 1)[0]:
            return address
        return self.child(address.rstrip("/").rsplit("/", 1)[-1])

    def module_name(self) -> str:
        """
        Dotted namespace derived from the address.

        pm://Foo::Bar -> Foo.Bar
        py:/foo/bar/  -> foo.bar
        """
        raw = self.path.strip("/")
        if not raw and self.authority:
            raw = self.authority
        return raw.replace("::", ".").replace("/", ".")

    def __str__(self) -> str:
        return self.url


class DiscoveredEntity(BaseModel):
    """A callable entity found at a location. metadata may be fetched lazily."""
    model_config = ConfigDict(extra="forbid")

    name: str
    remote_address: str
    metadata: Optional[Dict[str, Any]] = None


class ImportRecord(BaseModel):
    """One record per successfully completed import into a namespace."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    namespace: str
    source: str
    entities: FrozenSet[str] = Field(default_factory=frozenset)
    complete: bool = Field(default=False, description="Every callable at source was bound (no include filter).")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
