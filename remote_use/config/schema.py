# ==============================
# Config Schemas (Pydantic)
# ==============================
"""
Pydantic settings models for remote_use.

Notes:
- No env reads here. No file IO here. Pure types + defaults.
- loader.py builds a single Settings object with precedence merging.

Precedence (implemented in loader.py):
env > .env > configs/*.yaml > defaults
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


# ==============================
# Access Settings
# ==============================


class AccessConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout for HTTP access.")
    user_agent: str = Field(default="remote_use/0.1", min_length=1)
    headers: Dict[str, str] = Field(default_factory=dict, description="Extra HTTP headers.")
    local_scheme: str = Field(default="py", description="Scheme served by the in-process backend.")
    local_actions: List[str] = Field(
        default_factory=lambda: ["child_metas", "list", "meta", "call"],
        description="Actions the in-process backend answers; others get 502.",
    )
    local_packages: List[str] = Field(
        default_factory=lambda: ["remote_use.demo"],
        description="Module prefixes the in-process backend may import; anything else is 404.",
    )


# ==============================
# Importer Settings
# ==============================


class ImporterConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    allow_overwrite: bool = Field(
        default=False,
        description="Allow re-importing a namespace from a different source (last import wins).",
    )
    annotate_metadata: bool = Field(default=True, description="Add a provenance _note to published metadata.")
    note_prefix: str = Field(default="Imported by remote_use")


# ==============================
# Logging Settings
# ==============================


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = Field(default="INFO")
    console: bool = Field(default=True)
    json_lines: bool = Field(default=True, description="Emit JSON lines instead of plain text.")


# ==============================
# Top-Level Settings
# ==============================


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    access: AccessConfig = Field(default_factory=AccessConfig)
    importer: ImporterConfig = Field(default_factory=ImporterConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
