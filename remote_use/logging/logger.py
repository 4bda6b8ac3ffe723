# ==============================
# Logging Bootstrap
# ==============================
"""
Logging bootstrap.

Goals:
- Centralize logger configuration using Settings.logging.
- Provide structured context fields (namespace, source).
- stdlib logging + JSON-line formatter.
"""

from __future__ import annotations

import json
import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Optional

from remote_use.config.schema import Settings

CONTEXT_FIELDS = ("namespace", "source")


@dataclass(frozen=True)
class LogContext:
    namespace: Optional[str] = None
    source: Optional[str] = None


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for k in CONTEXT_FIELDS:
            value = getattr(record, k, None)
            if value is not None:
                payload[k] = value
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def bootstrap_logger(settings: Settings) -> logging.Logger:
    """
    Configure the remote_use logger based on settings.
    Returns the package logger ("remote_use").
    """
    level = getattr(logging, settings.logging.level.upper(), logging.INFO)
    log = logging.getLogger("remote_use")
    log.setLevel(level)

    # clear existing handlers to avoid duplicates on re-bootstrap
    log.handlers = []

    if settings.logging.console:
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(level)
        if settings.logging.json_lines:
            handler.setFormatter(JsonLineFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        log.addHandler(handler)

    return log


def with_context(logger: logging.Logger, ctx: LogContext) -> logging.LoggerAdapter:
    return logging.LoggerAdapter(
        logger,
        {"namespace": ctx.namespace, "source": ctx.source},
    )
