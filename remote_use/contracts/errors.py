# ==============================
# Error Contracts
# ==============================
"""
Exceptions raised inside the importer.

Internal steps raise these; public operations convert them into a
ResultEnvelope at the boundary (see importer/engine.py). The exception carries
the envelope fields so the conversion is lossless.
"""

from __future__ import annotations

from typing import Any, Optional

from remote_use.contracts.result_schema import (
    STATUS_BAD_REQUEST,
    STATUS_CONFLICT,
    STATUS_INTERNAL,
    ResultEnvelope,
)


class RemoteUseError(Exception):
    status: int = STATUS_INTERNAL

    def __init__(self, message: str, *, status: Optional[int] = None, payload: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        self.payload = payload

    def to_envelope(self) -> ResultEnvelope:
        return ResultEnvelope.fail(self.status, self.message, self.payload)


class MissingArgument(RemoteUseError):
    status = STATUS_BAD_REQUEST


class InvalidLocation(RemoteUseError):
    status = STATUS_BAD_REQUEST


class InvalidIdentifier(RemoteUseError):
    status = STATUS_INTERNAL


class UnknownEntity(RemoteUseError):
    status = STATUS_BAD_REQUEST


class NamespaceConflict(RemoteUseError):
    status = STATUS_CONFLICT


class DiscoveryError(RemoteUseError):
    """A non-success response from the access client during discovery or meta fetch."""
    status = STATUS_INTERNAL

    @classmethod
    def from_remote(cls, *, action: str, url: str, remote: ResultEnvelope) -> "DiscoveryError":
        wrapped = ResultEnvelope.wrap_remote(f"Can't request action '{action}' on URL {url}", remote)
        return cls(wrapped.message, payload=wrapped.payload)


class RemoteImportError(RuntimeError):
    """Fatal error raised by the import-into-scope entry point."""
