# ==============================
# Result Envelope Contract
# ==============================
"""
Result envelope for remote_use.

Every public operation and every access-client request returns the same shape:
  status: HTTP-style int (200 ok, 4xx caller error, 5xx remote/internal error)
  message: human readable summary
  payload: optional result data

On the wire the envelope travels as a [status, message, payload] triple; dict
bodies ({"status", "message", "payload"}) are accepted too.
"""

# ==============================
# Imports
# ==============================
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# ==============================
# Status Codes
# ==============================
STATUS_OK = 200
STATUS_BAD_REQUEST = 400
STATUS_NOT_FOUND = 404
STATUS_CONFLICT = 409
STATUS_INTERNAL = 500
STATUS_NOT_IMPLEMENTED = 501
STATUS_ACTION_UNSUPPORTED = 502


# ==============================
# Models
# ==============================
class ResultEnvelope(BaseModel):
    """Uniform return/error shape. Errors are data, not control flow."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    status: int = Field(..., description="HTTP-style status code.")
    message: str = Field(default="", description="Human readable message.")
    payload: Optional[Any] = Field(default=None, description="Optional result payload.")

    @property
    def ok(self) -> bool:
        return self.status == STATUS_OK

    @classmethod
    def success(cls, payload: Optional[Any] = None, message: str = "OK") -> "ResultEnvelope":
        return cls(status=STATUS_OK, message=message, payload=payload)

    @classmethod
    def fail(cls, status: int, message: str, payload: Optional[Any] = None) -> "ResultEnvelope":
        return cls(status=status, message=message, payload=payload)

    @classmethod
    def wrap_remote(cls, message: str, remote: "ResultEnvelope", *, status: int = STATUS_INTERNAL) -> "ResultEnvelope":
        """
        Wrap a failed remote envelope with a local message.

        The remote status/message are appended to the message and kept verbatim
        in payload["remote"] for diagnosis.
        """
        return cls(
            status=status,
            message=f"{message}: {remote.status} - {remote.message}",
            payload={"remote": remote.to_dict()},
        )

    @classmethod
    def from_wire(cls, body: Any) -> "ResultEnvelope":
        """Decode a [status, message, payload] triple or a dict body."""
        if isinstance(body, (list, tuple)):
            if not body or not isinstance(body[0], int):
                raise ValueError(f"Malformed envelope: {body!r}")
            message = str(body[1]) if len(body) > 1 and body[1] is not None else ""
            payload = body[2] if len(body) > 2 else None
            return cls(status=body[0], message=message, payload=payload)
        if isinstance(body, dict) and isinstance(body.get("status"), int):
            return cls(status=body["status"], message=str(body.get("message") or ""), payload=body.get("payload"))
        raise ValueError(f"Malformed envelope: {body!r}")

    def to_wire(self) -> List[Any]:
        return [self.status, self.message, self.payload]

    def to_dict(self) -> Dict[str, Any]:
        """Stable serialization wrapper."""
        return self.model_dump(mode="python")
