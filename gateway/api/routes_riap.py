# ==============================
# Package Routes
# ==============================
"""
Serve local Python packages over HTTP.

POST /api/<module path>/          action on a package (list, child_metas, meta)
POST /api/<module path>/<func>    action on a function (meta, call)

The body selects the action; the response body is always an envelope
{"status", "message", "payload"} with HTTP 200, the envelope status carrying
the outcome.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from remote_use.access.local_backend import LocalAccessClient
from gateway.api.deps import get_local_client


router = APIRouter()


class PackageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    action: str = Field(..., description="list | child_metas | meta | call")
    detail: bool = Field(default=False, description="list: return dicts instead of names.")
    args: Dict[str, Any] = Field(default_factory=dict, description="call: keyword arguments.")
    argv: Optional[List[Any]] = Field(default=None, description="call: positional arguments.")

    def extra(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.detail:
            out["detail"] = True
        if self.args:
            out["args"] = self.args
        if self.argv:
            out["argv"] = self.argv
        return out


@router.post("/{path:path}")
def package_action(
    path: str,
    body: PackageRequest,
    client: LocalAccessClient = Depends(get_local_client),
) -> Dict[str, Any]:
    url = f"{client.scheme}:/{path}"
    res = client.request(body.action, url, body.extra())
    return res.to_dict()
