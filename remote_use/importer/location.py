# ==============================
# Location Descriptor Resolver
# ==============================
"""
Parse raw source strings into LocationDescriptor.

Accepted forms:
- scheme://authority/path   (http://example.com/api/My/Math/, pm://Foo::Bar)
- scheme:/path              (py:/remote_use/demo/arith/)
- /path                     (bare absolute path, resolved to the local scheme)

No side effects.
"""

from __future__ import annotations

import re

from remote_use.contracts.errors import InvalidLocation
from remote_use.contracts.import_schema import LocationDescriptor

DEFAULT_LOCAL_SCHEME = "py"

_SCHEME_RE = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]*):(?P<rest>.*)$")


def parse(raw: str, *, local_scheme: str = DEFAULT_LOCAL_SCHEME) -> LocationDescriptor:
    if raw is None or not str(raw).strip():
        raise InvalidLocation("Please specify source location")
    text = str(raw).strip()

    if text.startswith("/"):
        return LocationDescriptor(scheme=local_scheme, path=text)

    m = _SCHEME_RE.match(text)
    if m is None:
        raise InvalidLocation(f"Invalid location `{text}`: expected scheme:/path or /path")

    scheme = m.group("scheme").lower()
    rest = m.group("rest")
    authority = ""
    if rest.startswith("//"):
        authority, sep, tail = rest[2:].partition("/")
        if not authority:
            raise InvalidLocation(f"Invalid location `{text}`: empty authority")
        path = sep + tail if sep else "/"
    else:
        path = rest

    if not path:
        raise InvalidLocation(f"Invalid location `{text}`: empty path")
    if not path.startswith("/"):
        raise InvalidLocation(f"Invalid location `{text}`: path must be absolute")
    return LocationDescriptor(scheme=scheme, path=path, authority=authority)
