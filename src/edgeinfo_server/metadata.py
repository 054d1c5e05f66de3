"""Read access to the connection metadata attached by the edge runtime.

The runtime hands over either a mapping or an object exposing the platform's
fields as attributes. Nothing here writes to it.
"""
from __future__ import annotations

from typing import Any, Mapping

_MISSING = object()


def plain(value: Any) -> Any:
    """Convert nested mappings and sequences into JSON-ready dicts and lists."""
    if isinstance(value, Mapping):
        return {str(k): plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [plain(v) for v in value]
    return value


def field(meta: Any, name: str) -> Any:
    """Read one platform field; missing fields read as None."""
    if isinstance(meta, Mapping):
        value = meta.get(name)
    else:
        value = getattr(meta, name, _MISSING)
        if value is _MISSING:
            return None
    return plain(value)
