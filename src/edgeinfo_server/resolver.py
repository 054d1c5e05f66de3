from __future__ import annotations

from typing import Mapping, Optional

from starlette.datastructures import Headers

from .models import ClientIdentity, RequestHeaderSnapshot

NOT_PROVIDED = "not provided"

CONNECTING_IP_HEADER = "cf-connecting-ip"
FORWARDED_FOR_HEADER = "x-forwarded-for"
REAL_IP_HEADER = "x-real-ip"

# Snapshot field -> request header
SNAPSHOT_HEADERS = {
    "userAgent": "user-agent",
    "acceptLanguage": "accept-language",
    "accept": "accept",
    "acceptEncoding": "accept-encoding",
    "referer": "referer",
    "origin": "origin",
    "cfRay": "cf-ray",
    "cfVisitor": "cf-visitor",
    "cfCountry": "cf-ipcountry",
}


def as_headers(headers: Mapping[str, str]) -> Headers:
    """Case-insensitive view over a plain mapping; Starlette headers pass through."""
    if isinstance(headers, Headers):
        return headers
    return Headers(headers=dict(headers))


def _first_forwarded(value: Optional[str]) -> Optional[str]:
    # XFF can be "client, proxy1, proxy2"
    if not value:
        return None
    return value.split(",")[0].strip()


def resolve_client_ip(headers: Mapping[str, str]) -> str:
    h = as_headers(headers)
    candidates = (
        h.get(CONNECTING_IP_HEADER),
        _first_forwarded(h.get(FORWARDED_FOR_HEADER)),
        h.get(REAL_IP_HEADER),
    )
    return next((c for c in candidates if c), NOT_PROVIDED)


def client_identity(headers: Mapping[str, str]) -> ClientIdentity:
    h = as_headers(headers)
    return ClientIdentity(
        address=resolve_client_ip(h),
        cfConnectingIP=h.get(CONNECTING_IP_HEADER),
        xForwardedFor=h.get(FORWARDED_FOR_HEADER),
        xRealIP=h.get(REAL_IP_HEADER),
    )


def header_snapshot(headers: Mapping[str, str]) -> RequestHeaderSnapshot:
    h = as_headers(headers)
    return RequestHeaderSnapshot.model_validate(
        {field: h.get(name) or None for field, name in SNAPSHOT_HEADERS.items()}
    )
