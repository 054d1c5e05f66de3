from __future__ import annotations

from typing import Any, Mapping, Optional

from .metadata import field
from .models import (
    METADATA_UNAVAILABLE,
    InfoRecord,
    LocationInfo,
    MinimalInfo,
    NetworkInfo,
    ProtocolInfo,
    RequestMetaInfo,
)
from .resolver import as_headers, client_identity, header_snapshot, resolve_client_ip

MINIMAL_FIELDS = ("asn", "asOrganization", "country", "city", "region", "timezone")


def extract_minimal(headers: Mapping[str, str], metadata: Optional[Any]) -> MinimalInfo:
    """IP plus ASN and coarse location, for the lightweight lookup endpoint."""
    ip = resolve_client_ip(headers)
    if metadata is None:
        return MinimalInfo(ip=ip, error=METADATA_UNAVAILABLE)
    # Empty values read as null here, unlike the full record.
    return MinimalInfo.model_validate(
        {"ip": ip, **{name: field(metadata, name) or None for name in MINIMAL_FIELDS}}
    )


def _group(cls, metadata: Any):
    group = cls.from_metadata(metadata)
    return None if group.is_empty() else group


def extract_full(headers: Mapping[str, str], metadata: Optional[Any]) -> InfoRecord:
    """Everything the request and the edge runtime tell us about the client."""
    h = as_headers(headers)
    identity = client_identity(h)
    snapshot = header_snapshot(h)
    if metadata is None:
        return InfoRecord(ip=identity, request_headers=snapshot, error=METADATA_UNAVAILABLE)

    return InfoRecord(
        ip=identity,
        location=_group(LocationInfo, metadata),
        network=_group(NetworkInfo, metadata),
        protocol=_group(ProtocolInfo, metadata),
        request=_group(RequestMetaInfo, metadata),
        request_headers=snapshot,
        bot_management=field(metadata, "botManagement"),
    )
