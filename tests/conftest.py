"""Shared fixtures: a realistic edge metadata object and an app wrapper."""
from __future__ import annotations

import copy

import pytest

EDGE_METADATA = {
    "colo": "FRA",
    "country": "DE",
    "city": "Munich",
    "continent": "EU",
    "latitude": "48.13743",
    "longitude": "11.57549",
    "postalCode": "80331",
    "metroCode": None,
    "region": "Bavaria",
    "regionCode": "BY",
    "timezone": "Europe/Berlin",
    "isEUCountry": "1",
    "asn": 3320,
    "asOrganization": "Deutsche Telekom AG",
    "httpProtocol": "HTTP/2",
    "tlsVersion": "TLSv1.3",
    "tlsCipher": "AEAD-AES128-GCM-SHA256",
    "tlsClientAuth": {"certPresented": "0", "certVerified": "NONE"},
    "tlsClientCiphersSha1": "JZtiTn8H/ntxORk+XXvU2EvNoz8=",
    "tlsClientExtensionsSha1": "Y7DIC8A6G0/aXviZ8ie/xDbJb7g=",
    "tlsClientExtensionsSha1Le": "6e+q3vPm88rSgMTN/h7WTTxQ2wQ=",
    "tlsClientHelloLength": "508",
    "tlsClientRandom": "84qqCkZxHnnQHLKC5ep5VwsEGBgp7T5bnFXCyrqM8W0=",
    "clientAcceptEncoding": "gzip, deflate, br",
    "requestPriority": "weight=256;exclusive=1",
    "hostMetadata": None,
    "botManagement": {"score": 99, "verifiedBot": False, "staticResource": False},
}


def with_metadata(app, metadata, key: str = "cf"):
    """Wrap an ASGI app so each HTTP request carries metadata, as an edge runtime would."""

    async def asgi(scope, receive, send):
        if scope["type"] == "http":
            scope = dict(scope)
            scope[key] = metadata
        await app(scope, receive, send)

    return asgi


@pytest.fixture
def edge_metadata():
    """A fresh copy of the sample edge metadata."""
    return copy.deepcopy(EDGE_METADATA)


@pytest.fixture
def wrap_metadata():
    """The metadata-attaching wrapper, for tests that build their own app."""
    return with_metadata
