from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from .metadata import field

METADATA_UNAVAILABLE = "connection metadata unavailable"


class Group(BaseModel):
    """A named set of nullable leaves.

    Field aliases are the serialized keys, and for metadata groups they are
    also the platform's own field names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @classmethod
    def keys(cls) -> List[str]:
        return [f.alias or name for name, f in cls.model_fields.items()]

    @classmethod
    def from_metadata(cls, meta: Any):
        return cls.model_validate({key: field(meta, key) for key in cls.keys()})

    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in type(self).model_fields)


class ClientIdentity(Group):
    address: str
    cf_connecting_ip: Optional[str] = Field(default=None, alias="cfConnectingIP")
    x_forwarded_for: Optional[str] = None
    x_real_ip: Optional[str] = Field(default=None, alias="xRealIP")


class LocationInfo(Group):
    colo: Any = None
    country: Any = None
    city: Any = None
    continent: Any = None
    latitude: Any = None
    longitude: Any = None
    postal_code: Any = None
    metro_code: Any = None
    region: Any = None
    region_code: Any = None
    timezone: Any = None
    is_eu_country: Any = Field(default=None, alias="isEUCountry")


class NetworkInfo(Group):
    asn: Any = None
    as_organization: Any = None


class ProtocolInfo(Group):
    http_protocol: Any = None
    tls_version: Any = None
    tls_cipher: Any = None
    tls_client_auth: Any = None
    tls_client_ciphers_sha1: Any = Field(default=None, alias="tlsClientCiphersSha1")
    tls_client_extensions_sha1: Any = Field(default=None, alias="tlsClientExtensionsSha1")
    tls_client_extensions_sha1_le: Any = Field(default=None, alias="tlsClientExtensionsSha1Le")
    tls_client_hello_length: Any = None
    tls_client_random: Any = None


class RequestMetaInfo(Group):
    client_accept_encoding: Any = None
    request_priority: Any = None
    host_metadata: Any = None


class RequestHeaderSnapshot(Group):
    user_agent: Optional[str] = None
    accept_language: Optional[str] = None
    accept: Optional[str] = None
    accept_encoding: Optional[str] = None
    referer: Optional[str] = None
    origin: Optional[str] = None
    cf_ray: Optional[str] = None
    cf_visitor: Optional[str] = None
    cf_country: Optional[str] = None


class MinimalInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    ip: str
    asn: Any = None
    as_organization: Any = None
    country: Any = None
    city: Any = None
    region: Any = None
    timezone: Any = None
    error: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        if self.error is not None:
            return {"ip": self.ip, "error": self.error}
        return self.model_dump(by_alias=True, exclude={"error"})


class InfoRecord(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    ip: ClientIdentity
    location: Optional[LocationInfo] = None
    network: Optional[NetworkInfo] = None
    protocol: Optional[ProtocolInfo] = None
    request: Optional[RequestMetaInfo] = None
    request_headers: RequestHeaderSnapshot
    bot_management: Any = None
    error: Optional[str] = None

    @property
    def metadata_available(self) -> bool:
        return self.error is None

    def to_payload(self) -> Dict[str, Any]:
        """Serialize by alias; absent groups drop out, null leaves stay.

        Without connection metadata the record is just the resolved address,
        the header snapshot and the error marker.
        """
        data = self.model_dump(by_alias=True)
        if self.error is not None:
            return {"ip": self.ip.address, "requestHeaders": data["requestHeaders"], "error": self.error}
        return {k: v for k, v in data.items() if v is not None}
