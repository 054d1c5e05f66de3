from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="EDGEINFO_", extra="ignore")

    service_name: str = Field(default="edgeinfo", description="Display name.")
    # The edge runtime attaches its connection metadata to the ASGI scope under this key.
    metadata_scope_key: str = Field(default="cf", description="ASGI scope key holding edge metadata.")
    locale: Literal["en", "zh-CN"] = Field(default="en", description="Language of the HTML page.")
    map_url_template: str = Field(
        default="https://www.google.com/maps?q={lat},{lon}",
        description="External map link; {lat} and {lon} are substituted.",
    )
    cors_allow_origin: str = Field(default="*", description="Access-Control-Allow-Origin for JSON endpoints.")
    log_level: str = Field(default="INFO", description="Root logging level.")
    footer_text: str = Field(default="", description="Overrides the localized footer attribution line.")

    def map_url(self, lat: str, lon: str) -> str:
        return self.map_url_template.format(lat=lat, lon=lon)
