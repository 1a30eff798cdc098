"""Application settings loaded from environment with validation."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

HOSTNAME_PLACEHOLDER = "{hostname}"


class Settings(BaseSettings):
    """Config fetcher settings from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Web
    web_host: str = Field(default="", description="Listening host (empty = all interfaces)")
    web_port: int = Field(default=8080, ge=0, le=65535, description="HTTP listening port")

    # Upstreams
    api_url: str = Field(
        default="https://api.nordvpn.com/v1/servers/recommendations?filters[country_id]=153&limit=20",
        min_length=1,
        description="Recommendation source returning a JSON array of servers",
    )
    config_url_template: str = Field(
        default="https://downloads.nordcdn.com/configs/files/ovpn_legacy/servers/{hostname}.udp1194.ovpn",
        min_length=1,
        description="Config download URL; {hostname} is replaced with the assigned hostname",
    )
    upstream_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        le=300,
        description="Deadline for each outbound HTTP call",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        le=600,
        description="Deadline for one inbound request, shared by both outbound calls",
    )
    config_media_type: str = Field(
        default="application/octet-stream",
        min_length=1,
        description="Content-Type for relayed config files",
    )

    # Logging
    log_level: LogLevel = Field(default="INFO")

    # Telemetry
    gcp_project_id: str = Field(default="", description="Enables Cloud Trace export when set")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
        u = (v or "INFO").upper()
        if u not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return u

    @field_validator("config_url_template")
    @classmethod
    def validate_config_url_template(cls, v: str) -> str:
        count = v.count(HOSTNAME_PLACEHOLDER)
        if count != 1:
            raise ValueError(
                f"config_url_template must contain exactly one {HOSTNAME_PLACEHOLDER} placeholder, found {count}"
            )
        return v

    @property
    def listen_address(self) -> str:
        return f"{self.web_host}:{self.web_port}"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
