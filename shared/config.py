"""
Shared configuration management for the Generation Roster service.
"""

from typing import Literal, Optional

from pydantic import Field, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ROSTER_",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Upstream data
    pokeapi_url: str = Field(default="https://pokeapi.co/api/v2")
    data_source: Literal["api", "static"] = Field(default="api")
    static_data_root: str = Field(default="data")
    request_timeout: PositiveFloat = Field(default=10.0)
    detail_concurrency: Optional[PositiveInt] = Field(default=None)

    # Cache
    cache_backend: Literal["memory", "redis"] = Field(default="memory")
    redis_url: str = Field(default="redis://localhost:6379/0")
    cache_prefix: str = Field(default="roster:generation")


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)
