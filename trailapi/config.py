"""
Client configuration - immutable settings for the shared connection pool and request builders.
Uses pydantic-settings for validation and environment variable loading.
"""

from __future__ import annotations
import codecs
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CLIENT_VERSION = "com.geozen"
CLIENT_VERSION_HEADER = "User-Agent"
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_SOCKET_BUFFER_SIZE = 8192


class ClientConfig(BaseSettings):
    """Connection and request settings, fixed for the lifetime of a pool."""

    model_config = SettingsConfigDict(
        env_prefix='TRAILAPI_',
        env_file='.env',
        case_sensitive=False,
        extra='ignore',
        frozen=True,
    )

    # Timeouts
    connect_timeout_s: float = Field(DEFAULT_TIMEOUT_S)
    socket_timeout_s: float = Field(DEFAULT_TIMEOUT_S)

    # Socket and pool sizing
    socket_buffer_size: int = Field(DEFAULT_SOCKET_BUFFER_SIZE)
    max_connections: int = Field(20)
    max_keepalive_connections: int = Field(10)
    keepalive_expiry_s: float = Field(30.0)
    verify_tls: bool = Field(True)

    # Request building
    client_version: str = Field(DEFAULT_CLIENT_VERSION)
    charset: str = Field('utf-8')

    # Logging
    log_level: str = Field('INFO')

    @field_validator(
        'connect_timeout_s',
        'socket_timeout_s',
        'socket_buffer_size',
        'max_connections',
        'keepalive_expiry_s',
    )
    @classmethod
    def validate_positive(cls, v):
        """Timeouts, buffer and pool sizes must be positive."""
        if v <= 0:
            raise ValueError('must be greater than zero')
        return v

    @field_validator('max_keepalive_connections')
    @classmethod
    def validate_keepalive(cls, v):
        if v < 0:
            raise ValueError('must not be negative')
        return v

    @field_validator('client_version', mode='before')
    @classmethod
    def default_client_version(cls, v):
        # An empty header value falls back to the default identifier
        if v is None or not str(v).strip():
            return DEFAULT_CLIENT_VERSION
        return str(v).strip()

    @field_validator('charset')
    @classmethod
    def validate_charset(cls, v):
        """Unknown encodings fail at load time, not on the first request."""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown charset: {v}") from e
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            return 'INFO'
        return v.upper()


# Global config instance
_config: Optional[ClientConfig] = None


def get_config() -> ClientConfig:
    """Get the environment-loaded config, creating it on first use."""
    global _config
    if _config is None:
        _config = ClientConfig()
    return _config


def reload_config() -> ClientConfig:
    """Reload config from environment (for testing)."""
    global _config
    _config = ClientConfig()
    return _config
