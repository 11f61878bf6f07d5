"""
Configuration for the Casbin Redis adapter.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from shared.config import BaseConfig

DEFAULT_KEY = "casbin_rules"


class AdapterSettings(BaseConfig):
    """Redis connection and list key settings.

    Read from ``CASBIN_REDIS_*`` environment variables or ``.env``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CASBIN_REDIS_",
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    host: str = Field(default="localhost")
    port: int = Field(default=6379)
    username: Optional[str] = Field(default=None)
    password: Optional[str] = Field(default=None)
    db: int = Field(default=0, ge=0)
    ssl: bool = Field(default=False)
    key: str = Field(default=DEFAULT_KEY, min_length=1)

    socket_connect_timeout: Optional[float] = Field(default=5)
    # None blocks for as long as the server takes to answer
    socket_timeout: Optional[float] = Field(default=None)


def get_settings(**overrides) -> AdapterSettings:
    """Get adapter settings, with explicit values taking precedence."""
    return AdapterSettings(**overrides)
