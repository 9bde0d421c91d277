"""Data models for accounts, nodes and configuration."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AutomationState(str, Enum):
    """Automation loop states."""
    STOPPED = "stopped"
    RUNNING = "running"


class TokenClaims(BaseModel):
    """Claims decoded from a bearer token, used for display only."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: Optional[str] = Field(default=None, alias="userId")
    iat: Optional[float] = None
    exp: Optional[float] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def _stringify_user_id(cls, value):
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Account(BaseModel):
    """A loaded bearer token with its best-effort claims."""
    token: str
    claims: Optional[TokenClaims] = None


class Node(BaseModel):
    """A remote node, identified by its public key."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    pub_key: str = Field(alias="pubKey")


class Config(BaseSettings):
    """Runtime configuration, overridable through NODEPINGER_* variables."""
    model_config = SettingsConfigDict(env_prefix="NODEPINGER_", extra="ignore")

    base_url: str = "https://gateway-run.bls.dev"
    accounts_file: str = "data.txt"
    interval_minutes: float = Field(default=5, gt=0)
    request_timeout: float = Field(default=30, gt=0)  # seconds
    max_retries: int = Field(default=3, ge=0)
    retry_delay: float = Field(default=5, ge=0)  # fixed, no backoff growth
    unhealthy_delay: float = Field(default=10, ge=0)
    truncate_length: int = Field(default=10, ge=1)
    log_level: str = "INFO"
    log_prefix: str = "BLESS NETWORK"
