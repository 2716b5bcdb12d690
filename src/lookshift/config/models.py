"""Pydantic models for configuration and data structures."""

from typing import Literal

from pydantic import BaseModel, Field, HttpUrl


class LookerConfig(BaseModel):
    """Looker API connection configuration."""

    api_url: HttpUrl
    client_id: str | None = ""
    client_secret: str | None = ""
    timeout: int = Field(default=120, ge=5, le=600)
    verify_ssl: bool = True


class ImportConfig(BaseModel):
    """Defaults for reconciling imported content against the destination."""

    # Tie-break applied when a slug or title search returns several looks
    match_policy: Literal["remote_order", "most_recently_updated"] = "remote_order"


class Configuration(BaseModel):
    """Complete lookshift configuration."""

    config_version: str = "1.0"
    looker: LookerConfig
    imports: ImportConfig = ImportConfig()


class ConnectionStatus(BaseModel):
    """Current state of connectivity to a Looker instance."""

    connected: bool
    authenticated: bool
    instance_url: str | None = None
    looker_version: str | None = None
    api_version: str | None = None
    user_id: str | None = None
    user_email: str | None = None
    error_message: str | None = None
