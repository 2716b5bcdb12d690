"""Configuration loading with environment variable merging."""

import os
import tomllib
from pathlib import Path
from typing import Any

import typer

from lookshift.config.models import Configuration
from lookshift.exceptions import ConfigError


def get_config_path(config_arg: Path | None = None) -> Path:
    """
    Get configuration file path with priority order.

    Priority:
    1. Command-line argument
    2. LOOKSHIFT_CONFIG environment variable
    3. <app dir>/config.toml (user home directory)
    4. ./lookshift.toml (current working directory)

    Args:
        config_arg: Optional path from command-line argument

    Returns:
        Path to configuration file (may not exist)
    """
    if config_arg:
        return config_arg

    env_config = os.getenv("LOOKSHIFT_CONFIG")
    if env_config:
        return Path(env_config)

    app_dir = Path(typer.get_app_dir("lookshift"))
    user_config = app_dir / "config.toml"
    if user_config.exists():
        return user_config

    cwd_config = Path("lookshift.toml")
    if cwd_config.exists():
        return cwd_config

    # Default (may not exist)
    return user_config


def _env_timeout() -> int | None:
    timeout_str = os.getenv("LOOKSHIFT_TIMEOUT")
    if not timeout_str:
        return None
    try:
        return int(timeout_str)
    except ValueError:
        raise ConfigError(f"Invalid LOOKSHIFT_TIMEOUT value: {timeout_str}") from None


def load_config(config_path: Path | None = None) -> Configuration:
    """
    Load and validate configuration from TOML file and environment variables.

    Environment variables override config file values (or provide all values if no file exists):
    - LOOKSHIFT_API_URL (alias LOOKER_BASE_URL)
    - LOOKSHIFT_CLIENT_ID (alias LOOKER_CLIENT_ID)
    - LOOKSHIFT_CLIENT_SECRET (alias LOOKER_CLIENT_SECRET)
    - LOOKSHIFT_TIMEOUT (optional, default: 120 seconds)
    - LOOKSHIFT_MATCH_POLICY (optional, "remote_order" or "most_recently_updated")

    Args:
        config_path: Optional path to config file

    Returns:
        Validated Configuration object

    Raises:
        ConfigError: If config file invalid or required values missing
    """
    path = get_config_path(config_path)

    data: dict[str, Any] = {}
    if path.exists():
        try:
            with path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML syntax in {path}: {e}") from e

    if data:
        looker_config = data.setdefault("looker", {})
        if client_id := (os.getenv("LOOKSHIFT_CLIENT_ID") or os.getenv("LOOKER_CLIENT_ID")):
            looker_config["client_id"] = client_id
        if client_secret := (
            os.getenv("LOOKSHIFT_CLIENT_SECRET") or os.getenv("LOOKER_CLIENT_SECRET")
        ):
            looker_config["client_secret"] = client_secret
        if api_url := (os.getenv("LOOKSHIFT_API_URL") or os.getenv("LOOKER_BASE_URL")):
            looker_config["api_url"] = api_url
        if (timeout := _env_timeout()) is not None:
            looker_config["timeout"] = timeout
    else:
        api_url = os.getenv("LOOKSHIFT_API_URL") or os.getenv("LOOKER_BASE_URL")
        if not api_url:
            raise ConfigError(
                "No config file found and LOOKSHIFT_API_URL/LOOKER_BASE_URL environment variable not set. "
                "Either create a config file or set environment variables: "
                "LOOKSHIFT_API_URL (or LOOKER_BASE_URL), LOOKSHIFT_CLIENT_ID (or LOOKER_CLIENT_ID), "
                "LOOKSHIFT_CLIENT_SECRET (or LOOKER_CLIENT_SECRET)"
            )

        looker_config = {
            "api_url": api_url,
            "client_id": os.getenv("LOOKSHIFT_CLIENT_ID") or os.getenv("LOOKER_CLIENT_ID", ""),
            "client_secret": os.getenv("LOOKSHIFT_CLIENT_SECRET")
            or os.getenv("LOOKER_CLIENT_SECRET", ""),
        }
        if (timeout := _env_timeout()) is not None:
            looker_config["timeout"] = timeout

        data = {"looker": looker_config}

    if match_policy := os.getenv("LOOKSHIFT_MATCH_POLICY"):
        data.setdefault("imports", {})["match_policy"] = match_policy

    try:
        return Configuration(**data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
