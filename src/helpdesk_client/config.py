"""Client configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


@dataclass
class ClientConfig:
    """
    Configuration for the helpdesk client.

    Can be set via:
    - Constructor arguments
    - Environment variables (HELPDESK_*)
    - YAML config file
    """
    # REST API endpoint, e.g. https://support.example.com/api/index.php
    base_url: str = field(
        default_factory=lambda: os.environ.get("HELPDESK_BASE_URL", "http://localhost/api/index.php")
    )

    # API credentials used to sign every request
    api_key: str | None = field(
        default_factory=lambda: os.environ.get("HELPDESK_API_KEY")
    )
    secret_key: str | None = field(
        default_factory=lambda: os.environ.get("HELPDESK_SECRET_KEY")
    )

    # Request timeout (seconds)
    timeout: float = field(
        default_factory=lambda: float(os.environ.get("HELPDESK_TIMEOUT", "30"))
    )

    # Log request and response bodies
    debug: bool = field(
        default_factory=lambda: _env_flag("HELPDESK_DEBUG")
    )

    # strftime formats used when rendering dates and timestamps
    date_format: str = "%Y-%m-%d"
    datetime_format: str = "%Y-%m-%d %H:%M"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ClientConfig:
        """Create config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClientConfig:
        """Load config from a YAML file.

        The file may hold the settings at top level or under a ``helpdesk`` key.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if isinstance(data.get("helpdesk"), dict):
            data = data["helpdesk"]
        return cls.from_dict(data)


# Process-wide default config
_default_config: ClientConfig | None = None


def get_config() -> ClientConfig:
    """Get the default config, creating it from the environment on first use."""
    global _default_config
    if _default_config is None:
        _default_config = ClientConfig()
    return _default_config


def set_config(config: ClientConfig) -> None:
    """Replace the default config.

    The default transport is dropped so the next call builds one from the
    new settings.
    """
    global _default_config
    _default_config = config

    from .transport import set_transport
    set_transport(None)
