"""Configuration loader and validation for ec2-tunnel.

Loads YAML config from ~/.config/ec2-tunnel/config.yaml (or EC2_TUNNEL_CONFIG env override).
A missing default file is not an error: built-in defaults are used instead.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

APP_NAME = "ec2-tunnel"
DEFAULT_CONFIG_DIR = Path.home() / ".config" / APP_NAME
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.yaml"
ENV_CONFIG_VAR = "EC2_TUNNEL_CONFIG"
SUPPORTED_CONFIG_VERSION = 1

DEFAULT_REGION = "ap-southeast-2"
DEFAULT_DOMAIN = "amazonaws.com"
DEFAULT_REMOTE_USER = "ubuntu"
DEFAULT_SSH_PROGRAM = "ssh"

# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TunnelSettings:
    """Values that shape the host name and the ssh command line."""

    region: str = DEFAULT_REGION
    domain: str = DEFAULT_DOMAIN
    remote_user: str = DEFAULT_REMOTE_USER
    ssh_program: str = DEFAULT_SSH_PROGRAM
    ssh_options: tuple[str, ...] = field(default_factory=tuple)
    config_path: Path | None = None  # file the settings were read from, if any

    def with_overrides(self, **overrides: Any) -> TunnelSettings:
        """Return a copy with the non-None overrides applied.

        Blank string overrides raise ``ConfigError``, same as blank config values.
        """
        changes = {k: v for k, v in overrides.items() if v is not None}
        for key, value in changes.items():
            if isinstance(value, str) and not value.strip():
                raise ConfigError(f"'{key}' override must not be empty.")
        return replace(self, **changes) if changes else self


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when the configuration file is invalid or missing."""


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def get_config_path() -> Path:
    """Determine which config file to use."""
    env = os.environ.get(ENV_CONFIG_VAR)
    if env:
        return Path(env).expanduser().resolve()
    return DEFAULT_CONFIG_PATH


def _string_option(raw: dict[str, Any], key: str, default: str, config_path: Path) -> str:
    value = raw.get(key, default)
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' in {config_path} must be a string.")
    value = value.strip()
    if not value:
        raise ConfigError(f"'{key}' in {config_path} must not be empty.")
    return value


def load_config(path: Path | None = None) -> TunnelSettings:
    """Load, validate, and return TunnelSettings from a YAML file."""
    explicit = path is not None or bool(os.environ.get(ENV_CONFIG_VAR))
    config_path = path or get_config_path()

    if not config_path.exists():
        if not explicit:
            return TunnelSettings()
        raise ConfigError(
            f"Config file not found at {config_path}\n"
            f"Create it or unset the {ENV_CONFIG_VAR} environment variable."
        )

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file {config_path} must be a YAML mapping at the top level.")

    version = raw.get("version", SUPPORTED_CONFIG_VERSION)
    if isinstance(version, bool) or version != SUPPORTED_CONFIG_VERSION:
        raise ConfigError(
            f"Unsupported config version {version}. Expected {SUPPORTED_CONFIG_VERSION}."
        )

    ssh_opts = raw.get("ssh_options", [])
    if not isinstance(ssh_opts, list):
        raise ConfigError("'ssh_options' must be a list of strings.")
    if not all(isinstance(o, str) for o in ssh_opts):
        raise ConfigError(f"'ssh_options' in {config_path} must contain only strings.")

    return TunnelSettings(
        region=_string_option(raw, "region", DEFAULT_REGION, config_path),
        domain=_string_option(raw, "domain", DEFAULT_DOMAIN, config_path),
        remote_user=_string_option(raw, "remote_user", DEFAULT_REMOTE_USER, config_path),
        ssh_program=_string_option(raw, "ssh_program", DEFAULT_SSH_PROGRAM, config_path),
        ssh_options=tuple(ssh_opts),
        config_path=config_path,
    )


def validate_config_file(path: Path | None = None) -> tuple[bool, str]:
    """Validate a config file and return (ok, message)."""
    try:
        settings = load_config(path)
    except ConfigError as exc:
        return False, str(exc)
    source = settings.config_path or "built-in defaults"
    return True, (
        f"Config OK: region {settings.region}, user {settings.remote_user} "
        f"loaded from {source}"
    )
