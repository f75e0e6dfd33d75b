"""Tests for ec2_tunnel.config — YAML loading, validation, overrides."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from ec2_tunnel.config import (
    DEFAULT_REGION,
    ConfigError,
    TunnelSettings,
    get_config_path,
    load_config,
    validate_config_file,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    version: 1
    region: eu-west-2
    remote_user: ec2-user
    ssh_options:
      - "-o"
      - "ServerAliveInterval=30"
""")

MINIMAL_YAML = textwrap.dedent("""\
    version: 1
""")

BAD_VERSION_YAML = textwrap.dedent("""\
    version: 99
""")

EMPTY_REGION_YAML = textwrap.dedent("""\
    version: 1
    region: "  "
""")

NUMERIC_USER_YAML = textwrap.dedent("""\
    version: 1
    remote_user: 42
""")

BAD_OPTIONS_YAML = textwrap.dedent("""\
    version: 1
    ssh_options: "-o ServerAliveInterval=30"
""")

NULL_OPTION_YAML = textwrap.dedent("""\
    version: 1
    ssh_options:
      - "-o"
      -
""")

BOOL_VERSION_YAML = textwrap.dedent("""\
    version: true
""")


def _write(tmp_path: Path, body: str) -> Path:
    p = tmp_path / "config.yaml"
    p.write_text(body)
    return p


@pytest.fixture()
def sample_config(tmp_path: Path) -> Path:
    return _write(tmp_path, SAMPLE_YAML)


# ---------------------------------------------------------------------------
# Tests — loading
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_load_sample(self, sample_config: Path):
        cfg = load_config(sample_config)
        assert cfg.region == "eu-west-2"
        assert cfg.remote_user == "ec2-user"
        assert cfg.domain == "amazonaws.com"
        assert cfg.ssh_options == ("-o", "ServerAliveInterval=30")
        assert cfg.config_path == sample_config

    def test_minimal_config(self, tmp_path: Path):
        cfg = load_config(_write(tmp_path, MINIMAL_YAML))
        assert cfg.region == DEFAULT_REGION
        assert cfg.remote_user == "ubuntu"
        assert cfg.ssh_program == "ssh"
        assert cfg.ssh_options == ()

    def test_empty_file(self, tmp_path: Path):
        cfg = load_config(_write(tmp_path, ""))
        assert cfg.region == DEFAULT_REGION

    def test_missing_default_file_uses_defaults(self):
        cfg = load_config()
        assert cfg == TunnelSettings()
        assert cfg.config_path is None

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config(tmp_path / "nonexistent.yaml")

    def test_missing_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("EC2_TUNNEL_CONFIG", str(tmp_path / "nope.yaml"))
        with pytest.raises(ConfigError, match="Config file not found"):
            load_config()

    def test_env_override(self, sample_config: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("EC2_TUNNEL_CONFIG", str(sample_config))
        assert get_config_path() == sample_config.resolve()
        assert load_config().region == "eu-west-2"

    def test_bad_version(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Unsupported config version"):
            load_config(_write(tmp_path, BAD_VERSION_YAML))

    def test_empty_region(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="'region' .* must not be empty"):
            load_config(_write(tmp_path, EMPTY_REGION_YAML))

    def test_non_string_user(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="'remote_user' .* must be a string"):
            load_config(_write(tmp_path, NUMERIC_USER_YAML))

    def test_bad_ssh_options(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="must be a list"):
            load_config(_write(tmp_path, BAD_OPTIONS_YAML))

    def test_non_string_ssh_option(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="must contain only strings"):
            load_config(_write(tmp_path, NULL_OPTION_YAML))

    def test_bool_version(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Unsupported config version"):
            load_config(_write(tmp_path, BOOL_VERSION_YAML))

    def test_invalid_yaml(self, tmp_path: Path):
        p = tmp_path / "bad.yaml"
        p.write_text(":\n  :\n    - [\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(p)

    def test_non_mapping_yaml(self, tmp_path: Path):
        p = tmp_path / "list.yaml"
        p.write_text("- item1\n- item2\n")
        with pytest.raises(ConfigError, match="must be a YAML mapping"):
            load_config(p)


# ---------------------------------------------------------------------------
# Tests — overrides
# ---------------------------------------------------------------------------


class TestOverrides:
    def test_none_is_ignored(self):
        base = TunnelSettings(region="eu-west-2")
        assert base.with_overrides(region=None, remote_user=None) is base

    def test_values_applied(self):
        cfg = TunnelSettings().with_overrides(region="us-west-1", remote_user="admin")
        assert cfg.region == "us-west-1"
        assert cfg.remote_user == "admin"
        assert cfg.domain == "amazonaws.com"

    @pytest.mark.parametrize("key", ["region", "remote_user"])
    def test_blank_rejected(self, key: str):
        with pytest.raises(ConfigError, match=f"'{key}' override must not be empty"):
            TunnelSettings().with_overrides(**{key: "  "})


# ---------------------------------------------------------------------------
# Tests — validation helper
# ---------------------------------------------------------------------------


class TestValidation:
    def test_validate_ok(self, sample_config: Path):
        ok, msg = validate_config_file(sample_config)
        assert ok is True
        assert "eu-west-2" in msg
        assert "ec2-user" in msg

    def test_validate_defaults(self):
        ok, msg = validate_config_file()
        assert ok is True
        assert "built-in defaults" in msg

    def test_validate_bad(self, tmp_path: Path):
        ok, msg = validate_config_file(tmp_path / "missing.yaml")
        assert ok is False
        assert "not found" in msg
