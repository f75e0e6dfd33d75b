from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the default config path somewhere empty and clear the env override."""
    default = tmp_path / "default" / "config.yaml"
    monkeypatch.setattr("ec2_tunnel.config.DEFAULT_CONFIG_PATH", default)
    monkeypatch.delenv("EC2_TUNNEL_CONFIG", raising=False)
    return default
