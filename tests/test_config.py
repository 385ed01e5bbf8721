from __future__ import annotations

from pathlib import Path

import pytest

from wakectl.core.config import config_path, default_registry_path, load_config
from wakectl.core.errors import ConfigError
from wakectl.core.model import BroadcastSettings


@pytest.fixture(autouse=True)
def xdg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))


def _write_config(content: str) -> Path:
    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_defaults_without_file(tmp_path: Path) -> None:
    config = load_config()
    assert config.broadcast == BroadcastSettings()
    assert config.broadcast.attempt_timeout_s == 5.0
    assert config.broadcast.overall_timeout_s == 6.0
    assert config.registry_path == tmp_path / "data" / "wakectl" / "devices.yaml"
    assert default_registry_path() == config.registry_path


def test_overrides(tmp_path: Path) -> None:
    _write_config(
        """
broadcast:
  address: 192.168.1.255
  port: 7
  attempt_timeout_s: 2
  overall_timeout_s: 3.5
  bind_address: 192.168.1.20
  ttl: null
registry:
  path: {path}
""".format(path=tmp_path / "devices.yaml")
    )

    config = load_config()
    assert config.broadcast == BroadcastSettings(
        address="192.168.1.255",
        port=7,
        attempt_timeout_s=2.0,
        overall_timeout_s=3.5,
        bind_address="192.168.1.20",
        ttl=None,
    )
    assert config.registry_path == tmp_path / "devices.yaml"


def test_empty_file_uses_defaults() -> None:
    _write_config("")
    assert load_config().broadcast == BroadcastSettings()


def test_unknown_key_rejected() -> None:
    _write_config("broadcast:\n  retries: 3\n")
    with pytest.raises(ConfigError, match="Schema validation failed"):
        load_config()


def test_invalid_port_rejected() -> None:
    _write_config("broadcast:\n  port: 70000\n")
    with pytest.raises(ConfigError, match="broadcast.port"):
        load_config()


def test_overall_timeout_must_cover_attempt() -> None:
    _write_config("broadcast:\n  attempt_timeout_s: 5\n  overall_timeout_s: 2\n")
    with pytest.raises(ConfigError, match="overall_timeout_s"):
        load_config()


def test_invalid_yaml_rejected() -> None:
    _write_config("broadcast: [unterminated\n")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_config()


def test_explicit_missing_path_rejected(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_config(tmp_path / "nope.yaml")
