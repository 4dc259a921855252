"""Tests for mpvipc configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from mpvipc.config import (
    DEFAULT_SOCKET_PATH,
    Config,
    get_config_dir,
    get_socket_path,
    load_config,
)


class TestConfigDir:
    def test_xdg_config_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / "mpvipc"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        assert get_config_dir() == Path.home() / ".config" / "mpvipc"


class TestLoadConfig:
    def test_missing_file(self):
        config = load_config()

        assert config == Config()
        assert config.client.socket_path == DEFAULT_SOCKET_PATH
        assert config.client.timeout is None
        assert config.client.chunk_size == 512
        assert config.client.match_request_id is False
        assert config.logging.level == "warning"

    def test_from_config_dir(self, tmp_path):
        config_dir = tmp_path / "config" / "mpvipc"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text(
            '[client]\nsocket_path = "/run/user/1000/mpv"\ntimeout = 2.5\n'
            "match_request_id = true\n\n"
            '[logging]\nlevel = "debug"\n'
        )

        config = load_config()

        assert config.client.socket_path == "/run/user/1000/mpv"
        assert config.client.timeout == 2.5
        assert config.client.match_request_id is True
        assert config.client.chunk_size == 512
        assert config.logging.level == "debug"

    def test_explicit_path(self, tmp_path):
        config_file = tmp_path / "other.toml"
        config_file.write_text("[client]\nchunk_size = 1024\n")

        assert load_config(config_file).client.chunk_size == 1024

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "bad.toml"
        config_file.write_text("[client]\nport = 5\n")

        with pytest.raises(TypeError):
            load_config(config_file)


class TestSocketPath:
    def test_from_config(self):
        config = Config()
        config.client.socket_path = "/tmp/other"
        assert get_socket_path(config) == "/tmp/other"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MPVIPC_SOCKET", "/tmp/from-env")
        assert get_socket_path(Config()) == "/tmp/from-env"
