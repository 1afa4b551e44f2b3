"""
Tests for configuration models and the configuration loader.

This module tests defaults, validation, file loading, environment variable
overrides and saving.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict

import pytest
import yaml

from ssh_sampler.infrastructure.config.loader import ConfigLoader
from ssh_sampler.infrastructure.config.models import (
    ApplicationConfig, CommandSamplerConfig, ConnectionConfig, SFTPSamplerConfig
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep SSH_SAMPLER_* variables from the outer environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("SSH_SAMPLER_"):
            monkeypatch.delenv(key)


@pytest.fixture
def sample_config_dict() -> Dict[str, Any]:
    return {
        "name": "Nightly load",
        "connection": {
            "host": "10.0.0.5",
            "port": 2200,
            "username": "bench",
            "password": "pw",
            "connect_timeout_ms": 3000,
        },
        "command": {"command": "uptime", "use_tty": False},
        "sftp": {"action": "ls", "source": "/var/log"},
        "logging": {"level": "DEBUG"},
    }


class TestConfigModels:
    """Test configuration defaults and validation."""

    def test_defaults(self) -> None:
        config = ApplicationConfig()

        assert config.connection.port == 22
        assert config.connection.connect_timeout_ms == 5000
        assert config.command.command == "date"
        assert config.command.use_return_code is True
        assert config.command.use_tty is True
        assert config.command.print_stderr is True
        assert config.sftp.action == "get"
        assert config.sftp.print_file is True

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_invalid_port(self, port: int) -> None:
        with pytest.raises(ValueError, match="port"):
            ApplicationConfig(connection=ConnectionConfig(port=port))

    def test_invalid_timeout(self) -> None:
        with pytest.raises(ValueError, match="timeout"):
            ApplicationConfig(connection=ConnectionConfig(connect_timeout_ms=0))

    def test_host_key_checking_not_supported(self) -> None:
        with pytest.raises(ValueError, match="accept_any_host_key"):
            ApplicationConfig(connection=ConnectionConfig(accept_any_host_key=False))

    def test_validate_after_mutation(self) -> None:
        config = ApplicationConfig()
        config.connection.port = 70000

        with pytest.raises(ValueError):
            config.validate()

    def test_to_parameters(self) -> None:
        params = ConnectionConfig(
            host="h", port=2022, username="u", private_key_path="/k").to_parameters()

        assert params.host == "h"
        assert params.port == 2022
        assert params.has_key_file is True
        assert params.connect_timeout == pytest.approx(5.0)

    def test_command_to_request(self) -> None:
        request = CommandSamplerConfig(command="ls", use_tty=False, print_stderr=False).to_request()

        assert request.command == "ls"
        assert request.capture.use_pty is False
        assert request.capture.print_stderr is False
        assert request.capture.use_return_code is True

    def test_sftp_to_request(self) -> None:
        request = SFTPSamplerConfig(action="rename", source="a", destination="b").to_request()

        assert request.action == "rename"
        assert request.destination == "b"

    def test_round_trip_through_dict(self, sample_config_dict: Dict[str, Any]) -> None:
        config = ApplicationConfig.from_dict(sample_config_dict)

        assert ApplicationConfig.from_dict(config.to_dict()) == config


class TestConfigLoader:
    """Test cases for ConfigLoader."""

    @pytest.fixture
    def config_loader(self) -> ConfigLoader:
        return ConfigLoader()

    def test_load_defaults_without_file(self, config_loader: ConfigLoader) -> None:
        config = config_loader.load_config()

        assert config == ApplicationConfig()
        assert config.config_file_path == ""

    def test_load_yaml(self, config_loader: ConfigLoader, tmp_path: Path,
                       sample_config_dict: Dict[str, Any]) -> None:
        path = tmp_path / "sampler.yaml"
        path.write_text(yaml.safe_dump(sample_config_dict), encoding="utf-8")

        config = config_loader.load_config(str(path))

        assert config.name == "Nightly load"
        assert config.connection.host == "10.0.0.5"
        assert config.connection.port == 2200
        assert config.command.command == "uptime"
        assert config.command.use_tty is False
        assert config.sftp.source == "/var/log"
        assert config.config_file_path == str(path)

    def test_load_json(self, config_loader: ConfigLoader, tmp_path: Path,
                       sample_config_dict: Dict[str, Any]) -> None:
        path = tmp_path / "sampler.json"
        path.write_text(json.dumps(sample_config_dict), encoding="utf-8")

        config = config_loader.load_config(str(path))

        assert config.connection.username == "bench"

    def test_missing_file(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            config_loader.load_config(str(tmp_path / "missing.yaml"))

    def test_unsupported_format(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "sampler.ini"
        path.write_text("[connection]\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported"):
            config_loader.load_config(str(path))

    def test_invalid_yaml(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("connection: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            config_loader.load_config(str(path))

    def test_unknown_key_rejected(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        path = tmp_path / "extra.yaml"
        path.write_text("connection:\n  hostname: typo\n", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            config_loader.load_config(str(path))

    def test_environment_overrides(self, config_loader: ConfigLoader, tmp_path: Path,
                                   monkeypatch: pytest.MonkeyPatch,
                                   sample_config_dict: Dict[str, Any]) -> None:
        path = tmp_path / "sampler.yaml"
        path.write_text(yaml.safe_dump(sample_config_dict), encoding="utf-8")
        monkeypatch.setenv("SSH_SAMPLER_HOST", "override.example.com")
        monkeypatch.setenv("SSH_SAMPLER_PORT", "2022")
        monkeypatch.setenv("SSH_SAMPLER_USE_RETURN_CODE", "false")
        monkeypatch.setenv("SSH_SAMPLER_PRINT_FILE", "no")

        config = config_loader.load_config(str(path))

        assert config.connection.host == "override.example.com"
        assert config.connection.port == 2022
        assert config.connection.username == "bench"
        assert config.command.use_return_code is False
        assert config.sftp.print_file is False

    def test_invalid_environment_value(self, config_loader: ConfigLoader,
                                       monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SSH_SAMPLER_PORT", "ssh")

        with pytest.raises(ValueError, match="SSH_SAMPLER_PORT"):
            config_loader.load_config()

    @pytest.mark.parametrize("format,suffix", [("yaml", "yaml"), ("json", "json")])
    def test_save_and_reload(self, config_loader: ConfigLoader, tmp_path: Path,
                             format: str, suffix: str) -> None:
        config = ApplicationConfig()
        config.connection.host = "saved.example.com"
        path = tmp_path / f"saved.{suffix}"

        config_loader.save_config(config, str(path), format)
        reloaded = config_loader.load_config(str(path))

        assert reloaded.connection.host == "saved.example.com"
        assert "config_file_path" not in path.read_text(encoding="utf-8")

    def test_save_unsupported_format(self, config_loader: ConfigLoader, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="Unsupported format"):
            config_loader.save_config(ApplicationConfig(), str(tmp_path / "x.toml"), "toml")
