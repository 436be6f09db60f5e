"""Tests for config loading and the global config singleton."""

import json
import logging

import pytest

from batchexec import config as config_module
from batchexec.config import (
    BatchExecConfig,
    configure,
    get_config,
    parse_flag,
    reset_config,
)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "batchexec" / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", path.parent)
    monkeypatch.setattr(config_module, "CONFIG_FILE", path)
    for name in ("FATAL", "ECHO", "AUTOHEADER", "LEADER", "MAXLEN", "LOG_LEVEL"):
        monkeypatch.delenv(f"BATCHEXEC_{name}", raising=False)
    return path


class TestParseFlag:
    @pytest.mark.parametrize("text", ["1", "true", "YES", " on "])
    def test_true(self, text):
        assert parse_flag(text) == 1

    @pytest.mark.parametrize("text", ["0", "false", "No", "off"])
    def test_false(self, text):
        assert parse_flag(text) == 0

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_flag("maybe")


class TestLoad:
    """Tests for BatchExecConfig.load()."""

    def test_defaults_without_file(self, config_file):
        config = BatchExecConfig.load()
        assert config == BatchExecConfig()
        assert config.fatal == 1
        assert config.leader == "#"

    def test_file_values(self, config_file):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"fatal": False, "echo": "yes", "maxlen": 40}))
        config = BatchExecConfig.load()
        assert config.fatal == 0
        assert config.echo == 1
        assert config.maxlen == 40

    def test_env_overrides_file(self, config_file, monkeypatch):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"leader": "//", "echo": 1}))
        monkeypatch.setenv("BATCHEXEC_LEADER", ";")
        monkeypatch.setenv("BATCHEXEC_ECHO", "off")
        config = BatchExecConfig.load()
        assert config.leader == ";"
        assert config.echo == 0

    def test_invalid_env_value_is_ignored(self, config_file, monkeypatch, caplog):
        monkeypatch.setenv("BATCHEXEC_FATAL", "sometimes")
        with caplog.at_level(logging.WARNING):
            config = BatchExecConfig.load()
        assert config.fatal == 1
        assert "BATCHEXEC_FATAL" in caplog.text

    def test_unknown_file_key_is_ignored(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text(json.dumps({"colour": "red", "maxlen": "bad"}))
        with caplog.at_level(logging.WARNING):
            config = BatchExecConfig.load()
        assert config.maxlen == 30
        assert "Unknown config key 'colour'" in caplog.text
        assert "Invalid config value maxlen" in caplog.text

    def test_corrupt_file(self, config_file, caplog):
        config_file.parent.mkdir(parents=True)
        config_file.write_text("{not json")
        with caplog.at_level(logging.WARNING):
            config = BatchExecConfig.load()
        assert config == BatchExecConfig()
        assert "Failed to load config" in caplog.text

    def test_save_round_trip(self, config_file):
        BatchExecConfig(echo=1, leader="--").save()
        assert json.loads(config_file.read_text())["leader"] == "--"
        assert BatchExecConfig.load().echo == 1


class TestGlobalConfig:
    def test_configure_replaces_global(self):
        config = BatchExecConfig(fatal=0)
        configure(config)
        assert get_config() is config

    def test_reset_reloads(self, config_file, monkeypatch):
        monkeypatch.setenv("BATCHEXEC_MAXLEN", "64")
        reset_config()
        assert get_config().maxlen == 64
        assert get_config() is get_config()
