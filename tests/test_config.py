# =============================================================================
# REMDOC CONFIG TESTS
# =============================================================================

import json
import stat

import pytest

from remdoc.infra.config import (
    ConfigError,
    RemdocConfig,
    config_path,
    default_timeout,
    load_config,
    save_config,
)


class TestConfigFile:
    """Test persistence of URL + JWT."""

    def test_round_trip(self):
        config = RemdocConfig(portainer_url="https://p.example.com", jwt="abc")

        path = save_config(config)

        assert path == config_path()
        assert load_config() == config

    def test_json_field_names(self):
        path = save_config(RemdocConfig(portainer_url="https://p", jwt="t"))
        assert json.loads(path.read_text()) == {"portainer_url": "https://p", "jwt": "t"}

    def test_owner_only_permissions(self):
        path = save_config(RemdocConfig(portainer_url="https://p", jwt="t"))

        assert stat.S_IMODE(path.stat().st_mode) == 0o600
        assert stat.S_IMODE(path.parent.stat().st_mode) == 0o700

    def test_existing_file_tightened(self):
        path = config_path()
        path.parent.mkdir(parents=True)
        path.write_text("{}")
        path.chmod(0o644)

        save_config(RemdocConfig(portainer_url="https://p", jwt="t"))

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_config(self):
        with pytest.raises(ConfigError, match="remdoc login"):
            load_config()

    def test_corrupt_config(self):
        path = config_path()
        path.parent.mkdir(parents=True)
        path.write_text("{not json")

        with pytest.raises(ConfigError, match="failed to read config"):
            load_config()

    def test_incomplete_config(self):
        path = config_path()
        path.parent.mkdir(parents=True)
        path.write_text(json.dumps({"portainer_url": "https://p"}))

        with pytest.raises(ConfigError, match="invalid config format"):
            load_config()

    def test_config_dir_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("REMDOC_CONFIG_DIR", str(tmp_path / "elsewhere"))
        assert config_path() == tmp_path / "elsewhere" / "config.json"


class TestDefaultTimeout:
    """Test REMDOC_TIMEOUT."""

    def test_fallback(self):
        assert default_timeout(15.0) == 15.0

    def test_override(self, monkeypatch):
        monkeypatch.setenv("REMDOC_TIMEOUT", "2.5")
        assert default_timeout(15.0) == 2.5

    @pytest.mark.parametrize("raw", ["soon", "0", "-3"])
    def test_invalid(self, monkeypatch, raw):
        monkeypatch.setenv("REMDOC_TIMEOUT", raw)
        with pytest.raises(ConfigError):
            default_timeout(15.0)
