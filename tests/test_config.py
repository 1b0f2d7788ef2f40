"""Tests for configuration loading."""

import json

import pytest

from product_meta import config
from product_meta.errors import ConfigError


class TestReadApiKey:
    def test_reads_key(self, tmp_path):
        path = tmp_path / "app_client_secret.json"
        path.write_text(json.dumps({"google_custom_search_api_key": "abc123"}))

        assert config.read_api_key(path) == "abc123"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            config.read_api_key(tmp_path / "missing.json")

    def test_missing_field(self, tmp_path):
        path = tmp_path / "app_client_secret.json"
        path.write_text(json.dumps({"other": "x"}))

        with pytest.raises(ConfigError, match="google_custom_search_api_key"):
            config.read_api_key(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "app_client_secret.json"
        path.write_text("{")

        with pytest.raises(ConfigError):
            config.read_api_key(path)


class TestLoadSearchConfig:
    def test_env_key_and_engine_id(self, monkeypatch):
        monkeypatch.setattr(config, "GOOGLE_CUSTOM_SEARCH_API_KEY", "env-key")
        monkeypatch.setattr(config, "GOOGLE_SEARCH_ENGINE_ID", "engine")

        result = config.load_search_config()

        assert result.api_key == "env-key"
        assert result.search_engine_id == "engine"

    def test_key_from_credential_file(self, monkeypatch, tmp_path):
        path = tmp_path / "secret.json"
        path.write_text(json.dumps({"google_custom_search_api_key": "file-key"}))
        monkeypatch.setattr(config, "GOOGLE_CUSTOM_SEARCH_API_KEY", None)
        monkeypatch.setattr(config, "GOOGLE_CREDENTIALS_FILE", str(path))
        monkeypatch.setattr(config, "GOOGLE_SEARCH_ENGINE_ID", "engine")

        assert config.load_search_config().api_key == "file-key"

    def test_missing_engine_id(self, monkeypatch):
        monkeypatch.setattr(config, "GOOGLE_CUSTOM_SEARCH_API_KEY", "env-key")
        monkeypatch.setattr(config, "GOOGLE_SEARCH_ENGINE_ID", None)

        with pytest.raises(ConfigError):
            config.load_search_config()

    def test_repr_hides_api_key(self):
        value = config.SearchConfig(api_key="secret", search_engine_id="engine")

        assert "secret" not in repr(value)
