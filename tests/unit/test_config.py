"""
Runtime Configuration Tests
Tests for core/config/runtime.py
"""
import json

import pytest

from core.config import RuntimeConfig, get_default_config_template, load_config
from core.engine import DuplicatePolicy


class TestDefaults:

    def test_defaults(self):
        config = RuntimeConfig()
        assert config.generation.default_campaign_id == 0
        assert config.generation.duplicate_policy == "last_write_wins"
        assert config.log.level == "INFO"
        assert config.log.file is None

    def test_engine_config(self):
        config = RuntimeConfig.from_dict({"generation": {"duplicate_policy": "reject"}})
        assert config.engine_config().duplicate_policy is DuplicatePolicy.REJECT

    def test_template_parses(self):
        data = json.loads(get_default_config_template())
        assert RuntimeConfig.from_dict(data) == RuntimeConfig()


class TestFileLoading:

    def test_json(self, tmp_path):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"generation": {"default_campaign_id": 4}}))
        assert RuntimeConfig.from_file(path).generation.default_campaign_id == 4

    def test_yaml(self, tmp_path):
        path = tmp_path / "cfg.yaml"
        path.write_text("generation:\n  output_dir: drops\nlogging:\n  level: DEBUG\n")
        config = RuntimeConfig.from_file(path)
        assert config.generation.output_dir == "drops"
        assert config.log.level == "DEBUG"

    def test_empty_yaml(self, tmp_path):
        path = tmp_path / "cfg.yml"
        path.write_text("")
        assert RuntimeConfig.from_yaml(path) == RuntimeConfig()

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_file(tmp_path / "absent.json")

    def test_default_location(self, tmp_path):
        # conftest chdirs into tmp_path
        (tmp_path / "airdrop.json").write_text(json.dumps({"output_format": "json"}))
        assert load_config().output_format == "json"

    def test_no_file_gives_defaults(self):
        assert load_config() == RuntimeConfig()


class TestEnvOverrides:

    def test_env_wins_over_file(self, tmp_path, monkeypatch):
        path = tmp_path / "cfg.json"
        path.write_text(json.dumps({"generation": {"default_campaign_id": 4}}))
        monkeypatch.setenv("AIRDROP_CAMPAIGN_ID", "11")
        monkeypatch.setenv("AIRDROP_LOG_LEVEL", "WARNING")

        config = load_config(path)
        assert config.generation.default_campaign_id == 11
        assert config.log.level == "WARNING"

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("AIRDROP_DUPLICATE_POLICY", "reject")
        monkeypatch.setenv("AIRDROP_OUTPUT_DIR", "/tmp/x")
        config = RuntimeConfig.from_env()
        assert config.generation.duplicate_policy == "reject"
        assert config.generation.output_dir == "/tmp/x"

    def test_no_overrides_returns_same(self):
        config = RuntimeConfig()
        assert config.with_env_overrides() is config

    def test_overrides_do_not_mutate(self, monkeypatch):
        config = RuntimeConfig()
        monkeypatch.setenv("AIRDROP_LOG_FILE", "run.log")
        updated = config.with_env_overrides()
        assert updated.log.file == "run.log"
        assert config.log.file is None
