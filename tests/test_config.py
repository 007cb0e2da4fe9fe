"""Tests for configuration loading."""

import json

import pytest
import yaml
from pydantic import ValidationError

from config.settings import ApiConfig, AppConfig, DebateDefaults, get_default_config


def test_load_yaml_config(tmp_path) -> None:
    path = tmp_path / "debate.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "debate": {"max_rounds": 5},
                "api_configs": {
                    "local": {"id": "local", "name": "Local", "provider": "custom",
                              "model": "m", "base_url": "http://localhost:9000"}
                },
            }
        )
    )

    config = AppConfig.load_from_file(path)

    assert config.debate.max_rounds == 5
    assert config.debate.max_words_per_turn == 200
    assert config.api_configs["local"].provider == "custom"


def test_api_config_key_must_match_id(tmp_path) -> None:
    path = tmp_path / "debate.json"
    path.write_text(json.dumps({"api_configs": {"a": {"id": "b", "name": "B", "model": "m"}}}))

    with pytest.raises(ValidationError):
        AppConfig.load_from_file(path)


def test_unsupported_provider_is_rejected() -> None:
    with pytest.raises(ValidationError):
        ApiConfig(id="x", name="X", provider="ollama", model="m")


def test_api_key_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ARENA_TEST_KEY", "from-env")

    assert ApiConfig(id="x", name="X", model="m", api_key_env="ARENA_TEST_KEY").resolve_api_key() == "from-env"
    assert ApiConfig(id="x", name="X", model="m", api_key="inline", api_key_env="ARENA_TEST_KEY").resolve_api_key() == "inline"


def test_default_config_writes_template_when_missing(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "debate_config.json"
    monkeypatch.setenv("DEBATE_CONFIG", str(path))

    config = get_default_config()

    assert path.exists()
    assert set(config.api_configs) == {"openai-default", "anthropic-default"}
    assert config.debate.turn_delay_seconds == 2.0


def test_saved_yaml_config_loads_back(tmp_path) -> None:
    path = tmp_path / "nested" / "debate.yaml"
    config = AppConfig(debate=DebateDefaults(max_rounds=4, turn_delay_seconds=0.5))

    config.save_to_file(path)
    loaded = AppConfig.load_from_file(path)

    assert "max_rounds: 4" in path.read_text()
    assert loaded.debate.max_rounds == 4
    assert loaded.debate.turn_delay_seconds == 0.5
    assert loaded.debate.max_words_per_turn == config.debate.max_words_per_turn
