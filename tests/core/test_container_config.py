from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from teambuilder.config import apply_env_overrides, load_settings
from teambuilder.container import create_container
from teambuilder.schemas.config import AppConfig, load_config


def test_create_container_defaults() -> None:
    container = create_container()

    assert container.sourcer().result_limit == 100
    assert container.enricher()._config.max_workers == 16
    assert container.pipeline()._default_team_size == 3


def test_create_container_with_overrides() -> None:
    container = create_container(
        settings={
            "search": {"endpoint": "https://search.test", "result_limit": 40, "timeout": 3},
            "genome": {"endpoint": "https://genome.test", "timeout": 2},
            "enrichment": {"max_workers": 4},
            "team": {"default_size": 5},
        }
    )

    sourcer = container.sourcer()
    assert sourcer.result_limit == 40
    assert sourcer._adapter._config.endpoint == "https://search.test"
    assert sourcer._adapter._config.timeout == 3
    enricher = container.enricher()
    assert enricher._config.max_workers == 4
    assert enricher._adapter._config.endpoint == "https://genome.test"
    assert container.pipeline()._default_team_size == 5


def test_load_config_validation() -> None:
    app_config = load_config({"search": {"result_limit": 50}, "enrichment": {"max_workers": 2}})

    assert isinstance(app_config, AppConfig)
    assert app_config.to_settings() == {
        "search": {"result_limit": 50},
        "enrichment": {"max_workers": 2},
    }


def test_load_config_rejects_unknown_and_invalid_values() -> None:
    with pytest.raises(ValidationError):
        load_config({"search": {"colour": "blue"}})
    with pytest.raises(ValidationError):
        load_config({"team": {"default_size": 11}})
    with pytest.raises(ValueError):
        load_config(["not", "a", "mapping"])


def test_env_overrides_win_over_file() -> None:
    merged = apply_env_overrides(
        {"search": {"endpoint": "https://file.test"}},
        {"TEAMBUILDER_SEARCH_ENDPOINT": "https://env.test", "TEAMBUILDER_MAX_WORKERS": "8"},
    )

    assert merged == {
        "search": {"endpoint": "https://env.test"},
        "enrichment": {"max_workers": 8},
    }


def test_load_settings_reads_yaml(tmp_path: Path) -> None:
    path = tmp_path / "teambuilder.yaml"
    path.write_text(
        "genome:\n  timeout: 4\nteam:\n  default_size: 2\n",
        encoding="utf-8",
    )

    settings = load_settings(path, environ={}).to_settings()

    assert settings == {"genome": {"timeout": 4.0}, "team": {"default_size": 2}}


def test_load_settings_rejects_non_mapping_yaml(tmp_path: Path) -> None:
    path = tmp_path / "teambuilder.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValueError):
        load_settings(path, environ={})
