from __future__ import annotations

from pathlib import Path
from typing import Dict

import pytest

from dock_fuzzer.app.configuration import load_runtime_config
from dock_fuzzer.app.environment import build_default_paths
from dock_fuzzer.app.settings import FuzzerSettings


@pytest.fixture
def temp_ini(tmp_path: Path) -> Path:
    ini = tmp_path / "dock_fuzzer.ini"
    ini.write_text(
        "[runtime]\n"
        "seed = 7\n"
        "operation_count = 20\n"
        "enable_allure = false\n"
        "teardown_timeout = 2.5\n",
        encoding="utf-8",
    )
    return ini


def test_load_runtime_config_prefers_explicit_path(temp_ini: Path) -> None:
    cfg = load_runtime_config({}, config_path=temp_ini)
    assert cfg.seed == 7
    assert cfg.operation_count == 20
    assert cfg.enable_allure is False
    assert cfg.teardown_timeout == pytest.approx(2.5)
    # Config source should reflect the file used
    assert cfg.config_source == temp_ini


def test_env_overrides_ini(temp_ini: Path) -> None:
    env: Dict[str, str] = {
        "DOCK_FUZZER_SEED": "99",
        "DOCK_FUZZER_TEARDOWN_TIMEOUT": "0.75",
        "DOCK_FUZZER_ENABLE_ALLURE": "1",
        "DOCK_FUZZER_DUMP_DIR": "/tmp/dumps",
    }
    cfg = load_runtime_config(env, config_path=temp_ini)
    assert cfg.seed == 99
    assert cfg.teardown_timeout == pytest.approx(0.75)
    assert cfg.enable_allure is True
    assert cfg.dump_dir == "/tmp/dumps"


def test_env_selects_config_file(temp_ini: Path) -> None:
    cfg = load_runtime_config({"DOCK_FUZZER_CONFIG_FILE": str(temp_ini)})
    assert cfg.config_source == temp_ini
    assert cfg.seed == 7


def test_invalid_values_fall_back(temp_ini: Path) -> None:
    cfg = load_runtime_config({"DOCK_FUZZER_RUNS": "many", "DOCK_FUZZER_ENABLE_ALLURE": "maybe"}, config_path=temp_ini)
    assert cfg.runs is None
    assert cfg.enable_allure is False


def test_runtime_config_applies_to_settings(temp_ini: Path) -> None:
    cfg = load_runtime_config({}, config_path=temp_ini)
    settings = FuzzerSettings(runs=3)
    cfg.apply_to_settings(settings)
    assert settings.seed == 7
    assert settings.operation_count == 20
    assert settings.enable_allure is False
    assert settings.runs == 3


def test_load_runtime_config_handles_missing_file(tmp_path: Path) -> None:
    missing = tmp_path / "does_not_exist.ini"
    cfg = load_runtime_config({}, config_path=missing)
    assert cfg.seed is None
    assert cfg.config_source == missing


def test_settings_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "fuzzer_settings.json"
    FuzzerSettings(seed=5, runs=2, dump_dir="out").save(path)
    loaded = FuzzerSettings.load(path)
    assert loaded == FuzzerSettings(seed=5, runs=2, dump_dir="out")


def test_settings_tolerate_bad_file(tmp_path: Path) -> None:
    path = tmp_path / "fuzzer_settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert FuzzerSettings.load(path) == FuzzerSettings()


def test_build_default_paths_creates_directories(tmp_path: Path) -> None:
    paths = build_default_paths(tmp_path / "data")
    for directory in (paths.data_root, paths.replays_dir, paths.results_dir, paths.logs_dir):
        assert directory.is_dir()
    assert paths.settings_file.parent == paths.data_root


@pytest.mark.parametrize(
    "content",
    ['{"runs": "many"}', '{"teardown_timeout": [1]}', '{"seed": {"value": 3}}', "[1, 2]"],
)
def test_settings_with_wrong_value_types_fall_back(tmp_path: Path, content: str) -> None:
    path = tmp_path / "fuzzer_settings.json"
    path.write_text(content, encoding="utf-8")
    assert FuzzerSettings.load(path) == FuzzerSettings()
