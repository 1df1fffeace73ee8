"""Runtime configuration loading helpers for the dock fuzzer."""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .settings import FuzzerSettings

logger = logging.getLogger(__name__)

_ENV_PREFIX = "DOCK_FUZZER_"
_BOOL_TRUE = {"1", "true", "yes", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


@dataclass(slots=True)
class RuntimeConfig:
    """Declarative overrides sourced from environment variables or config files."""

    config_source: Optional[Path] = None
    seed: Optional[int] = None
    runs: Optional[int] = None
    operation_count: Optional[int] = None
    main_window_count: Optional[int] = None
    dock_widget_count: Optional[int] = None
    teardown_timeout: Optional[float] = None
    dump_dir: Optional[str] = None
    enable_allure: Optional[bool] = None

    def apply_to_settings(self, settings: FuzzerSettings) -> None:
        """Project runtime overrides onto persisted settings without destroying saved values."""

        if self.seed is not None:
            settings.seed = self.seed
        if self.runs is not None:
            settings.runs = self.runs
        if self.operation_count is not None:
            settings.operation_count = self.operation_count
        if self.main_window_count is not None:
            settings.main_window_count = self.main_window_count
        if self.dock_widget_count is not None:
            settings.dock_widget_count = self.dock_widget_count
        if self.teardown_timeout is not None:
            settings.teardown_timeout = self.teardown_timeout
        if self.dump_dir is not None:
            settings.dump_dir = self.dump_dir
        if self.enable_allure is not None:
            settings.enable_allure = self.enable_allure


def load_runtime_config(
    env: Mapping[str, str] | None = None,
    config_path: Optional[Path] = None,
) -> RuntimeConfig:
    """Load runtime configuration overrides from environment variables and an optional INI file."""

    source_env = os.environ if env is None else env
    config_file = _determine_config_path(source_env, config_path)
    config = RuntimeConfig(config_source=config_file)

    if config_file is not None and config_file.is_file():
        parser: Optional[configparser.ConfigParser] = configparser.ConfigParser()
        try:
            parser.read(config_file, encoding="utf-8")
        except configparser.Error as exc:
            logger.warning("Ignoring invalid config file %s: %s", config_file, exc)
            parser = None
        if parser and parser.has_section("runtime"):
            section = parser["runtime"]
            config.seed = _get_int(section, "seed", config.seed)
            config.runs = _get_int(section, "runs", config.runs)
            config.operation_count = _get_int(section, "operation_count", config.operation_count)
            config.main_window_count = _get_int(section, "main_window_count", config.main_window_count)
            config.dock_widget_count = _get_int(section, "dock_widget_count", config.dock_widget_count)
            config.teardown_timeout = _get_float(section, "teardown_timeout", config.teardown_timeout)
            config.dump_dir = section.get("dump_dir", config.dump_dir)
            config.enable_allure = _get_bool(section, "enable_allure", config.enable_allure)

    _apply_env_overrides(config, source_env)
    return config


def _determine_config_path(env: Mapping[str, str], explicit: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        return explicit
    env_override = env.get(f"{_ENV_PREFIX}CONFIG_FILE")
    if env_override:
        return Path(env_override).expanduser()
    candidates = (
        Path(env.get("DOCK_FUZZER_ROOT", "")) / "dock_fuzzer.ini" if env.get("DOCK_FUZZER_ROOT") else None,
        Path.cwd() / "dock_fuzzer.ini",
        Path.cwd() / "dock-fuzzer.ini",
    )
    for candidate in candidates:
        if candidate and candidate.is_file():
            return candidate
    return None


def _apply_env_overrides(config: RuntimeConfig, env: Mapping[str, str]) -> None:
    config.seed = _get_int(env, f"{_ENV_PREFIX}SEED", config.seed)
    config.runs = _get_int(env, f"{_ENV_PREFIX}RUNS", config.runs)
    config.operation_count = _get_int(env, f"{_ENV_PREFIX}OPERATION_COUNT", config.operation_count)
    config.main_window_count = _get_int(env, f"{_ENV_PREFIX}MAIN_WINDOW_COUNT", config.main_window_count)
    config.dock_widget_count = _get_int(env, f"{_ENV_PREFIX}DOCK_WIDGET_COUNT", config.dock_widget_count)
    config.teardown_timeout = _get_float(env, f"{_ENV_PREFIX}TEARDOWN_TIMEOUT", config.teardown_timeout)
    config.dump_dir = env.get(f"{_ENV_PREFIX}DUMP_DIR", config.dump_dir)
    config.enable_allure = _get_bool(env, f"{_ENV_PREFIX}ENABLE_ALLURE", config.enable_allure)


def _get_int(source: Mapping[str, str], key: str, default: Optional[int]) -> Optional[int]:
    raw = source.get(key)
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def _get_float(source: Mapping[str, str], key: str, default: Optional[float]) -> Optional[float]:
    raw = source.get(key)
    if raw is None:
        return default
    try:
        return float(str(raw).strip())
    except (TypeError, ValueError):
        return default


def _get_bool(source: Mapping[str, str], key: str, default: Optional[bool]) -> Optional[bool]:
    raw = source.get(key)
    if raw is None:
        return default
    value = str(raw).strip().lower()
    if value in _BOOL_TRUE:
        return True
    if value in _BOOL_FALSE:
        return False
    return default
