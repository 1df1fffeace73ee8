# dock_fuzzer/app/environment.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class Paths:
    """Resolved filesystem locations used by the fuzzer."""

    data_root: Path
    replays_dir: Path
    results_dir: Path
    logs_dir: Path

    @property
    def settings_file(self) -> Path:
        return self.data_root / "fuzzer_settings.json"

    @property
    def flake_stats_file(self) -> Path:
        return self.results_dir / "flake_stats.json"


def default_data_root() -> Path:
    return Path(__file__).resolve().parents[1] / "data"


def build_default_paths(data_root: Optional[Path] = None) -> Paths:
    """Create the default Paths collection and ensure directories exist."""
    root = Path(data_root) if data_root is not None else default_data_root()
    paths = Paths(
        data_root=root,
        replays_dir=root / "replays",
        results_dir=root / "results",
        logs_dir=root / "logs",
    )
    _ensure_dirs(paths.data_root, paths.replays_dir, paths.results_dir, paths.logs_dir)
    return paths


def _ensure_dirs(*directories: Path) -> None:
    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)
