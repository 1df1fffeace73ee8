"""
Replay-log (fuzz test) persistence.

A dumped test captures the initial layout plus the ordered operation records
that were executed, so the same run can be rebuilt in another process::

    {
      "layout": {"mainWindows": ["MainWindow-1"],
                 "dockWidgets": [{"name": "DockWidget-1", "state": "docked",
                                  "mainWindow": "MainWindow-1"}]},
      "operations": [{"type": 1, "params": {...}, "comment": "...", "pause": 0}]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from dock_fuzzer.docking import DockingError, DockRegistry, Location

logger = logging.getLogger(__name__)

DOCKED = "docked"
FLOATING = "floating"
HIDDEN = "hidden"
DOCK_STATES = (DOCKED, FLOATING, HIDDEN)


@dataclass
class DockWidgetLayout:
    name: str
    state: str = DOCKED
    main_window: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "state": self.state}
        if self.main_window:
            data["mainWindow"] = self.main_window
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DockWidgetLayout:
        state = str(data.get("state") or DOCKED)
        if state not in DOCK_STATES:
            raise ValueError(f"Unknown dock widget state {state!r}")
        return cls(name=str(data["name"]), state=state, main_window=str(data.get("mainWindow") or ""))


@dataclass
class InitialLayout:
    """Windows and dock widgets a run starts from."""

    main_windows: List[str] = field(default_factory=list)
    dock_widgets: List[DockWidgetLayout] = field(default_factory=list)

    def build(self, registry: DockRegistry) -> None:
        for name in self.main_windows:
            registry.create_main_window(name)
        for entry in self.dock_widgets:
            dock = registry.create_dock_widget(entry.name)
            if entry.state == DOCKED:
                main_window = registry.main_window_by_name(entry.main_window)
                if main_window is None:
                    raise DockingError(f"{entry.name} refers to unknown main window {entry.main_window!r}")
                main_window.add_dock_widget(dock, Location.RIGHT)
            elif entry.state == FLOATING:
                dock.show()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mainWindows": list(self.main_windows),
            "dockWidgets": [entry.to_dict() for entry in self.dock_widgets],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> InitialLayout:
        return cls(
            main_windows=[str(name) for name in data.get("mainWindows") or []],
            dock_widgets=[DockWidgetLayout.from_dict(item) for item in data.get("dockWidgets") or []],
        )


@dataclass
class FuzzTest:
    layout: InitialLayout = field(default_factory=InitialLayout)
    operations: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout": self.layout.to_dict(),
            "operations": [record for record in self.operations if record],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FuzzTest:
        operations = data.get("operations") or []
        if not isinstance(operations, list):
            raise ValueError("'operations' must be a list of records")
        return cls(
            layout=InitialLayout.from_dict(data.get("layout") or {}),
            operations=[dict(record) for record in operations if isinstance(record, Mapping)],
        )


def load_test(path: Path) -> FuzzTest:
    """Load a dumped test. Raises ValueError when the file is not a test."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Unsupported replay log format in {path}")
    try:
        return FuzzTest.from_dict(data)
    except (KeyError, TypeError) as exc:
        raise ValueError(f"Malformed replay log {path}: {exc}") from exc


def save_test(test: FuzzTest, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(test.to_dict(), indent=2), encoding="utf-8")
    return path


def dump_test(test: FuzzTest, directory: Path, seed: Optional[int] = None) -> Path:
    """Write ``test`` under a timestamped name in ``directory`` and return the path."""
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S-%f")
    suffix = f"_{seed}" if seed is not None else ""
    path = save_test(test, Path(directory) / f"fuzzer_{stamp}{suffix}.json")
    logger.info("Replay log written to %s", path)
    return path
