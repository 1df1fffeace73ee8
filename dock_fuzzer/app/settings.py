# dock_fuzzer/app/settings.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class FuzzerSettings:
    seed: Optional[int] = None
    runs: int = 1
    operation_count: int = 50
    main_window_count: int = 1
    dock_widget_count: int = 6
    teardown_timeout: float = 5.0
    dump_dir: Optional[str] = None
    enable_allure: bool = True

    @classmethod
    def load(cls, path: Path) -> FuzzerSettings:
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
            return cls()
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file %s: expected a JSON object", path)
            return cls()
        seed = data.get("seed")
        dump_dir = data.get("dump_dir")
        try:
            return cls(
                seed=int(seed) if seed is not None else None,
                runs=int(data.get("runs", cls.runs)),
                operation_count=int(data.get("operation_count", cls.operation_count)),
                main_window_count=int(data.get("main_window_count", cls.main_window_count)),
                dock_widget_count=int(data.get("dock_widget_count", cls.dock_widget_count)),
                teardown_timeout=float(data.get("teardown_timeout", cls.teardown_timeout)),
                dump_dir=str(dump_dir) if dump_dir is not None else None,
                enable_allure=bool(data.get("enable_allure", cls.enable_allure)),
            )
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed settings file %s: %s", path, exc)
            return cls()

    def save(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(asdict(self), indent=2), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not save settings to %s: %s", path, exc)
