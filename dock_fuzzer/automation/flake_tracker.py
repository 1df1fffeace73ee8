"""Per-test failure counters persisted as JSON across fuzz sessions."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


@dataclass
class FlakeTracker:
    path: Path

    def __post_init__(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._stats: Dict[str, Dict[str, int]] = {}
        if not self.path.exists():
            return
        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable failure stats %s: %s", self.path, exc)
            return
        if not isinstance(loaded, dict):
            logger.warning("Ignoring failure stats %s: expected a JSON object", self.path)
            return
        self._stats = {name: counts for name, counts in loaded.items() if isinstance(counts, dict)}

    def record_failure(self, test_name: str, identifier: str) -> None:
        test_stats = self._stats.setdefault(test_name, {})
        count = test_stats.get(identifier, 0)
        test_stats[identifier] = (count if isinstance(count, int) else 0) + 1
        self._flush()

    def failures(self, test_name: str) -> Dict[str, int]:
        return dict(self._stats.get(test_name, {}))

    def _flush(self) -> None:
        try:
            self.path.write_text(json.dumps(self._stats, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write failure stats to %s: %s", self.path, exc)
