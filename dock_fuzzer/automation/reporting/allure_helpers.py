"""Allure reporting helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

try:
    import allure  # type: ignore
except Exception:  # pragma: no cover - optional dependency
    allure = None  # type: ignore


def allure_available() -> bool:
    return allure is not None


def attach_file(name: str, path: Path, attachment_type: Optional[str] = None) -> bool:
    """Attach ``path`` to the running Allure report; returns False when skipped."""
    if allure is None:
        return False
    if not path.exists():
        return False
    attachment_type = attachment_type or "application/json"
    try:
        allure.attach(path.read_bytes(), name=name, attachment_type=attachment_type)
    except Exception:
        return False
    return True
