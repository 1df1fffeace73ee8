"""Custom exception types for the fuzzing automation layer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class AutomationError(RuntimeError):
    """Base class for automation-related failures."""


class TargetNotFoundError(AutomationError):
    """Raised when an operation's target name does not resolve to a live object."""


class ActionTimeoutError(AutomationError):
    """Raised when an operation exceeds the allotted wait interval."""


class TeardownTimeoutError(ActionTimeoutError):
    """Raised when a floating window is not destroyed before the teardown deadline."""


class FuzzRunError(AutomationError):
    """Raised by the fuzzer when a run fails; points at the dumped replay log."""

    def __init__(self, message: str, *, dump_path: Optional[Path] = None, seed: Optional[int] = None) -> None:
        super().__init__(message)
        self.dump_path = dump_path
        self.seed = seed
