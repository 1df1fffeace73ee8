"""Fuzzing automation: driver, operations, replay logs and the fuzz loop."""

from .driver import AutomationError, FuzzDriver, FuzzRunError, TargetNotFoundError, TeardownTimeoutError
from .flake_tracker import FlakeTracker
from .fuzzer import Fuzzer, FuzzerConfig, RunResult
from .operations import OperationBase, OperationType, from_record, new_operation
from .params import AddDockWidgetParams
from .replay import DockWidgetLayout, FuzzTest, InitialLayout, dump_test, load_test, save_test

__all__ = [
    "AddDockWidgetParams",
    "AutomationError",
    "DockWidgetLayout",
    "FlakeTracker",
    "FuzzDriver",
    "FuzzRunError",
    "FuzzTest",
    "Fuzzer",
    "FuzzerConfig",
    "InitialLayout",
    "OperationBase",
    "OperationType",
    "RunResult",
    "TargetNotFoundError",
    "TeardownTimeoutError",
    "dump_test",
    "from_record",
    "load_test",
    "new_operation",
    "save_test",
]
