"""Public exports for the fuzzing driver."""

from .core import FuzzDriver
from .exceptions import (
    ActionTimeoutError,
    AutomationError,
    FuzzRunError,
    TargetNotFoundError,
    TeardownTimeoutError,
)
from .protocols import (
    DockPredicate,
    DockWidgetHandle,
    Driver,
    FloatingWindowHandle,
    MainWindowHandle,
    WindowHandle,
)

__all__ = [
    "FuzzDriver",
    "ActionTimeoutError",
    "AutomationError",
    "FuzzRunError",
    "TargetNotFoundError",
    "TeardownTimeoutError",
    "DockPredicate",
    "DockWidgetHandle",
    "Driver",
    "FloatingWindowHandle",
    "MainWindowHandle",
    "WindowHandle",
]
