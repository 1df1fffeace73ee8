"""In-memory docking model driven by the fuzzer."""

from .event_loop import EventLoop
from .layout_saver import LayoutSaver
from .model import (
    AddingOption,
    DockWidget,
    DockingError,
    FloatingWindow,
    Frame,
    Location,
    MainWindow,
    TopLevelWindow,
)
from .registry import DockRegistry

__all__ = [
    "AddingOption",
    "DockRegistry",
    "DockWidget",
    "DockingError",
    "EventLoop",
    "FloatingWindow",
    "Frame",
    "LayoutSaver",
    "Location",
    "MainWindow",
    "TopLevelWindow",
]
