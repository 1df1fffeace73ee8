"""Per-run registry of every live docking object."""

from __future__ import annotations

import itertools
import logging
from typing import Dict, List, Optional

from .event_loop import EventLoop
from .model import DockWidget, DockingError, FloatingWindow, MainWindow

logger = logging.getLogger(__name__)


class DockRegistry:
    """
    Owns the dock widgets and windows of one fuzz run.

    Instances are created explicitly and handed to whoever needs lookups;
    there is no process-wide registry.
    """

    def __init__(self, event_loop: Optional[EventLoop] = None) -> None:
        self.event_loop = event_loop or EventLoop()
        self._dock_widgets: Dict[str, DockWidget] = {}
        self._main_windows: Dict[str, MainWindow] = {}
        self._floating_windows: List[FloatingWindow] = []
        self._floating_ids = itertools.count(1)

    def create_dock_widget(self, name: str) -> DockWidget:
        if not name:
            raise DockingError("Dock widgets need a unique name")
        if name in self._dock_widgets:
            raise DockingError(f"Duplicate dock widget name {name!r}")
        dock = DockWidget(name, self)
        self._dock_widgets[name] = dock
        return dock

    def create_main_window(self, name: str) -> MainWindow:
        if name in self._main_windows:
            raise DockingError(f"Duplicate main window name {name!r}")
        window = MainWindow(name, self)
        self._main_windows[name] = window
        return window

    def create_floating_window(self, dock: Optional[DockWidget] = None) -> FloatingWindow:
        window = FloatingWindow(f"FloatingWindow-{next(self._floating_ids)}", self)
        self._floating_windows.append(window)
        if dock is not None:
            dock.close()
            window.add_frame().add(dock)
        logger.debug("Created %s for %s", window.unique_name, dock.unique_name if dock else "restore")
        return window

    def unregister_floating_window(self, window: FloatingWindow) -> None:
        if window in self._floating_windows:
            self._floating_windows.remove(window)
            logger.debug("Deleted %s", window.unique_name)

    def dock_by_name(self, name: str) -> Optional[DockWidget]:
        return self._dock_widgets.get(name)

    def main_window_by_name(self, name: str) -> Optional[MainWindow]:
        return self._main_windows.get(name)

    def dock_widgets(self) -> List[DockWidget]:
        return list(self._dock_widgets.values())

    def main_windows(self) -> List[MainWindow]:
        return list(self._main_windows.values())

    def floating_windows(self) -> List[FloatingWindow]:
        return list(self._floating_windows)

    def check_sanity(self) -> None:
        """Raise AssertionError when the object graph is inconsistent."""
        seen: Dict[str, str] = {}
        windows = [*self._main_windows.values(), *self._floating_windows]
        for window in windows:
            if getattr(window, "deleted", False):
                raise AssertionError(f"{window.unique_name} is deleted but still registered")
            if getattr(window, "being_deleted", False) and window.frames:
                raise AssertionError(f"{window.unique_name} is being deleted but still hosts frames")
            if window.is_floating and not window.frames and not getattr(window, "being_deleted", False):
                raise AssertionError(f"{window.unique_name} is empty but was not scheduled for deletion")
            for frame in window.frames:
                if frame.container is not window:
                    raise AssertionError(f"{frame!r} does not point back to {window.unique_name}")
                if not frame.dock_widgets:
                    raise AssertionError(f"Empty frame left in {window.unique_name}")
                for dock in frame.dock_widgets:
                    if dock.frame is not frame:
                        raise AssertionError(f"{dock.unique_name} does not point back to its frame")
                    if dock.unique_name in seen:
                        raise AssertionError(
                            f"{dock.unique_name} is in both {seen[dock.unique_name]} and {window.unique_name}"
                        )
                    seen[dock.unique_name] = window.unique_name
        for dock in self._dock_widgets.values():
            if dock.is_visible() and dock.unique_name not in seen:
                raise AssertionError(f"{dock.unique_name} is visible but not hosted by any window")
