"""
In-memory docking object model.

Dock widgets live inside frames (tab groups); frames live inside a top-level
window, either a main window or a floating window. Floating windows are
destroyed asynchronously: when their last frame goes away they are flagged
``being_deleted`` and the actual teardown runs on the next pump of the
registry's event loop.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .registry import DockRegistry


class DockingError(RuntimeError):
    """Raised when a docking request is structurally invalid."""


class Location(enum.IntEnum):
    NONE = 0
    LEFT = 1
    TOP = 2
    RIGHT = 3
    BOTTOM = 4

    @property
    def label(self) -> str:
        return self.name.lower()


class AddingOption(enum.IntEnum):
    NONE = 0
    START_HIDDEN = 1


class DockWidget:
    """A named, dockable widget. Visible exactly when it sits in a frame."""

    def __init__(self, unique_name: str, registry: "DockRegistry") -> None:
        self.unique_name = unique_name
        self._registry = registry
        self.frame: Optional[Frame] = None

    def __repr__(self) -> str:
        return f"DockWidget({self.unique_name!r})"

    def is_visible(self) -> bool:
        return self.frame is not None

    def window(self) -> Optional["TopLevelWindow"]:
        if self.frame is None:
            return None
        return self.frame.container

    def close(self) -> None:
        if self.frame is not None:
            self.frame.remove(self)

    def show(self) -> None:
        """Showing a closed dock widget floats it in a new window."""
        if self.frame is None:
            self._registry.create_floating_window(self)

    def add_dock_widget_as_tab(self, other: "DockWidget") -> None:
        if other is self:
            raise DockingError(f"Cannot add {self.unique_name} as a tab of itself")
        if self.frame is None:
            self.show()
        frame = self.frame
        if frame is None:
            raise DockingError(f"{self.unique_name} has no frame to tab into")
        other.close()
        frame.add(other)


class Frame:
    """Tab group holding one or more dock widgets."""

    def __init__(
        self,
        container: "TopLevelWindow",
        location: Location = Location.NONE,
        relative_to: str = "",
    ) -> None:
        self.container: Optional[TopLevelWindow] = container
        self.location = location
        self.relative_to = relative_to
        self.dock_widgets: List[DockWidget] = []

    def __repr__(self) -> str:
        names = [dw.unique_name for dw in self.dock_widgets]
        return f"Frame({names}, location={self.location.label})"

    def add(self, dock: DockWidget) -> None:
        dock.frame = self
        self.dock_widgets.append(dock)

    def remove(self, dock: DockWidget) -> None:
        self.dock_widgets.remove(dock)
        dock.frame = None
        if not self.dock_widgets and self.container is not None:
            self.container.remove_frame(self)


class TopLevelWindow:
    """Common behaviour of main windows and floating windows."""

    is_floating = False

    def __init__(self, unique_name: str, registry: "DockRegistry") -> None:
        self.unique_name = unique_name
        self._registry = registry
        self.frames: List[Frame] = []

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.unique_name!r})"

    def dock_widgets(self) -> List[DockWidget]:
        return [dock for frame in self.frames for dock in frame.dock_widgets]

    def add_frame(self, location: Location = Location.NONE, relative_to: str = "") -> Frame:
        frame = Frame(self, location, relative_to)
        self.frames.append(frame)
        return frame

    def remove_frame(self, frame: Frame) -> None:
        self.frames.remove(frame)
        frame.container = None


class MainWindow(TopLevelWindow):
    """Long-lived window; never destroyed by the fuzzer."""

    def add_dock_widget(
        self,
        dock: DockWidget,
        location: Location,
        relative_to: Optional[DockWidget] = None,
        option: AddingOption = AddingOption.NONE,
    ) -> None:
        if location == Location.NONE:
            raise DockingError(f"Cannot add {dock.unique_name} without a location")
        if relative_to is not None:
            if relative_to is dock:
                raise DockingError(f"Cannot add {dock.unique_name} relative to itself")
            if relative_to.window() is not self:
                raise DockingError(
                    f"{relative_to.unique_name} is not docked in {self.unique_name}"
                )
        dock.close()
        frame = self.add_frame(location, relative_to.unique_name if relative_to else "")
        frame.add(dock)
        if option == AddingOption.START_HIDDEN:
            dock.close()

    def placement_of(self, dock_name: str) -> Optional[tuple]:
        """Return ``(location, relative_to)`` of the frame holding ``dock_name``."""
        for frame in self.frames:
            if any(dock.unique_name == dock_name for dock in frame.dock_widgets):
                return frame.location, frame.relative_to
        return None


class FloatingWindow(TopLevelWindow):
    """Window created on demand; torn down through the event loop once empty."""

    is_floating = True

    def __init__(self, unique_name: str, registry: "DockRegistry") -> None:
        super().__init__(unique_name, registry)
        self.being_deleted = False
        self.deleted = False

    def remove_frame(self, frame: Frame) -> None:
        super().remove_frame(frame)
        if not self.frames:
            self.schedule_delete()

    def schedule_delete(self) -> None:
        if self.being_deleted:
            return
        self.being_deleted = True
        self._registry.event_loop.post(self._destroy)

    def _destroy(self) -> None:
        self.deleted = True
        self._registry.unregister_floating_window(self)
