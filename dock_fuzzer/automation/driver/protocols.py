"""
Interfaces the operation layer expects from its collaborators.

Operations only ever talk to a :class:`Driver`; the handles it returns are
described structurally so that any docking backend exposing the same surface
can be fuzzed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, List, Optional, Protocol, Sequence

from dock_fuzzer.docking import AddingOption, Location

if TYPE_CHECKING:  # pragma: no cover
    from ..params import AddDockWidgetParams


class WindowHandle(Protocol):  # pragma: no cover - interface only
    unique_name: str
    is_floating: bool


class FloatingWindowHandle(WindowHandle, Protocol):  # pragma: no cover - interface only
    being_deleted: bool
    deleted: bool


class FrameHandle(Protocol):  # pragma: no cover - interface only
    dock_widgets: List["DockWidgetHandle"]


class DockWidgetHandle(Protocol):  # pragma: no cover - interface only
    unique_name: str
    frame: Optional[FrameHandle]

    def is_visible(self) -> bool:
        ...

    def close(self) -> None:
        ...

    def show(self) -> None:
        ...

    def add_dock_widget_as_tab(self, other: "DockWidgetHandle") -> None:
        ...


class MainWindowHandle(WindowHandle, Protocol):  # pragma: no cover - interface only
    def add_dock_widget(
        self,
        dock: DockWidgetHandle,
        location: Location,
        relative_to: Optional[DockWidgetHandle] = None,
        option: AddingOption = AddingOption.NONE,
    ) -> None:
        ...


DockPredicate = Callable[[DockWidgetHandle], bool]


class Driver(Protocol):  # pragma: no cover - interface only
    """Randomness, live-object lookup and layout storage for one fuzz run."""

    last_saved_layout: bytes

    def random_dock_widget(
        self, predicate: Optional[DockPredicate] = None, exclude: Iterable[str] = ()
    ) -> Optional[str]:
        ...

    def random_add_dock_widget_params(self) -> Optional["AddDockWidgetParams"]:
        ...

    def dock_by_name(self, name: str) -> Optional[DockWidgetHandle]:
        ...

    def main_window_by_name(self, name: str) -> Optional[MainWindowHandle]:
        ...

    def dock_widgets(self) -> Sequence[DockWidgetHandle]:
        ...

    def top_level_of(self, dock: DockWidgetHandle) -> Optional[WindowHandle]:
        ...

    def floating_windows(self) -> Sequence[FloatingWindowHandle]:
        ...

    def serialize_layout(self) -> bytes:
        ...

    def restore_layout(self, blob: bytes) -> bool:
        ...

    def wait(self, ms: int) -> None:
        ...

    def wait_for_deleted(self, window: FloatingWindowHandle, timeout: Optional[float] = None) -> None:
        ...
