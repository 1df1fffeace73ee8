"""
Concrete driver binding the operation layer to the in-memory docking model.

The driver is the only place that knows what currently exists and the only
consumer of randomness, so operations stay deterministic given a seeded
``random.Random``.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Iterable, List, Optional

from dock_fuzzer.docking import (
    AddingOption,
    DockRegistry,
    DockWidget,
    EventLoop,
    FloatingWindow,
    LayoutSaver,
    Location,
    MainWindow,
    TopLevelWindow,
)

from ..params import AddDockWidgetParams
from .exceptions import TeardownTimeoutError
from .protocols import DockPredicate

logger = logging.getLogger(__name__)

_PLACEMENT_LOCATIONS = (Location.LEFT, Location.TOP, Location.RIGHT, Location.BOTTOM)


class FuzzDriver:
    """Randomized target selection, lookups and layout storage for one run."""

    def __init__(
        self,
        registry: DockRegistry,
        *,
        rng: Optional[random.Random] = None,
        teardown_timeout: float = 5.0,
        poll_interval: float = 0.01,
        relative_to_probability: float = 0.5,
        start_hidden_probability: float = 0.1,
    ) -> None:
        self._registry = registry
        self._rng = rng or random.Random()
        self._teardown_timeout = max(0.0, float(teardown_timeout))
        self._poll_interval = max(0.001, float(poll_interval))
        self._relative_to_probability = relative_to_probability
        self._start_hidden_probability = start_hidden_probability
        self.last_saved_layout: bytes = b""

    @property
    def registry(self) -> DockRegistry:
        return self._registry

    @property
    def event_loop(self) -> EventLoop:
        return self._registry.event_loop

    def dock_by_name(self, name: str) -> Optional[DockWidget]:
        return self._registry.dock_by_name(name)

    def main_window_by_name(self, name: str) -> Optional[MainWindow]:
        return self._registry.main_window_by_name(name)

    def dock_widgets(self) -> List[DockWidget]:
        return self._registry.dock_widgets()

    def top_level_of(self, dock: DockWidget) -> Optional[TopLevelWindow]:
        return dock.window()

    def floating_windows(self) -> List[FloatingWindow]:
        return self._registry.floating_windows()

    def random_dock_widget(
        self, predicate: Optional[DockPredicate] = None, exclude: Iterable[str] = ()
    ) -> Optional[str]:
        """Pick the name of a random dock widget matching ``predicate``, or None."""
        excluded = set(exclude)
        candidates = [
            dock
            for dock in self._registry.dock_widgets()
            if dock.unique_name not in excluded and (predicate is None or predicate(dock))
        ]
        if not candidates:
            return None
        return self._rng.choice(candidates).unique_name

    def random_add_dock_widget_params(self) -> Optional[AddDockWidgetParams]:
        main_windows = self._registry.main_windows()
        if not main_windows:
            return None
        main_window = self._rng.choice(main_windows)
        dock_name = self.random_dock_widget()
        if dock_name is None:
            return None
        location = self._rng.choice(_PLACEMENT_LOCATIONS)

        relative_to_name = ""
        if self._rng.random() < self._relative_to_probability:
            relative_to_name = self.random_dock_widget(
                predicate=lambda dock: dock.window() is main_window,
                exclude=(dock_name,),
            ) or ""

        adding_option = AddingOption.NONE
        if self._rng.random() < self._start_hidden_probability:
            adding_option = AddingOption.START_HIDDEN

        return AddDockWidgetParams(
            main_window_name=main_window.unique_name,
            dock_widget_name=dock_name,
            location=location,
            relative_to_name=relative_to_name,
            adding_option=adding_option,
        )

    def serialize_layout(self) -> bytes:
        return LayoutSaver(self._registry).serialize_layout()

    def restore_layout(self, blob: bytes) -> bool:
        return LayoutSaver(self._registry).restore_layout(blob)

    def wait(self, ms: int) -> None:
        """Pump the event loop for ``ms`` milliseconds."""
        self.event_loop.process_events()
        remaining = max(0, int(ms)) / 1000.0
        while remaining > 0:
            chunk = min(self._poll_interval, remaining)
            time.sleep(chunk)
            remaining -= chunk
            self.event_loop.process_events()

    def wait_for_deleted(self, window: FloatingWindow, timeout: Optional[float] = None) -> None:
        """Pump the event loop until ``window`` is destroyed; raise on timeout."""
        timeout = self._teardown_timeout if timeout is None else max(0.0, float(timeout))
        deadline = time.monotonic() + timeout
        while True:
            self.event_loop.process_events()
            if window.deleted:
                return
            if time.monotonic() >= deadline:
                raise TeardownTimeoutError(
                    f"{window.unique_name} was not deleted within {timeout:.2f}s"
                )
            time.sleep(self._poll_interval)
