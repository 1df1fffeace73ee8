"""Placement parameters for the AddDockWidget operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from dock_fuzzer.docking import AddingOption, Location

if TYPE_CHECKING:  # pragma: no cover
    from .driver.protocols import DockWidgetHandle, Driver, MainWindowHandle


@dataclass(frozen=True)
class AddDockWidgetParams:
    """
    Names plus placement describing one ``MainWindow.add_dock_widget`` call.

    Only names are stored; ``dock_widget``/``main_window``/``relative_to``
    resolve them against the driver at execution time.
    """

    main_window_name: str = ""
    dock_widget_name: str = ""
    location: Location = Location.NONE
    relative_to_name: str = ""
    adding_option: AddingOption = AddingOption.NONE

    def is_null(self) -> bool:
        return not self.main_window_name or not self.dock_widget_name or self.location == Location.NONE

    def dock_widget(self, driver: "Driver") -> Optional["DockWidgetHandle"]:
        return driver.dock_by_name(self.dock_widget_name)

    def main_window(self, driver: "Driver") -> Optional["MainWindowHandle"]:
        return driver.main_window_by_name(self.main_window_name)

    def relative_to(self, driver: "Driver") -> Optional["DockWidgetHandle"]:
        if not self.relative_to_name:
            return None
        return driver.dock_by_name(self.relative_to_name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mainWindowName": self.main_window_name,
            "dockWidgetName": self.dock_widget_name,
            "location": int(self.location),
            "relativeToName": self.relative_to_name,
            "addingOption": int(self.adding_option),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AddDockWidgetParams:
        return cls(
            main_window_name=str(data.get("mainWindowName") or ""),
            dock_widget_name=str(data.get("dockWidgetName") or ""),
            location=_coerce_enum(Location, data.get("location"), Location.NONE),
            relative_to_name=str(data.get("relativeToName") or ""),
            adding_option=_coerce_enum(AddingOption, data.get("addingOption"), AddingOption.NONE),
        )


def _coerce_enum(enum_cls, value, default):
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError):
        return default
