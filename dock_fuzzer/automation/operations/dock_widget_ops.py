"""Operations that close, hide or show a single dock widget through its API."""

from __future__ import annotations

from typing import Any, Dict, Mapping

from ..driver.protocols import Driver
from .base import OperationBase
from .kinds import OperationType


class _SingleDockWidgetOperation(OperationBase):
    """Shared parameter handling for operations targeting one dock widget by name."""

    def __init__(self, operation_type: OperationType, driver: Driver) -> None:
        super().__init__(operation_type, driver)
        self.dock_widget_name = ""

    def has_params(self) -> bool:
        return bool(self.dock_widget_name)

    def params_to_dict(self) -> Dict[str, Any]:
        if not self.dock_widget_name:
            return {}
        return {"dockWidgetName": self.dock_widget_name}

    def fill_params_from_dict(self, params: Mapping[str, Any]) -> None:
        self.dock_widget_name = str(params.get("dockWidgetName") or "")

    def _close_dock_widget(self) -> None:
        dock = self.require_dock(self.dock_widget_name)
        window = self.driver.top_level_of(dock)
        dock.close()
        self.wait_for_teardown(window)


class CloseViaDockWidgetAPI(_SingleDockWidgetOperation):
    def __init__(self, driver: Driver) -> None:
        super().__init__(OperationType.CLOSE_VIA_DOCK_WIDGET_API, driver)

    def generate_random_params(self) -> None:
        self.dock_widget_name = self.driver.random_dock_widget(lambda dock: dock.is_visible()) or ""

    def update_description(self) -> None:
        self.description = f"Closing {self.dock_str(self.dock_widget_name)}"

    def execute_impl(self) -> None:
        self._close_dock_widget()


class HideViaDockWidgetAPI(_SingleDockWidgetOperation):
    """
    Hides a visible dock widget.

    Hiding goes through ``close()``, exactly like CloseViaDockWidgetAPI, so
    that recorded logs replay with the same effect. The description keeps
    its historical spelling for the same reason.
    """

    def __init__(self, driver: Driver) -> None:
        super().__init__(OperationType.HIDE_VIA_DOCK_WIDGET_API, driver)

    def generate_random_params(self) -> None:
        self.dock_widget_name = self.driver.random_dock_widget(lambda dock: dock.is_visible()) or ""

    def update_description(self) -> None:
        self.description = f"Hidding {self.dock_str(self.dock_widget_name)}"

    def execute_impl(self) -> None:
        self._close_dock_widget()


class ShowViaDockWidgetAPI(_SingleDockWidgetOperation):
    def __init__(self, driver: Driver) -> None:
        super().__init__(OperationType.SHOW_VIA_DOCK_WIDGET_API, driver)

    def generate_random_params(self) -> None:
        self.dock_widget_name = self.driver.random_dock_widget(lambda dock: not dock.is_visible()) or ""

    def update_description(self) -> None:
        self.description = f"Showing {self.dock_str(self.dock_widget_name)}"

    def execute_impl(self) -> None:
        self.require_dock(self.dock_widget_name).show()
