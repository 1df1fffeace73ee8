"""Operations that move a dock widget into a main window or onto another tab group."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from ..driver.exceptions import AutomationError, TargetNotFoundError
from ..driver.protocols import Driver
from ..params import AddDockWidgetParams
from .base import OperationBase
from .kinds import OperationType


class AddDockWidget(OperationBase):
    def __init__(self, driver: Driver) -> None:
        super().__init__(OperationType.ADD_DOCK_WIDGET, driver)
        self.params: Optional[AddDockWidgetParams] = None

    def has_params(self) -> bool:
        return self.params is not None and not self.params.is_null()

    def generate_random_params(self) -> None:
        self.params = self.driver.random_add_dock_widget_params()

    def update_description(self) -> None:
        params = self.params or AddDockWidgetParams()
        description = f"AddDockWidget {self.dock_str(params.dock_widget_name)} to {params.location.label}"
        if params.relative_to_name:
            description += f", relative to {self.dock_str(params.relative_to_name)}"
        self.description = description

    def execute_impl(self) -> None:
        params = self.params
        if params is None:
            raise AutomationError(f"{self.operation_type.name}: no parameters to execute")
        driver = self.driver
        dock = params.dock_widget(driver)
        main_window = params.main_window(driver)
        relative_to = params.relative_to(driver)

        missing = [
            name
            for name, handle in ((params.dock_widget_name, dock), (params.main_window_name, main_window))
            if handle is None
        ]
        if params.relative_to_name and relative_to is None:
            missing.append(params.relative_to_name)
        if missing:
            raise TargetNotFoundError(f"{self.operation_type.name}: cannot resolve {', '.join(missing)}")

        window = driver.top_level_of(dock)
        main_window.add_dock_widget(dock, params.location, relative_to, params.adding_option)
        self.wait_for_teardown(window)

    def params_to_dict(self) -> Dict[str, Any]:
        if self.params is None or self.params.is_null():
            return {}
        return self.params.to_dict()

    def fill_params_from_dict(self, params: Mapping[str, Any]) -> None:
        self.params = AddDockWidgetParams.from_dict(params)


class AddDockWidgetAsTab(OperationBase):
    """Tab ``dock_widget_to_add_name`` onto the tab group of ``dock_widget_name``."""

    def __init__(self, driver: Driver) -> None:
        super().__init__(OperationType.ADD_DOCK_WIDGET_AS_TAB, driver)
        self.dock_widget_name = ""
        self.dock_widget_to_add_name = ""

    def has_params(self) -> bool:
        return bool(self.dock_widget_name) and bool(self.dock_widget_to_add_name)

    def generate_random_params(self) -> None:
        driver = self.driver
        dock_name = driver.random_dock_widget()
        dock = driver.dock_by_name(dock_name) if dock_name else None
        if dock is None or dock.frame is None:
            return

        # The widget to add must come from another top-level window, and never
        # from the target's own tab group.
        window = driver.top_level_of(dock)
        exclude = {sibling.unique_name for sibling in dock.frame.dock_widgets}
        exclude.update(
            other.unique_name for other in driver.dock_widgets() if driver.top_level_of(other) is window
        )
        to_add_name = driver.random_dock_widget(exclude=exclude)
        if not to_add_name:
            return

        self.dock_widget_name = dock.unique_name
        self.dock_widget_to_add_name = to_add_name

    def update_description(self) -> None:
        self.description = (
            f"AddDockWidgetAsTab {self.dock_str(self.dock_widget_to_add_name)}"
            f" onto {self.dock_str(self.dock_widget_name)}"
        )

    def execute_impl(self) -> None:
        dock = self.require_dock(self.dock_widget_name)
        to_add = self.require_dock(self.dock_widget_to_add_name)
        window = self.driver.top_level_of(to_add)
        dock.add_dock_widget_as_tab(to_add)
        self.wait_for_teardown(window)

    def params_to_dict(self) -> Dict[str, Any]:
        if not self.has_params():
            return {}
        return {
            "dockWidgetName": self.dock_widget_name,
            "dockWidgetToAddName": self.dock_widget_to_add_name,
        }

    def fill_params_from_dict(self, params: Mapping[str, Any]) -> None:
        self.dock_widget_name = str(params.get("dockWidgetName") or "")
        self.dock_widget_to_add_name = str(params.get("dockWidgetToAddName") or "")
