"""
Operation base contract.

Every fuzz step is an operation: it can pick its own random parameters,
describe itself, execute against the live docking objects and serialize to a
replay record. Operations carry names, never live objects, so a record can be
replayed against a freshly built but equivalent layout.
"""

from __future__ import annotations

import logging
import weakref
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from ..driver.exceptions import AutomationError, TargetNotFoundError
from ..driver.protocols import DockWidgetHandle, Driver, WindowHandle
from .kinds import OperationType

logger = logging.getLogger(__name__)


class OperationBase(ABC):
    """Single-use fuzz step. Create, ``execute()`` once, discard."""

    def __init__(self, operation_type: OperationType, driver: Driver) -> None:
        self.operation_type = operation_type
        self._driver_ref = weakref.ref(driver)
        self.pause_ms = 0
        self.description = ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.params_to_dict()!r})"

    @property
    def driver(self) -> Driver:
        driver = self._driver_ref()
        if driver is None:
            raise AutomationError(f"Driver released before {self.operation_type.name} ran")
        return driver

    @abstractmethod
    def has_params(self) -> bool:
        """Return True when enough parameters are present to execute."""

    @abstractmethod
    def generate_random_params(self) -> None:
        """Ask the driver for targets. Leaving params empty is a normal outcome."""

    @abstractmethod
    def update_description(self) -> None:
        ...

    @abstractmethod
    def execute_impl(self) -> None:
        ...

    @abstractmethod
    def params_to_dict(self) -> Dict[str, Any]:
        ...

    @abstractmethod
    def fill_params_from_dict(self, params: Mapping[str, Any]) -> None:
        ...

    def execute(self) -> bool:
        """Run the step; returns False when it was skipped for lack of a target."""
        if not self.has_params():
            self.generate_random_params()

        # generate_random_params() is not guaranteed to find anything
        if not self.has_params():
            logger.debug("Skipping %s: no eligible target", self.operation_type.name)
            return False

        self.update_description()
        logger.info("Executing %s", self.description)
        self.execute_impl()

        if self.pause_ms > 0:
            self.driver.wait(self.pause_ms)
        return True

    def to_record(self) -> Dict[str, Any]:
        """Serialize to a replay record; ``{}`` means there is nothing to replay."""
        params = self.params_to_dict()
        if not params:
            return {}
        if not self.description:
            self.update_description()
        record: Dict[str, Any] = {
            "type": int(self.operation_type),
            "params": params,
            "comment": self.description,
        }
        if self.pause_ms > 0:
            record["pause"] = self.pause_ms
        return record

    def to_string(self) -> str:
        if not self.description:
            self.update_description()
        return f"type={self.operation_type.name};description={self.description}"

    def dock_str(self, name: str) -> str:
        """Render a dock name as ``name``, ``name-[hidden]`` or ``null``."""
        dock = self.driver.dock_by_name(name) if name else None
        if dock is None:
            return "null"
        if dock.is_visible():
            return name
        return f"{name}-[hidden]"

    def require_dock(self, name: str) -> DockWidgetHandle:
        dock = self.driver.dock_by_name(name) if name else None
        if dock is None:
            raise TargetNotFoundError(
                f"{self.operation_type.name}: no dock widget named {name!r}"
            )
        return dock

    def wait_for_teardown(self, window: Optional[WindowHandle]) -> None:
        """Block until ``window`` is gone if the effect scheduled its deletion."""
        if window is not None and window.is_floating and getattr(window, "being_deleted", False):
            logger.debug("Waiting for %s to be deleted", window.unique_name)
            self.driver.wait_for_deleted(window)
