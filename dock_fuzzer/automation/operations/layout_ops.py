"""Save and restore the whole layout through the driver's stored blob."""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from ..driver.protocols import Driver
from .base import OperationBase
from .kinds import OperationType

logger = logging.getLogger(__name__)


class _ParameterlessOperation(OperationBase):
    """Always executable; carries no parameters and therefore no replay record."""

    def has_params(self) -> bool:
        return True

    def generate_random_params(self) -> None:
        pass

    def update_description(self) -> None:
        self.description = type(self).__name__

    def params_to_dict(self) -> Dict[str, Any]:
        return {}

    def fill_params_from_dict(self, params: Mapping[str, Any]) -> None:
        pass


class SaveLayout(_ParameterlessOperation):
    def __init__(self, driver: Driver) -> None:
        super().__init__(OperationType.SAVE_LAYOUT, driver)

    def execute_impl(self) -> None:
        driver = self.driver
        driver.last_saved_layout = driver.serialize_layout()
        logger.debug("Saved layout (%d bytes)", len(driver.last_saved_layout))


class RestoreLayout(_ParameterlessOperation):
    def __init__(self, driver: Driver) -> None:
        super().__init__(OperationType.RESTORE_LAYOUT, driver)

    def execute_impl(self) -> None:
        serialized = self.driver.last_saved_layout
        if not serialized:
            logger.debug("Skipping, nothing to restore")
            return
        logger.debug("Restoring layout (%d bytes)", len(serialized))
        if not self.driver.restore_layout(serialized):
            logger.warning("Layout restore rejected the saved blob")
        # Restoring closes every dock widget first; windows it emptied stay
        # registered until their deletion has run.
        for window in self.driver.floating_windows():
            self.wait_for_teardown(window)
