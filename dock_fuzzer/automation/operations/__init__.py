"""Replayable fuzz operations and their factory."""

from .add_ops import AddDockWidget, AddDockWidgetAsTab
from .base import OperationBase
from .dock_widget_ops import CloseViaDockWidgetAPI, HideViaDockWidgetAPI, ShowViaDockWidgetAPI
from .factory import OPERATION_CLASSES, from_record, new_operation
from .kinds import OperationType
from .layout_ops import RestoreLayout, SaveLayout

__all__ = [
    "AddDockWidget",
    "AddDockWidgetAsTab",
    "CloseViaDockWidgetAPI",
    "HideViaDockWidgetAPI",
    "OPERATION_CLASSES",
    "OperationBase",
    "OperationType",
    "RestoreLayout",
    "SaveLayout",
    "ShowViaDockWidgetAPI",
    "from_record",
    "new_operation",
]
