"""
Operation factory and replay-record decoding.

Records look like ``{"type": int, "params": {...}, "comment": str, "pause": int}``.
Decoding problems are logged and never raised: a missing instance (or one
without params) simply means the step is skipped.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Type

from ..driver.protocols import Driver
from .add_ops import AddDockWidget, AddDockWidgetAsTab
from .base import OperationBase
from .dock_widget_ops import CloseViaDockWidgetAPI, HideViaDockWidgetAPI, ShowViaDockWidgetAPI
from .kinds import OperationType
from .layout_ops import RestoreLayout, SaveLayout

logger = logging.getLogger(__name__)

OPERATION_CLASSES: Dict[OperationType, Type[OperationBase]] = {
    OperationType.CLOSE_VIA_DOCK_WIDGET_API: CloseViaDockWidgetAPI,
    OperationType.HIDE_VIA_DOCK_WIDGET_API: HideViaDockWidgetAPI,
    OperationType.SHOW_VIA_DOCK_WIDGET_API: ShowViaDockWidgetAPI,
    OperationType.ADD_DOCK_WIDGET: AddDockWidget,
    OperationType.ADD_DOCK_WIDGET_AS_TAB: AddDockWidgetAsTab,
    OperationType.SAVE_LAYOUT: SaveLayout,
    OperationType.RESTORE_LAYOUT: RestoreLayout,
}

_unmapped = set(OperationType.dispatchable()) - set(OPERATION_CLASSES)
if _unmapped:  # pragma: no cover - guards new enum members
    raise RuntimeError(f"Operation kinds without a class: {sorted(kind.name for kind in _unmapped)}")


def new_operation(driver: Driver, operation_type: Any) -> Optional[OperationBase]:
    """Instantiate a fresh, unparameterized operation, or None for invalid kinds."""
    try:
        kind = OperationType(int(operation_type))
    except (TypeError, ValueError):
        logger.warning("new_operation: invalid type %r", operation_type)
        return None
    operation_cls = OPERATION_CLASSES.get(kind)
    if operation_cls is None:
        logger.warning("new_operation: invalid type %s", kind.name)
        return None
    return operation_cls(driver)


def from_record(driver: Driver, record: Mapping[str, Any]) -> Optional[OperationBase]:
    """
    Rebuild an operation from a replay record.

    Returns None when ``type``/``params`` are missing or the type is unknown.
    A record with empty params still yields an instance, but one whose
    ``has_params()`` may be False; callers must check before relying on it.
    """
    if not isinstance(record, Mapping) or "type" not in record or "params" not in record:
        logger.warning("from_record: invalid map %r", record)
        return None

    operation = new_operation(driver, record["type"])
    if operation is None:
        logger.warning("from_record: failed to fill params from %r", record)
        return None

    params = record["params"]
    if not isinstance(params, Mapping) or not params:
        logger.warning("from_record: invalid params in %r", record)
    else:
        operation.fill_params_from_dict(params)

    if "pause" in record:
        try:
            operation.pause_ms = max(0, int(record["pause"]))
        except (TypeError, ValueError):
            logger.warning("from_record: ignoring invalid pause in %r", record)
    return operation
