from __future__ import annotations

import enum
from typing import Tuple


class OperationType(enum.IntEnum):
    """Operation kinds; the integer value is the replay-log ``type`` code."""

    NONE = 0
    CLOSE_VIA_DOCK_WIDGET_API = 1
    HIDE_VIA_DOCK_WIDGET_API = 2
    SHOW_VIA_DOCK_WIDGET_API = 3
    ADD_DOCK_WIDGET = 4
    ADD_DOCK_WIDGET_AS_TAB = 5
    SAVE_LAYOUT = 6
    RESTORE_LAYOUT = 7
    # Sentinel, never dispatched.
    COUNT = 8

    @classmethod
    def dispatchable(cls) -> Tuple["OperationType", ...]:
        return tuple(kind for kind in cls if kind not in (cls.NONE, cls.COUNT))
