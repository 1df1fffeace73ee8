"""Serialize and restore the full docking layout as an opaque JSON blob."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Set

from .model import Location, TopLevelWindow
from .registry import DockRegistry

logger = logging.getLogger(__name__)

SERIALIZATION_VERSION = 1


class LayoutSaver:
    def __init__(self, registry: DockRegistry) -> None:
        self._registry = registry

    def serialize_layout(self) -> bytes:
        state: Dict[str, Any] = {
            "serializationVersion": SERIALIZATION_VERSION,
            "mainWindows": [
                {"uniqueName": window.unique_name, "frames": _frames_state(window)}
                for window in self._registry.main_windows()
            ],
            "floatingWindows": [
                {"frames": _frames_state(window)}
                for window in self._registry.floating_windows()
                if not window.being_deleted
            ],
            "closedDockWidgets": [
                dock.unique_name for dock in self._registry.dock_widgets() if not dock.is_visible()
            ],
        }
        return json.dumps(state, sort_keys=True).encode("utf-8")

    def restore_layout(self, blob: bytes) -> bool:
        """
        Rebuild the layout described by ``blob``.

        Every dock widget is closed first (emptied floating windows are torn
        down through the event loop), then frames are recreated in the saved
        order. Unknown names are logged and skipped.
        """
        try:
            state = json.loads(blob.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as exc:
            logger.warning("Cannot restore layout, invalid blob: %s", exc)
            return False
        if not isinstance(state, dict) or state.get("serializationVersion") != SERIALIZATION_VERSION:
            logger.warning("Cannot restore layout, unsupported state %r", state)
            return False

        for dock in self._registry.dock_widgets():
            dock.close()

        placed: Set[str] = set()
        for window_state in state.get("mainWindows") or []:
            name = window_state.get("uniqueName", "")
            window = self._registry.main_window_by_name(name)
            if window is None:
                logger.warning("Skipping unknown main window %r while restoring", name)
                continue
            self._restore_frames(window, window_state.get("frames") or [], placed)

        for window_state in state.get("floatingWindows") or []:
            window = self._registry.create_floating_window()
            self._restore_frames(window, window_state.get("frames") or [], placed)
            if not window.frames:
                window.schedule_delete()
        return True

    def _restore_frames(self, window: TopLevelWindow, frames: List[Dict[str, Any]], placed: Set[str]) -> None:
        for frame_state in frames:
            docks = []
            for name in frame_state.get("dockWidgets") or []:
                dock = self._registry.dock_by_name(name)
                if dock is None or name in placed:
                    logger.warning("Skipping dock widget %r while restoring %s", name, window.unique_name)
                    continue
                placed.add(name)
                docks.append(dock)
            if not docks:
                continue
            frame = window.add_frame(
                Location(int(frame_state.get("location", Location.NONE))),
                str(frame_state.get("relativeTo") or ""),
            )
            for dock in docks:
                frame.add(dock)


def _frames_state(window: TopLevelWindow) -> List[Dict[str, Any]]:
    return [
        {
            "location": int(frame.location),
            "relativeTo": frame.relative_to,
            "dockWidgets": [dock.unique_name for dock in frame.dock_widgets],
        }
        for frame in window.frames
    ]
