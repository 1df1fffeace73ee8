from __future__ import annotations

import json

from dock_fuzzer.docking import LayoutSaver, Location


def _build(registry, main_window):
    a = registry.create_dock_widget("A")
    b = registry.create_dock_widget("B")
    c = registry.create_dock_widget("C")
    main_window.add_dock_widget(a, Location.LEFT)
    main_window.add_dock_widget(b, Location.BOTTOM, relative_to=a)
    c.show()
    return a, b, c


def test_serialize_layout_describes_windows(registry, main_window) -> None:
    _build(registry, main_window)
    registry.create_dock_widget("D")
    state = json.loads(LayoutSaver(registry).serialize_layout())

    assert state["mainWindows"][0]["uniqueName"] == "MainWindow-1"
    frames = state["mainWindows"][0]["frames"]
    assert frames[1] == {"location": int(Location.BOTTOM), "relativeTo": "A", "dockWidgets": ["B"]}
    assert state["floatingWindows"] == [
        {"frames": [{"location": 0, "relativeTo": "", "dockWidgets": ["C"]}]}
    ]
    assert state["closedDockWidgets"] == ["D"]


def test_restore_layout_reverts_changes(registry, main_window, dock_event_loop) -> None:
    a, b, c = _build(registry, main_window)
    saver = LayoutSaver(registry)
    blob = saver.serialize_layout()

    a.close()
    c.close()
    dock_event_loop.process_events()
    b.show()

    assert saver.restore_layout(blob)
    dock_event_loop.process_events()
    registry.check_sanity()
    assert a.window() is main_window
    assert b.window() is main_window
    assert c.window() is not None and c.window().is_floating
    assert main_window.placement_of("B") == (Location.BOTTOM, "A")
    assert saver.serialize_layout() == blob


def test_restore_layout_rejects_garbage(registry, caplog) -> None:
    saver = LayoutSaver(registry)
    assert saver.restore_layout(b"not json") is False
    assert saver.restore_layout(b'{"serializationVersion": 99}') is False
    assert "Cannot restore layout" in caplog.text


def test_restore_layout_skips_unknown_names(registry, main_window) -> None:
    registry.create_dock_widget("A")
    blob = json.dumps(
        {
            "serializationVersion": 1,
            "mainWindows": [
                {"uniqueName": "MainWindow-1", "frames": [{"location": 1, "relativeTo": "", "dockWidgets": ["A", "Ghost"]}]},
                {"uniqueName": "Missing", "frames": []},
            ],
            "floatingWindows": [],
        }
    ).encode("utf-8")
    assert LayoutSaver(registry).restore_layout(blob)
    assert [dock.unique_name for dock in main_window.dock_widgets()] == ["A"]
    registry.check_sanity()
