from __future__ import annotations

import pytest

from dock_fuzzer.automation.driver import TeardownTimeoutError
from dock_fuzzer.docking import AddingOption, DockingError, Location


def test_show_floats_hidden_dock_widget(registry) -> None:
    dock = registry.create_dock_widget("A")
    assert not dock.is_visible()
    dock.show()
    window = dock.window()
    assert dock.is_visible()
    assert window is not None and window.is_floating
    assert registry.floating_windows() == [window]
    registry.check_sanity()


def test_closing_last_dock_defers_window_deletion(registry, dock_event_loop) -> None:
    dock = registry.create_dock_widget("A")
    dock.show()
    window = dock.window()

    dock.close()
    assert window.being_deleted
    assert not window.deleted
    assert window in registry.floating_windows()
    registry.check_sanity()

    assert dock_event_loop.process_events() == 1
    assert window.deleted
    assert registry.floating_windows() == []
    registry.check_sanity()


def test_add_dock_widget_moves_out_of_floating_window(registry, main_window, dock_event_loop) -> None:
    dock = registry.create_dock_widget("A")
    dock.show()
    floating = dock.window()

    main_window.add_dock_widget(dock, Location.LEFT)
    assert dock.window() is main_window
    assert floating.being_deleted
    dock_event_loop.process_events()
    assert floating.deleted
    assert main_window.placement_of("A") == (Location.LEFT, "")


def test_add_dock_widget_start_hidden(registry, main_window) -> None:
    dock = registry.create_dock_widget("A")
    main_window.add_dock_widget(dock, Location.TOP, option=AddingOption.START_HIDDEN)
    assert not dock.is_visible()
    assert main_window.frames == []
    registry.check_sanity()


def test_add_dock_widget_rejects_invalid_placement(registry, main_window) -> None:
    a = registry.create_dock_widget("A")
    b = registry.create_dock_widget("B")
    with pytest.raises(DockingError):
        main_window.add_dock_widget(a, Location.NONE)
    with pytest.raises(DockingError):
        main_window.add_dock_widget(a, Location.LEFT, relative_to=a)
    # B is not docked in the main window
    with pytest.raises(DockingError):
        main_window.add_dock_widget(a, Location.LEFT, relative_to=b)


def test_add_as_tab_merges_frames(registry, main_window, dock_event_loop) -> None:
    a = registry.create_dock_widget("A")
    b = registry.create_dock_widget("B")
    main_window.add_dock_widget(a, Location.RIGHT)
    b.show()
    floating = b.window()

    a.add_dock_widget_as_tab(b)
    assert b.frame is a.frame
    assert [dock.unique_name for dock in a.frame.dock_widgets] == ["A", "B"]
    assert floating.being_deleted
    dock_event_loop.process_events()
    registry.check_sanity()


def test_add_as_tab_of_itself_is_rejected(registry) -> None:
    a = registry.create_dock_widget("A")
    with pytest.raises(DockingError):
        a.add_dock_widget_as_tab(a)


def test_duplicate_dock_names_are_rejected(registry) -> None:
    registry.create_dock_widget("A")
    with pytest.raises(DockingError):
        registry.create_dock_widget("A")
    with pytest.raises(DockingError):
        registry.create_dock_widget("")


def test_check_sanity_detects_orphan_frame(registry, main_window) -> None:
    dock = registry.create_dock_widget("A")
    main_window.add_dock_widget(dock, Location.LEFT)
    main_window.add_frame(Location.TOP)
    with pytest.raises(AssertionError, match="Empty frame"):
        registry.check_sanity()


def test_check_sanity_detects_dock_in_two_windows(registry, main_window) -> None:
    dock = registry.create_dock_widget("A")
    main_window.add_dock_widget(dock, Location.LEFT)
    other = registry.create_main_window("MainWindow-2")
    other.add_frame(Location.LEFT).dock_widgets.append(dock)
    with pytest.raises(AssertionError):
        registry.check_sanity()


def test_wait_for_deleted_returns_once_window_is_gone(registry, driver) -> None:
    dock = registry.create_dock_widget("A")
    dock.show()
    window = dock.window()
    dock.close()
    driver.wait_for_deleted(window)
    assert window.deleted


def test_wait_for_deleted_times_out(registry, driver, monkeypatch) -> None:
    dock = registry.create_dock_widget("A")
    dock.show()
    window = dock.window()
    monkeypatch.setattr(window, "_destroy", lambda: None)
    dock.close()
    with pytest.raises(TeardownTimeoutError):
        driver.wait_for_deleted(window, timeout=0.05)


def test_add_as_tab_requires_a_frame(registry, monkeypatch) -> None:
    a = registry.create_dock_widget("A")
    b = registry.create_dock_widget("B")
    monkeypatch.setattr(registry, "create_floating_window", lambda dock=None: None)
    with pytest.raises(DockingError, match="no frame"):
        a.add_dock_widget_as_tab(b)
    assert b.frame is None
