from __future__ import annotations

import random

import pytest

from dock_fuzzer.automation.driver import FuzzDriver
from dock_fuzzer.docking import DockRegistry, EventLoop


@pytest.fixture
def dock_event_loop() -> EventLoop:
    return EventLoop()


@pytest.fixture
def registry(dock_event_loop: EventLoop) -> DockRegistry:
    return DockRegistry(dock_event_loop)


@pytest.fixture
def driver(registry: DockRegistry) -> FuzzDriver:
    return FuzzDriver(registry, rng=random.Random(1234), teardown_timeout=0.5, poll_interval=0.001)


@pytest.fixture
def main_window(registry: DockRegistry):
    return registry.create_main_window("MainWindow-1")
