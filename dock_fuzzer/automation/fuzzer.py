"""
Fuzz loop: build a layout, run operations against it, dump on failure.

In generation mode each step asks the factory for an operation of a random
kind and lets it pick its own targets; in replay mode the steps come from a
dumped test. Either way every parameterized step is recorded, so a failing run
can be written out and replayed verbatim.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dock_fuzzer.docking import DockingError, DockRegistry, EventLoop

from .driver import AutomationError, FuzzDriver, FuzzRunError
from .flake_tracker import FlakeTracker
from .operations import OperationBase, OperationType, from_record, new_operation
from .replay import DOCK_STATES, DOCKED, DockWidgetLayout, FuzzTest, InitialLayout, dump_test, load_test
from .reporting.allure_helpers import attach_file

logger = logging.getLogger(__name__)


@dataclass
class FuzzerConfig:
    dump_dir: Path
    operation_count: int = 50
    main_window_count: int = 1
    dock_widget_count: int = 6
    teardown_timeout: float = 5.0
    poll_interval: float = 0.01
    check_sanity: bool = True
    enable_allure: bool = True
    flake_stats_path: Optional[Path] = None
    # Empty means every dispatchable kind.
    operation_kinds: Tuple[OperationType, ...] = ()


@dataclass
class RunResult:
    test: FuzzTest
    seed: Optional[int] = None
    executed: int = 0
    skipped: int = 0


@dataclass
class _RunState:
    registry: DockRegistry
    driver: FuzzDriver
    recorded: List[Dict[str, Any]] = field(default_factory=list)
    executed: int = 0
    skipped: int = 0


class Fuzzer:
    def __init__(self, config: FuzzerConfig) -> None:
        self.config = config
        self._flake_tracker: Optional[FlakeTracker] = None
        if config.flake_stats_path:
            self._flake_tracker = FlakeTracker(Path(config.flake_stats_path))

    def generate_random_test(self, seed: int) -> FuzzTest:
        """Random initial layout for ``seed``; operations are generated while running."""
        rng = random.Random(seed)
        main_windows = [f"MainWindow-{index}" for index in range(1, max(1, self.config.main_window_count) + 1)]
        dock_widgets = []
        for index in range(1, max(0, self.config.dock_widget_count) + 1):
            state = rng.choice(DOCK_STATES)
            dock_widgets.append(
                DockWidgetLayout(
                    name=f"DockWidget-{index}",
                    state=state,
                    main_window=rng.choice(main_windows) if state == DOCKED else "",
                )
            )
        return FuzzTest(layout=InitialLayout(main_windows=main_windows, dock_widgets=dock_widgets))

    def fuzz(self, runs: int, seed: Optional[int] = None) -> List[RunResult]:
        """Run ``runs`` generated tests with consecutive seeds; stops at the first failure."""
        base_seed = random.randrange(1 << 31) if seed is None else seed
        results = []
        for run_seed in range(base_seed, base_seed + max(0, runs)):
            logger.info("Fuzz run with seed %s", run_seed)
            test = self.generate_random_test(run_seed)
            results.append(self.run_test(test, seed=run_seed, generate=True))
        return results

    def replay(self, path: Path) -> RunResult:
        test = load_test(path)
        logger.info("Replaying %s (%d operations)", path, len(test.operations))
        return self.run_test(test, name=Path(path).stem)

    def run_test(
        self,
        test: FuzzTest,
        *,
        seed: Optional[int] = None,
        generate: bool = False,
        name: Optional[str] = None,
    ) -> RunResult:
        """
        Execute ``test`` against a freshly built layout.

        With ``generate=True`` new operations are produced and appended to
        ``test.operations``; otherwise the recorded operations are replayed.
        Any sanity, docking or automation failure dumps the test and is
        re-raised as FuzzRunError.
        """
        registry = DockRegistry(EventLoop())
        driver = FuzzDriver(
            registry,
            rng=random.Random(seed),
            teardown_timeout=self.config.teardown_timeout,
            poll_interval=self.config.poll_interval,
        )
        state = _RunState(registry=registry, driver=driver)
        test_name = name or (f"seed-{seed}" if seed is not None else "replay")
        current: Optional[OperationBase] = None
        try:
            test.layout.build(registry)
            if generate:
                rng = random.Random(seed)
                kinds = self.config.operation_kinds or OperationType.dispatchable()
                for _ in range(self.config.operation_count):
                    current = new_operation(driver, rng.choice(kinds))
                    if current is not None:
                        self._run_step(current, state)
            else:
                for record in test.operations:
                    current = from_record(driver, record)
                    if current is None or not current.has_params():
                        state.skipped += 1
                        continue
                    self._run_step(current, state, record=record)
        except (AssertionError, AutomationError, DockingError) as exc:
            failing = current.to_string() if current is not None else type(exc).__name__
            dumped = FuzzTest(layout=test.layout, operations=state.recorded)
            dump_path = dump_test(dumped, self.config.dump_dir, seed)
            logger.error("Fuzz run %s failed at '%s': %s", test_name, failing, exc)
            if self._flake_tracker is not None:
                self._flake_tracker.record_failure(test_name, failing)
            if self.config.enable_allure:
                attach_file(f"replay log ({test_name})", dump_path)
            raise FuzzRunError(
                f"Fuzz run {test_name} failed at '{failing}': {exc}", dump_path=dump_path, seed=seed
            ) from exc

        if generate:
            test.operations = state.recorded
        return RunResult(test=test, seed=seed, executed=state.executed, skipped=state.skipped)

    def _run_step(
        self,
        operation: OperationBase,
        state: _RunState,
        record: Optional[Dict[str, Any]] = None,
    ) -> None:
        # Params are settled before executing so that the failing step itself
        # ends up in the dumped log.
        if not operation.has_params():
            operation.generate_random_params()
        if not operation.has_params():
            state.skipped += 1
            return
        recorded = dict(record) if record is not None else operation.to_record()
        if recorded:
            state.recorded.append(recorded)
        operation.execute()
        state.executed += 1
        if self.config.check_sanity:
            state.registry.check_sanity()
