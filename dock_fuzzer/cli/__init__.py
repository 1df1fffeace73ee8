from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from dock_fuzzer.app.configuration import RuntimeConfig, load_runtime_config
from dock_fuzzer.app.environment import Paths, build_default_paths, default_data_root
from dock_fuzzer.app.settings import FuzzerSettings
from dock_fuzzer.automation.driver import FuzzDriver, FuzzRunError
from dock_fuzzer.automation.fuzzer import Fuzzer, FuzzerConfig
from dock_fuzzer.automation.operations import from_record
from dock_fuzzer.automation.reporting.allure_helpers import allure_available
from dock_fuzzer.automation.replay import load_test
from dock_fuzzer.docking import DockingError, DockRegistry

logger = logging.getLogger("dock_fuzzer.cli")

EXIT_OK = 0
EXIT_BAD_INPUT = 2
EXIT_RUN_FAILED = 4


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="dock-fuzzer", description="Docking layout fuzzer")
    parser.add_argument("--data-root", type=Path, default=default_data_root(), help="Data directory (defaults to dock_fuzzer/data)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    fuzz_parser = subparsers.add_parser("fuzz", help="Generate and run random operation sequences")
    fuzz_parser.add_argument("--runs", type=int, help="Number of runs (consecutive seeds)")
    fuzz_parser.add_argument("--seed", type=int, help="Seed of the first run")
    fuzz_parser.add_argument("--operations", type=int, help="Operations per run")
    fuzz_parser.add_argument("--allure", dest="allure", default=None, action=argparse.BooleanOptionalAction, help="Attach failing replay logs to Allure")

    replay_parser = subparsers.add_parser("replay", help="Replay dumped fuzz runs")
    replay_parser.add_argument("files", nargs="+", type=Path, help="Replay log JSON files")

    describe_parser = subparsers.add_parser("describe", help="Print the operations of a replay log")
    describe_parser.add_argument("file", type=Path, help="Replay log JSON file")

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(name)s - %(message)s")

    runtime_cfg = load_runtime_config()
    logger.debug("Loaded runtime config overrides: %s", runtime_cfg)

    if args.command == "fuzz":
        return _handle_fuzz(args, runtime_cfg)
    if args.command == "replay":
        return _handle_replay(args, runtime_cfg)
    if args.command == "describe":
        return _handle_describe(args.file)
    parser.print_help()
    return 1


def _handle_fuzz(args: argparse.Namespace, runtime_cfg: RuntimeConfig) -> int:
    paths = build_default_paths(args.data_root)
    settings = _load_settings(paths, runtime_cfg)
    if args.runs is not None:
        settings.runs = args.runs
    if args.seed is not None:
        settings.seed = args.seed
    if args.operations is not None:
        settings.operation_count = args.operations
    if args.allure is not None:
        settings.enable_allure = bool(args.allure)
    if settings.runs < 1 or settings.operation_count < 0:
        logger.error("Runs must be positive and the operation count non-negative")
        return EXIT_BAD_INPUT
    if settings.enable_allure and not allure_available():
        logger.debug("allure-pytest is not installed; failing runs will not be attached")

    fuzzer = Fuzzer(_fuzzer_config(paths, settings))
    try:
        results = fuzzer.fuzz(settings.runs, settings.seed)
    except FuzzRunError as exc:
        logger.error("%s", exc)
        logger.error("Replay with: dock-fuzzer replay %s", exc.dump_path)
        return EXIT_RUN_FAILED
    executed = sum(result.executed for result in results)
    logger.info("Completed %d run(s), %d operations executed", len(results), executed)
    return EXIT_OK


def _handle_replay(args: argparse.Namespace, runtime_cfg: RuntimeConfig) -> int:
    paths = build_default_paths(args.data_root)
    settings = _load_settings(paths, runtime_cfg)
    fuzzer = Fuzzer(_fuzzer_config(paths, settings))
    exit_code = EXIT_OK
    for path in args.files:
        try:
            result = fuzzer.replay(path)
        except (OSError, ValueError) as exc:
            logger.error("Cannot replay %s: %s", path, exc)
            exit_code = max(exit_code, EXIT_BAD_INPUT)
            continue
        except FuzzRunError as exc:
            logger.error("Replay of %s failed: %s", path, exc)
            exit_code = EXIT_RUN_FAILED
            continue
        logger.info("Replayed %s: %d executed, %d skipped", path, result.executed, result.skipped)
    return exit_code


def _handle_describe(path: Path) -> int:
    try:
        test = load_test(path)
    except (OSError, ValueError) as exc:
        logger.error("Cannot read %s: %s", path, exc)
        return EXIT_BAD_INPUT
    # Descriptions resolve names against the initial layout, not the state at each step.
    registry = DockRegistry()
    try:
        test.layout.build(registry)
    except DockingError as exc:
        logger.error("Cannot build the initial layout of %s: %s", path, exc)
        return EXIT_BAD_INPUT
    driver = FuzzDriver(registry)
    for index, record in enumerate(test.operations, start=1):
        operation = from_record(driver, record)
        if operation is None:
            print(f"{index}\t<invalid record>")
            continue
        print(f"{index}\t{operation.to_string()}")
    return EXIT_OK


def _load_settings(paths: Paths, runtime_cfg: RuntimeConfig) -> FuzzerSettings:
    settings = FuzzerSettings.load(paths.settings_file)
    runtime_cfg.apply_to_settings(settings)
    return settings


def _fuzzer_config(paths: Paths, settings: FuzzerSettings) -> FuzzerConfig:
    return FuzzerConfig(
        dump_dir=Path(settings.dump_dir) if settings.dump_dir else paths.replays_dir,
        operation_count=settings.operation_count,
        main_window_count=settings.main_window_count,
        dock_widget_count=settings.dock_widget_count,
        teardown_timeout=settings.teardown_timeout,
        enable_allure=settings.enable_allure,
        flake_stats_path=paths.flake_stats_file,
    )


if __name__ == "__main__":
    sys.exit(main())
