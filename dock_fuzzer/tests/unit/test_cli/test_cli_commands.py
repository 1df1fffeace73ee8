from __future__ import annotations

import json
from pathlib import Path

import pytest

from dock_fuzzer.automation.replay import DockWidgetLayout, FuzzTest, InitialLayout, save_test
from dock_fuzzer.cli import EXIT_BAD_INPUT, EXIT_OK, EXIT_RUN_FAILED, main


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    for key in ("DOCK_FUZZER_CONFIG_FILE", "DOCK_FUZZER_ROOT", "DOCK_FUZZER_SEED", "DOCK_FUZZER_DUMP_DIR"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def replay_log(tmp_path: Path) -> Path:
    test = FuzzTest(
        layout=InitialLayout(main_windows=["MainWindow-1"], dock_widgets=[DockWidgetLayout("DockWidget-1", "hidden")]),
        operations=[{"type": 3, "params": {"dockWidgetName": "DockWidget-1"}, "comment": "Showing DockWidget-1-[hidden]"}],
    )
    return save_test(test, tmp_path / "log.json")


def test_fuzz_command_succeeds(tmp_path: Path) -> None:
    data_root = tmp_path / "data"
    code = main(["--data-root", str(data_root), "fuzz", "--runs", "2", "--seed", "3", "--operations", "15", "--no-allure"])
    assert code == EXIT_OK
    assert (data_root / "replays").is_dir()


def test_fuzz_command_rejects_bad_counts(tmp_path: Path) -> None:
    assert main(["--data-root", str(tmp_path / "data"), "fuzz", "--runs", "0"]) == EXIT_BAD_INPUT


def test_replay_command(tmp_path: Path, replay_log: Path) -> None:
    assert main(["--data-root", str(tmp_path / "data"), "replay", str(replay_log)]) == EXIT_OK


def test_replay_command_reports_failures(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text(
        json.dumps({"layout": {"mainWindows": ["MainWindow-1"]}, "operations": [{"type": 1, "params": {"dockWidgetName": "Ghost"}}]}),
        encoding="utf-8",
    )
    garbage = tmp_path / "garbage.json"
    garbage.write_text("nope", encoding="utf-8")
    data_root = tmp_path / "data"
    assert main(["--data-root", str(data_root), "replay", str(garbage)]) == EXIT_BAD_INPUT
    assert main(["--data-root", str(data_root), "replay", str(broken)]) == EXIT_RUN_FAILED
    assert list((data_root / "replays").glob("fuzzer_*.json"))


def test_describe_command(replay_log: Path, capsys) -> None:
    assert main(["describe", str(replay_log)]) == EXIT_OK
    out = capsys.readouterr().out
    assert "type=SHOW_VIA_DOCK_WIDGET_API;description=Showing DockWidget-1-[hidden]" in out


def test_describe_missing_file(tmp_path: Path) -> None:
    assert main(["describe", str(tmp_path / "missing.json")]) == EXIT_BAD_INPUT


def test_commands_survive_malformed_data_files(tmp_path: Path) -> None:
    data_root = tmp_path / "data"
    data_root.mkdir()
    (data_root / "fuzzer_settings.json").write_text('{"runs": "many"}', encoding="utf-8")
    code = main(["--data-root", str(data_root), "fuzz", "--runs", "1", "--seed", "4", "--operations", "5", "--no-allure"])
    assert code == EXIT_OK

    broken = tmp_path / "broken.json"
    broken.write_text(
        json.dumps({"layout": {"mainWindows": ["MainWindow-1"]}, "operations": [{"type": 1, "params": {"dockWidgetName": "Ghost"}}]}),
        encoding="utf-8",
    )
    flake_stats = data_root / "results" / "flake_stats.json"
    flake_stats.parent.mkdir(parents=True, exist_ok=True)
    flake_stats.write_text("[]", encoding="utf-8")
    assert main(["--data-root", str(data_root), "replay", str(broken)]) == EXIT_RUN_FAILED
