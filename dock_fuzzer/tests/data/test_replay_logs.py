import json

import pytest

from dock_fuzzer.app.environment import default_data_root
from dock_fuzzer.automation.operations import OperationType

REPLAYS_ROOT = default_data_root() / "replays"


def _gather_records():
    records = []
    if not REPLAYS_ROOT.exists():
        return records
    for json_path in REPLAYS_ROOT.rglob("*.json"):
        try:
            data = json.loads(json_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            continue
        if not isinstance(data, dict):
            continue
        for index, record in enumerate(data.get("operations") or []):
            if isinstance(record, dict):
                records.append({"path": str(json_path), "index": index, **record})
    return records


def test_dumped_records_have_known_types():
    records = _gather_records()
    if not records:
        pytest.skip("No dumped replay logs found to evaluate")
    known = {int(kind) for kind in OperationType.dispatchable()}
    bad = [record for record in records if record.get("type") not in known]
    assert not bad, f"Records with unknown types: {bad[:5]}"


def test_dumped_records_carry_params():
    records = _gather_records()
    if not records:
        pytest.skip("No dumped replay logs found to evaluate")
    assert all(isinstance(record.get("params"), dict) and record["params"] for record in records)
