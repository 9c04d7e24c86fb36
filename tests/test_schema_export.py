from __future__ import annotations

import json
from pathlib import Path

from app.registry import DEFAULT_REGISTRY
from app.schema_export import export_json_schemas, find_schema_drift, schema_path


def test_export_writes_one_file_per_kind(tmp_path: Path) -> None:
    written = export_json_schemas(tmp_path / "contracts")

    assert [path.name for path in written] == [
        f"{kind}.schema.json" for kind in DEFAULT_REGISTRY.kinds()
    ]
    vendor = json.loads(schema_path(tmp_path / "contracts", "Vendor").read_text(encoding="utf-8"))
    assert "taxId" in vendor["properties"]
    assert find_schema_drift(tmp_path / "contracts") == []


def test_drift_detects_changed_and_missing_files(tmp_path: Path) -> None:
    export_json_schemas(tmp_path)

    changed = schema_path(tmp_path, "Warehouse")
    schema = json.loads(changed.read_text(encoding="utf-8"))
    schema["required"].remove("code")
    changed.write_text(json.dumps(schema), encoding="utf-8")
    schema_path(tmp_path, "UserProfile").unlink()

    assert find_schema_drift(tmp_path) == ["Warehouse", "UserProfile"]


def test_key_order_is_not_drift(tmp_path: Path) -> None:
    export_json_schemas(tmp_path)
    path = schema_path(tmp_path, "LoginCredentials")
    path.write_text(json.dumps(json.loads(path.read_text(encoding="utf-8"))), encoding="utf-8")
    assert find_schema_drift(tmp_path) == []
