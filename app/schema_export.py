from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from app.registry import DEFAULT_REGISTRY, SchemaRegistry

SCHEMA_SUFFIX = ".schema.json"


def schema_path(schema_dir: str | Path, kind: str) -> Path:
    return Path(schema_dir) / f"{kind}{SCHEMA_SUFFIX}"


def render_schema(schema: dict[str, Any]) -> str:
    return json.dumps(schema, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def export_json_schemas(
    out_dir: str | Path,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
) -> list[Path]:
    target = Path(out_dir)
    target.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for kind in registry.kinds():
        path = schema_path(target, kind)
        path.write_text(render_schema(registry.json_schema(kind)), encoding="utf-8")
        written.append(path)
    return written


def find_schema_drift(
    schema_dir: str | Path,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
) -> list[str]:
    """Kinds whose committed schema file is missing or differs from the models."""
    drifted: list[str] = []
    for kind in registry.kinds():
        path = schema_path(schema_dir, kind)
        if not path.exists():
            drifted.append(kind)
            continue
        committed = json.loads(path.read_text(encoding="utf-8"))
        if committed != registry.json_schema(kind):
            drifted.append(kind)
    return drifted
