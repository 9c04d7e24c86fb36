from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from app.config import Settings, load_dotenv
from app.logger import configure_logging
from app.registry import DEFAULT_REGISTRY, UnknownEntityKindError
from app.sanitizer import sanitize_payload
from app.schema_export import export_json_schemas, find_schema_drift
from app.submission import BackendClient, SubmissionError
from app.validation import current_date, validate

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_USAGE = 2


def _read_payload(path: str | None) -> Any:
    if path is None or path == "-":
        return json.loads(sys.stdin.read())
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def run_validate(settings: Settings, kind: str, path: str | None) -> int:
    candidate = _read_payload(path)
    if settings.sanitize_input:
        candidate = sanitize_payload(candidate)
    result = validate(
        kind,
        candidate,
        today=current_date(settings.validation_timezone),
        require_https=settings.require_https,
    )
    if not result.ok:
        _emit(
            {
                "valid": False,
                "entity_kind": result.entity_kind,
                "errors": [error.as_dict() for error in result.errors],
            }
        )
        return EXIT_INVALID
    assert result.value is not None
    _emit(
        {
            "valid": True,
            "entity_kind": result.entity_kind,
            "value": result.value.model_dump(mode="json", by_alias=True),
        }
    )
    return EXIT_OK


def run_schemas(settings: Settings, action: str, directory: str | None) -> int:
    schema_dir = directory or settings.schema_dir
    if action == "export":
        written = export_json_schemas(schema_dir)
        _emit({"written": [str(path) for path in written]})
        return EXIT_OK
    drifted = find_schema_drift(schema_dir)
    _emit({"schema_dir": schema_dir, "drifted": drifted})
    if drifted:
        logger.warning("Schema drift detected for: %s", ", ".join(drifted))
        return EXIT_INVALID
    return EXIT_OK


def run_submit(settings: Settings, kind: str, path: str | None) -> int:
    client = BackendClient.from_settings(settings)
    result = client.submit(kind, _read_payload(path))
    _emit(
        {
            "submitted": result.submitted,
            "entity_kind": result.entity_kind,
            "status_code": result.status_code,
            "errors": [error.as_dict() for error in result.errors],
            "response": result.response,
        }
    )
    return EXIT_OK if result.submitted else EXIT_INVALID


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Procurement record validation")
    parser.add_argument("--env-file", default=".env", help="Seed environment from this file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    kinds = list(DEFAULT_REGISTRY.kinds())

    check = subparsers.add_parser("validate", help="Validate a JSON record")
    check.add_argument("kind", choices=kinds)
    check.add_argument("file", nargs="?", help="JSON file, '-' or omitted for stdin")

    schemas = subparsers.add_parser("schemas", help="Export or check JSON Schemas")
    schemas.add_argument("action", choices=["export", "check"])
    schemas.add_argument("directory", nargs="?", help="Defaults to SCHEMA_DIR")

    submit = subparsers.add_parser("submit", help="Validate a record and post it to the backend")
    submit.add_argument("kind", choices=kinds)
    submit.add_argument("file", nargs="?")

    serve = subparsers.add_parser("serve", help="Run the validation HTTP API")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    load_dotenv(args.env_file)
    try:
        settings = Settings.from_env()
    except ValueError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return EXIT_USAGE
    configure_logging(settings.log_level)

    try:
        if args.command == "validate":
            return run_validate(settings, args.kind, args.file)
        if args.command == "schemas":
            return run_schemas(settings, args.action, args.directory)
        if args.command == "submit":
            return run_submit(settings, args.kind, args.file)
        if args.command == "serve":
            from app.api_main import main as serve

            serve(host=args.host, port=args.port)
            return EXIT_OK
    except json.JSONDecodeError as exc:
        print(f"Input is not valid JSON: {exc}", file=sys.stderr)
        return EXIT_USAGE
    except UnknownEntityKindError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_USAGE
    except (SubmissionError, ValueError) as exc:
        logger.error("Command %s failed: %s", args.command, exc)
        return EXIT_INVALID
    return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
