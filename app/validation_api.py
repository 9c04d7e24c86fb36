from __future__ import annotations

import json
import logging
import time
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from app.config import Settings
from app.logger import log_validation_event
from app.metrics import MetricsCollector
from app.registry import DEFAULT_REGISTRY, SchemaRegistry, UnknownEntityKindError
from app.sanitizer import sanitize_payload
from app.validation import current_date, validate

logger = logging.getLogger(__name__)


def create_validation_app(
    *,
    settings: Settings | None = None,
    registry: SchemaRegistry = DEFAULT_REGISTRY,
    metrics: MetricsCollector | None = None,
) -> FastAPI:
    active = settings or Settings()
    collector = metrics or MetricsCollector()
    app = FastAPI(title="Procurement Validation API", version="0.1.0")

    def _resolve(kind: str) -> str:
        try:
            return registry.resolve(kind)
        except UnknownEntityKindError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/schemas")
    def schemas() -> dict[str, Any]:
        return {"kinds": list(registry.kinds())}

    @app.get("/schemas/{kind}")
    def schema(kind: str) -> dict[str, Any]:
        return registry.json_schema(_resolve(kind))

    @app.get("/stats")
    def stats() -> dict[str, Any]:
        return collector.snapshot()

    @app.post("/validate/{kind}")
    async def validate_record(kind: str, request: Request) -> JSONResponse:
        name = _resolve(kind)
        raw = await request.body()
        if len(raw) > active.max_payload_bytes:
            collector.increment("requests_rejected_total")
            raise HTTPException(status_code=413, detail="Request body too large")
        try:
            candidate = json.loads(raw) if raw else None
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            collector.increment("requests_rejected_total")
            raise HTTPException(status_code=400, detail="Request body is not valid JSON") from exc

        if active.sanitize_input:
            candidate = sanitize_payload(candidate)

        started = time.perf_counter()
        result = validate(
            name,
            candidate,
            registry=registry,
            today=current_date(active.validation_timezone),
            require_https=active.require_https,
        )
        latency_ms = int((time.perf_counter() - started) * 1000)
        collector.record_validation(result.ok, result.errors, latency_ms)
        log_validation_event(
            logger,
            logging.INFO,
            "validation completed",
            entity_kind=name,
            outcome="valid" if result.ok else "invalid",
            error_count=len(result.errors),
            field_paths=[error.field for error in result.errors],
            latency_ms=latency_ms,
        )

        if not result.ok:
            return JSONResponse(
                status_code=422,
                content={
                    "valid": False,
                    "entity_kind": name,
                    "errors": [error.as_dict() for error in result.errors],
                },
            )
        assert result.value is not None
        return JSONResponse(
            status_code=200,
            content={
                "valid": True,
                "entity_kind": name,
                "value": result.value.model_dump(mode="json", by_alias=True),
            },
        )

    return app
