from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Mapping

import requests
from pydantic import BaseModel, SecretStr

from app.config import Settings
from app.logger import log_validation_event
from app.registry import DEFAULT_REGISTRY, EntityKind, SchemaRegistry
from app.retry_utils import RetryExhaustedError, RetryPolicy, run_with_retry
from app.sanitizer import sanitize_payload
from app.validation import ROOT_FIELD, ErrorKind, FieldError, current_date, validate
from schemas.vendor_schema import VendorStatus

logger = logging.getLogger(__name__)

ENDPOINTS: Mapping[str, str] = {
    EntityKind.VENDOR.value: "/api/v1/vendors",
    EntityKind.RECEIVING_RECORD.value: "/api/v1/receiving",
    EntityKind.INVOICE_MATCH_CRITERIA.value: "/api/v1/invoice-matching",
    EntityKind.LOGIN_CREDENTIALS.value: "/api/v1/auth/login",
    EntityKind.WAREHOUSE.value: "/api/v1/warehouses",
    EntityKind.USER_PROFILE.value: "/api/v1/users/profile",
}

BACKEND_REJECTED_CODE = "backend_rejected"


class SubmissionError(RuntimeError):
    pass


class RetryableResponseError(RuntimeError):
    def __init__(self, status_code: int, retry_after: float | None = None) -> None:
        super().__init__(f"Backend responded with retryable status {status_code}")
        self.status_code = status_code
        self.retry_after = retry_after


@dataclass(frozen=True)
class SubmissionResult:
    entity_kind: str
    submitted: bool
    status_code: int | None = None
    errors: tuple[FieldError, ...] = field(default_factory=tuple)
    response: dict[str, Any] | None = None

    @property
    def rejected_by_backend(self) -> bool:
        return any(error.code == BACKEND_REJECTED_CODE for error in self.errors)


def _vendor_wire(payload: dict[str, Any]) -> dict[str, Any]:
    # The vendor create endpoint takes an is_active flag and has no tax id field.
    payload["is_active"] = payload.pop("status") == VendorStatus.ACTIVE.value
    payload.pop("tax_id", None)
    return payload


def _receiving_wire(payload: dict[str, Any]) -> dict[str, Any]:
    payload["date"] = payload.pop("received_date")
    return payload


WIRE_ADAPTERS: Mapping[str, Callable[[dict[str, Any]], dict[str, Any]]] = {
    EntityKind.VENDOR.value: _vendor_wire,
    EntityKind.RECEIVING_RECORD.value: _receiving_wire,
}


def wire_payload(value: BaseModel) -> dict[str, Any]:
    """JSON-ready body for the backend.

    Keys are snake_case field names, unset optional fields are omitted and
    secrets are revealed.
    """
    payload = value.model_dump(mode="json", exclude_none=True)
    for name in type(value).model_fields:
        attribute = getattr(value, name)
        if isinstance(attribute, SecretStr):
            payload[name] = attribute.get_secret_value()
    adapter = WIRE_ADAPTERS.get(type(value).__name__)
    return adapter(payload) if adapter is not None else payload


def _parse_retry_after(response: requests.Response) -> float | None:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def _is_retryable(exc: Exception) -> bool:
    return isinstance(exc, (RetryableResponseError, requests.ConnectionError, requests.Timeout))


def _backend_field_errors(body: Any) -> tuple[FieldError, ...]:
    """Read NestJS-style ``{"details": {field: [messages]}}`` rejection bodies."""
    if not isinstance(body, dict):
        return ()
    details = body.get("details")
    errors: list[FieldError] = []
    if isinstance(details, dict):
        for field_name, messages in details.items():
            if isinstance(messages, str):
                messages = [messages]
            for message in messages or []:
                errors.append(
                    FieldError(
                        field=str(field_name),
                        kind=ErrorKind.FORMAT_MISMATCH,
                        message=str(message),
                        code=BACKEND_REJECTED_CODE,
                    )
                )
    if not errors:
        message = body.get("message") or "Backend rejected the record"
        if isinstance(message, list):
            message = "; ".join(str(item) for item in message)
        errors.append(
            FieldError(
                field=ROOT_FIELD,
                kind=ErrorKind.FORMAT_MISMATCH,
                message=str(message),
                code=BACKEND_REJECTED_CODE,
            )
        )
    return tuple(errors)


def _json_or_none(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class BackendClient:
    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        session: requests.Session | None = None,
        timeout_seconds: float = 30.0,
        retry_policy: RetryPolicy | None = None,
        sleep_fn: Callable[[float], None] = time.sleep,
        registry: SchemaRegistry = DEFAULT_REGISTRY,
        sanitize: bool = True,
        require_https: bool = False,
        timezone_name: str | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._session = session or requests.Session()
        self._timeout = timeout_seconds
        self._retry_policy = retry_policy or RetryPolicy()
        self._sleep_fn = sleep_fn
        self._registry = registry
        self._sanitize = sanitize
        self._require_https = require_https
        self._timezone_name = timezone_name

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "BackendClient":
        if not settings.backend_api_base_url:
            raise ValueError("BACKEND_API_BASE_URL is required to submit records")
        return cls(
            settings.backend_api_base_url,
            token=settings.backend_api_token,
            timeout_seconds=settings.request_timeout_seconds,
            sanitize=settings.sanitize_input,
            require_https=settings.require_https,
            timezone_name=settings.validation_timezone,
            **kwargs,
        )

    def endpoint_for(self, kind: str | EntityKind) -> str:
        name = self._registry.resolve(kind)
        try:
            return f"{self._base_url}{ENDPOINTS[name]}"
        except KeyError as exc:
            raise SubmissionError(f"No backend endpoint configured for {name}") from exc

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def submit(
        self,
        kind: str | EntityKind,
        candidate: Any,
        *,
        today: date | None = None,
    ) -> SubmissionResult:
        """Validate ``candidate`` and POST it to the backend only if it passes."""
        url = self.endpoint_for(kind)
        if self._sanitize:
            candidate = sanitize_payload(candidate)
        result = validate(
            kind,
            candidate,
            registry=self._registry,
            today=today if today is not None else current_date(self._timezone_name),
            require_https=self._require_https,
        )
        if not result.ok:
            log_validation_event(
                logger,
                logging.INFO,
                "submission blocked by validation",
                entity_kind=result.entity_kind,
                outcome="invalid",
                error_count=len(result.errors),
                field_paths=[error.field for error in result.errors],
            )
            return SubmissionResult(entity_kind=result.entity_kind, submitted=False, errors=result.errors)

        assert result.value is not None
        body = wire_payload(result.value)

        def _post() -> requests.Response:
            response = self._session.post(url, json=body, headers=self._headers(), timeout=self._timeout)
            if response.status_code == 429 or response.status_code >= 500:
                raise RetryableResponseError(response.status_code, _parse_retry_after(response))
            return response

        def _on_retry(attempt: int, exc: Exception) -> None:
            logger.warning(
                "retrying submission",
                extra={"entity_kind": result.entity_kind, "attempt": attempt},
                exc_info=exc,
            )

        started = time.perf_counter()
        try:
            response = run_with_retry(
                _post,
                should_retry=_is_retryable,
                policy=self._retry_policy,
                sleep_fn=self._sleep_fn,
                on_retry=_on_retry,
            )
        except RetryExhaustedError as exc:
            raise SubmissionError(f"Submitting {result.entity_kind} to {url} failed") from exc
        latency_ms = int((time.perf_counter() - started) * 1000)

        if response.status_code in {400, 422}:
            errors = _backend_field_errors(_json_or_none(response))
            # Client-side rules accepted something the backend refuses.
            log_validation_event(
                logger,
                logging.WARNING,
                "backend rejected a record that passed client validation",
                entity_kind=result.entity_kind,
                outcome="backend_rejected",
                error_count=len(errors),
                field_paths=[error.field for error in errors],
                latency_ms=latency_ms,
                status_code=response.status_code,
            )
            return SubmissionResult(
                entity_kind=result.entity_kind,
                submitted=False,
                status_code=response.status_code,
                errors=errors,
            )
        if response.status_code >= 400:
            raise SubmissionError(
                f"Backend refused {result.entity_kind} with status {response.status_code}"
            )

        log_validation_event(
            logger,
            logging.INFO,
            "record submitted",
            entity_kind=result.entity_kind,
            outcome="submitted",
            latency_ms=latency_ms,
            status_code=response.status_code,
        )
        payload = _json_or_none(response)
        return SubmissionResult(
            entity_kind=result.entity_kind,
            submitted=True,
            status_code=response.status_code,
            response=payload if isinstance(payload, dict) else None,
        )
