from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

ENVIRONMENTS = ("development", "test", "staging", "production")


def _parse_bool(value: str | None, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero")
    return value


def _parse_positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero")
    return value


def _optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return value.strip()


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    log_level: str = "INFO"
    validation_timezone: str = "Asia/Tokyo"
    sanitize_input: bool = True
    max_payload_bytes: int = 5000
    backend_api_base_url: str | None = None
    backend_api_token: str | None = None
    request_timeout_seconds: float = 30.0
    schema_dir: str = "contracts"

    @property
    def require_https(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        environment = os.getenv("ENVIRONMENT", "development").strip().lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(f"ENVIRONMENT must be one of: {', '.join(ENVIRONMENTS)}")

        timezone_name = os.getenv("VALIDATION_TIMEZONE", "Asia/Tokyo").strip()
        try:
            ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"VALIDATION_TIMEZONE is not a known time zone: {timezone_name}") from exc

        base_url = _optional("BACKEND_API_BASE_URL")
        if base_url is not None:
            if not base_url.startswith(("http://", "https://")):
                raise ValueError("BACKEND_API_BASE_URL must start with http:// or https://")
            if environment == "production" and not base_url.startswith("https://"):
                raise ValueError("BACKEND_API_BASE_URL must use https in production")
            base_url = base_url.rstrip("/")

        return cls(
            environment=environment,
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
            validation_timezone=timezone_name,
            sanitize_input=_parse_bool(os.getenv("SANITIZE_INPUT"), default=True),
            max_payload_bytes=_parse_positive_int("MAX_PAYLOAD_BYTES", 5000),
            backend_api_base_url=base_url,
            backend_api_token=_optional("BACKEND_API_TOKEN"),
            request_timeout_seconds=_parse_positive_float("REQUEST_TIMEOUT_SECONDS", 30.0),
            schema_dir=os.getenv("SCHEMA_DIR", "contracts").strip() or "contracts",
        )


def load_dotenv(path: str | Path = ".env") -> None:
    env_path = Path(path)
    if not env_path.exists():
        return
    for line in env_path.read_text(encoding="utf-8").splitlines():
        entry = line.strip()
        if not entry or entry.startswith("#") or "=" not in entry:
            continue
        key, value = entry.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        os.environ.setdefault(key, value)
