from __future__ import annotations

import random
import time
from dataclasses import dataclass
from typing import Callable, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    max_delay_seconds: float = 30.0
    jitter_ratio: float = 0.25

    def delay_for_attempt(self, attempt: int, retry_after: float | None = None) -> float:
        if retry_after is not None and retry_after >= 0:
            return min(retry_after, self.max_delay_seconds)
        backoff = min(self.base_delay_seconds * (2 ** (attempt - 1)), self.max_delay_seconds)
        jitter = backoff * self.jitter_ratio * random.random()
        return min(backoff + jitter, self.max_delay_seconds)


class RetryExhaustedError(RuntimeError):
    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


def retry_after_of(exc: Exception) -> float | None:
    """Server-requested delay carried by ``exc``, if any."""
    value = getattr(exc, "retry_after", None)
    if isinstance(value, (int, float)):
        return float(value)
    return None


def run_with_retry(
    operation: Callable[[], T],
    should_retry: Callable[[Exception], bool],
    policy: RetryPolicy | None = None,
    sleep_fn: Callable[[float], None] = time.sleep,
    on_retry: Callable[[int, Exception], None] | None = None,
) -> T:
    active = policy or RetryPolicy()
    last_error: Exception | None = None
    attempt = 0
    for attempt in range(1, active.max_attempts + 1):
        try:
            return operation()
        except Exception as exc:  # noqa: BLE001
            last_error = exc
            if attempt >= active.max_attempts or not should_retry(exc):
                break
            if on_retry is not None:
                on_retry(attempt, exc)
            sleep_fn(active.delay_for_attempt(attempt, retry_after_of(exc)))
    raise RetryExhaustedError(
        f"Operation failed after {attempt} attempt(s)", attempts=attempt
    ) from last_error
