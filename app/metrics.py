from __future__ import annotations

import threading
from collections import Counter, deque
from dataclasses import dataclass, field
from typing import Any, Iterable

from app.validation import FieldError

# p95 is computed over the most recent requests only.
LATENCY_WINDOW = 1000


@dataclass
class MetricsCollector:
    counters: Counter[str] = field(default_factory=Counter)
    latencies_ms: deque[int] = field(default_factory=lambda: deque(maxlen=LATENCY_WINDOW))
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def increment(self, name: str, value: int = 1) -> None:
        with self._lock:
            self.counters[name] += value

    def record_validation(self, ok: bool, errors: Iterable[FieldError], latency_ms: int) -> None:
        with self._lock:
            self.counters["validations_total"] += 1
            if ok:
                self.counters["validations_passed_total"] += 1
            else:
                self.counters["validations_failed_total"] += 1
            for error in errors:
                self.counters[f"field_errors_{error.kind.value}_total"] += 1
            self.latencies_ms.append(latency_ms)

    def snapshot(self) -> dict[str, Any]:
        with self._lock:
            counters = dict(self.counters)
            ordered = sorted(self.latencies_ms)
        p95 = 0
        if ordered:
            idx = int(0.95 * (len(ordered) - 1))
            p95 = ordered[idx]
        errors_by_kind = {
            name[len("field_errors_") : -len("_total")]: count
            for name, count in counters.items()
            if name.startswith("field_errors_")
        }
        return {
            "validations_total": counters.get("validations_total", 0),
            "passed_total": counters.get("validations_passed_total", 0),
            "failed_total": counters.get("validations_failed_total", 0),
            "requests_rejected_total": counters.get("requests_rejected_total", 0),
            "field_errors_by_kind": errors_by_kind,
            "latency_p95_ms": p95,
        }
