from __future__ import annotations

import time
from threading import Lock

from fastapi import FastAPI, Request

DECISIONS_METRIC = "underwriting_decisions_total"
INVALID_INPUT_METRIC = "underwriting_invalid_input_total"
PERSIST_FAILURES_METRIC = "underwriting_record_persist_failures_total"


class _MetricsStore:
    def __init__(self) -> None:
        self._lock = Lock()
        self._request_counts: dict[tuple[str, str, str], int] = {}
        self._request_seconds: dict[tuple[str, str], float] = {}
        self._counters: dict[tuple[str, str], float] = {}

    def observe_request(
        self, *, method: str, path: str, status: str, duration_seconds: float
    ) -> None:
        with self._lock:
            key = (method, path, status)
            self._request_counts[key] = self._request_counts.get(key, 0) + 1
            timing_key = (method, path)
            self._request_seconds[timing_key] = (
                self._request_seconds.get(timing_key, 0.0) + duration_seconds
            )

    def increment(self, name: str, labels: str = "", value: float = 1.0) -> None:
        with self._lock:
            key = (name, labels)
            self._counters[key] = self._counters.get(key, 0.0) + value

    def value(self, name: str, labels: str = "") -> float:
        with self._lock:
            return self._counters.get((name, labels), 0.0)

    def render_prometheus_text(self) -> str:
        lines: list[str] = [
            "# HELP http_requests_total Total HTTP requests",
            "# TYPE http_requests_total counter",
        ]

        with self._lock:
            for (method, path, status), count in sorted(self._request_counts.items()):
                lines.append(
                    "http_requests_total{"
                    f'method="{method}",path="{path}",status="{status}"'
                    f"}} {count}"
                )

            lines.append(
                "# HELP http_request_duration_seconds_sum "
                "Cumulative HTTP request duration in seconds"
            )
            lines.append("# TYPE http_request_duration_seconds_sum counter")
            for (method, path), total in sorted(self._request_seconds.items()):
                lines.append(
                    "http_request_duration_seconds_sum{"
                    f'method="{method}",path="{path}"'
                    f"}} {total}"
                )

            for (name, labels), value in sorted(self._counters.items()):
                suffix = f"{{{labels}}}" if labels else ""
                lines.append(f"{name}{suffix} {value}")

        lines.append("")
        return "\n".join(lines)

    def clear(self) -> None:
        with self._lock:
            self._request_counts.clear()
            self._request_seconds.clear()
            self._counters.clear()


_metrics_store = _MetricsStore()


def render_metrics_text() -> str:
    return _metrics_store.render_prometheus_text()


def clear_metrics() -> None:
    _metrics_store.clear()


def increment_metric(name: str, labels: str = "", value: float = 1.0) -> None:
    _metrics_store.increment(name, labels, value)


def metric_value(name: str, labels: str = "") -> float:
    return _metrics_store.value(name, labels)


def install_metrics_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def metrics_middleware(request: Request, call_next):
        started_at = time.perf_counter()
        response = await call_next(request)

        _metrics_store.observe_request(
            method=request.method,
            path=request.url.path,
            status=str(response.status_code),
            duration_seconds=time.perf_counter() - started_at,
        )
        return response
