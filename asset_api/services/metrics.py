"""
In-process request and ledger call metrics.

Requests are keyed on the route template that served them, so the number
of series is fixed by the routing table and not by what clients send.
Exposed as JSON and in Prometheus text format.
"""

import time
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

METRIC_PREFIX = "asset_api"

# Label used for requests no route matched
UNMATCHED_ROUTE = "unmatched"

KNOWN_METHODS = frozenset(
    {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"}
)


@dataclass
class RouteStats:
    """Counters for one (method, route) pair."""

    requests: int = 0
    errors: int = 0
    seconds: float = 0.0

    @property
    def average_seconds(self) -> float:
        return self.seconds / self.requests if self.requests else 0.0


def escape_label(value: str) -> str:
    """Escape a Prometheus label value (backslash, double quote, newline)."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")


def _sample(name: str, labels: dict[str, Any], value: Any) -> str:
    rendered = ",".join(f'{key}="{escape_label(str(val))}"' for key, val in labels.items())
    return f"{METRIC_PREFIX}_{name}{{{rendered}}} {value}"


class MetricsCollector:
    """
    Collects per-route request counters and per-operation ledger call
    outcomes for the lifetime of the process.
    """

    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], RouteStats] = defaultdict(RouteStats)
        self._status_counts: dict[int, int] = defaultdict(int)
        self._ledger_calls: dict[tuple[str, str, str], int] = defaultdict(int)
        self._start_time: float = time.time()

    def record_request(
        self,
        method: str,
        route: str,
        status_code: int,
        duration: float,
    ) -> None:
        """
        Record a completed request.

        Args:
            method: HTTP method, anything non-standard is counted as OTHER
            route: Route template (e.g., "/assets/{asset_id}")
            status_code: Response status
            duration: Handling time in seconds
        """
        method = method.upper()
        if method not in KNOWN_METHODS:
            method = "OTHER"

        stats = self._routes[(method, route)]
        stats.requests += 1
        stats.seconds += duration
        if status_code >= 400:
            stats.errors += 1
        self._status_counts[status_code] += 1

    def record_ledger_call(self, operation: str, kind: str, outcome: str) -> None:
        """
        Record one contract invocation.

        Args:
            operation: Contract function name (e.g., "ReadAsset")
            kind: "submit" or "evaluate"
            outcome: "success" or the failure's class name
        """
        self._ledger_calls[(operation, kind, outcome)] += 1

    def get_metrics(self) -> dict[str, Any]:
        """Get metrics as a structured dictionary."""
        routes = sorted(self._routes.items())
        total_requests = sum(stats.requests for _, stats in routes)
        total_errors = sum(stats.errors for _, stats in routes)

        return {
            "uptime_seconds": round(time.time() - self._start_time, 2),
            "total_requests": total_requests,
            "total_errors": total_errors,
            "error_rate": round(total_errors / total_requests, 4) if total_requests else 0,
            "requests_by_endpoint": {f"{m} {r}": s.requests for (m, r), s in routes},
            "errors_by_endpoint": {f"{m} {r}": s.errors for (m, r), s in routes if s.errors},
            "status_code_counts": {str(k): v for k, v in sorted(self._status_counts.items())},
            "avg_response_time_ms": {
                f"{m} {r}": round(s.average_seconds * 1000, 2) for (m, r), s in routes
            },
            "ledger_calls": [
                {"operation": op, "kind": kind, "outcome": outcome, "count": count}
                for (op, kind, outcome), count in sorted(self._ledger_calls.items())
            ],
        }

    def to_prometheus(self) -> str:
        """
        Export metrics in Prometheus text exposition format.
        See: https://prometheus.io/docs/instrumenting/exposition_formats/
        """
        routes = sorted(self._routes.items())
        families: list[tuple[str, str, str, list[str]]] = [
            (
                "uptime_seconds", "gauge", "Time since service start in seconds",
                [f"{METRIC_PREFIX}_uptime_seconds {time.time() - self._start_time:.2f}"],
            ),
            (
                "http_requests_total", "counter", "Total HTTP requests",
                [
                    _sample("http_requests_total", {"method": m, "path": r}, s.requests)
                    for (m, r), s in routes
                ],
            ),
            (
                "http_errors_total", "counter", "Total HTTP errors (4xx/5xx)",
                [
                    _sample("http_errors_total", {"method": m, "path": r}, s.errors)
                    for (m, r), s in routes
                    if s.errors
                ],
            ),
            (
                "http_status_total", "counter", "HTTP responses by status code",
                [
                    _sample("http_status_total", {"code": code}, count)
                    for code, count in sorted(self._status_counts.items())
                ],
            ),
            (
                "http_response_time_seconds", "gauge", "Average response time in seconds",
                [
                    _sample("http_response_time_seconds", {"method": m, "path": r}, f"{s.average_seconds:.6f}")
                    for (m, r), s in routes
                ],
            ),
            (
                "ledger_calls_total", "counter", "Contract invocations by outcome",
                [
                    _sample("ledger_calls_total", {"operation": op, "kind": kind, "outcome": outcome}, count)
                    for (op, kind, outcome), count in sorted(self._ledger_calls.items())
                ],
            ),
        ]

        lines: list[str] = []
        for name, metric_type, help_text, samples in families:
            lines.append(f"# HELP {METRIC_PREFIX}_{name} {help_text}")
            lines.append(f"# TYPE {METRIC_PREFIX}_{name} {metric_type}")
            lines.extend(samples)
            lines.append("")
        return "\n".join(lines) + "\n"


# Global singleton
_metrics_collector: MetricsCollector | None = None


def get_metrics_collector() -> MetricsCollector:
    """Get or create the global metrics collector."""
    global _metrics_collector
    if _metrics_collector is None:
        _metrics_collector = MetricsCollector()
    return _metrics_collector


def route_template(request: Request) -> str:
    """The path template of the route that handled a request, or UNMATCHED_ROUTE."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or UNMATCHED_ROUTE


class MetricsMiddleware(BaseHTTPMiddleware):
    """Times every request and records it under its route template."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start

        # The router fills in scope["route"] while handling the request
        route = route_template(request)
        if route.startswith("/metrics"):
            return response

        get_metrics_collector().record_request(
            method=request.method,
            route=route,
            status_code=response.status_code,
            duration=duration,
        )
        return response
