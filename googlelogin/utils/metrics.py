"""Prometheus metrics for observability."""

import time
from collections import defaultdict
from dataclasses import dataclass, field

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


def _label_key(names: tuple[str, ...], labels: dict[str, str]) -> tuple:
    return tuple(labels.get(n, "") for n in names)


def _label_str(names: tuple[str, ...], values: tuple) -> str:
    return ",".join(f'{n}="{v}"' for n, v in zip(names, values))


@dataclass
class Counter:
    """Monotonic counter."""

    name: str
    help: str
    labels: tuple[str, ...] = ()
    _values: dict[tuple, float] = field(default_factory=lambda: defaultdict(float))

    def inc(self, amount: float = 1.0, **labels: str) -> None:
        self._values[_label_key(self.labels, labels)] += amount

    def get(self, **labels: str) -> float:
        return self._values[_label_key(self.labels, labels)]

    def render(self) -> list[str]:
        lines = [f"# HELP {self.name} {self.help}", f"# TYPE {self.name} counter"]
        for values, value in self._values.items():
            if self.labels:
                lines.append(f"{self.name}{{{_label_str(self.labels, values)}}} {value}")
            else:
                lines.append(f"{self.name} {value}")
        return lines


@dataclass
class Gauge:
    """Value that can go up and down."""

    name: str
    help: str
    labels: tuple[str, ...] = ()
    _values: dict[tuple, float] = field(default_factory=lambda: defaultdict(float))

    def inc(self, amount: float = 1.0, **labels: str) -> None:
        self._values[_label_key(self.labels, labels)] += amount

    def dec(self, amount: float = 1.0, **labels: str) -> None:
        self._values[_label_key(self.labels, labels)] -= amount

    def get(self, **labels: str) -> float:
        return self._values[_label_key(self.labels, labels)]

    def render(self) -> list[str]:
        lines = [f"# HELP {self.name} {self.help}", f"# TYPE {self.name} gauge"]
        for values, value in self._values.items():
            if self.labels:
                lines.append(f"{self.name}{{{_label_str(self.labels, values)}}} {value}")
            else:
                lines.append(f"{self.name} {value}")
        return lines


@dataclass
class Histogram:
    """Histogram with fixed buckets."""

    name: str
    help: str
    labels: tuple[str, ...] = ()
    buckets: tuple[float, ...] = (0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
    _counts: dict[tuple, dict[float, int]] = field(
        default_factory=lambda: defaultdict(lambda: defaultdict(int))
    )
    _sums: dict[tuple, float] = field(default_factory=lambda: defaultdict(float))
    _totals: dict[tuple, int] = field(default_factory=lambda: defaultdict(int))

    def observe(self, value: float, **labels: str) -> None:
        key = _label_key(self.labels, labels)
        self._sums[key] += value
        self._totals[key] += 1
        # Stored per bucket, made cumulative when rendered
        for bucket in self.buckets:
            if value <= bucket:
                self._counts[key][bucket] += 1
                break

    def render(self) -> list[str]:
        lines = [f"# HELP {self.name} {self.help}", f"# TYPE {self.name} histogram"]
        for key in self._sums:
            prefix = f"{{{_label_str(self.labels, key)}," if self.labels else "{"
            bare = f"{{{_label_str(self.labels, key)}}}" if self.labels else ""
            cumulative = 0
            for bucket in self.buckets:
                cumulative += self._counts[key].get(bucket, 0)
                lines.append(f'{self.name}_bucket{prefix}le="{bucket}"}} {cumulative}')
            lines.append(f'{self.name}_bucket{prefix}le="+Inf"}} {self._totals[key]}')
            lines.append(f"{self.name}_sum{bare} {self._sums[key]}")
            lines.append(f"{self.name}_count{bare} {self._totals[key]}")
        return lines


class MetricsRegistry:
    """Registry for all metrics."""

    def __init__(self) -> None:
        # HTTP metrics
        self.http_requests_total = Counter(
            name="http_requests_total",
            help="Total number of HTTP requests",
            labels=("method", "path", "status"),
        )
        self.http_request_duration_seconds = Histogram(
            name="http_request_duration_seconds",
            help="HTTP request duration in seconds",
            labels=("method", "path"),
        )
        self.http_requests_in_progress = Gauge(
            name="http_requests_in_progress",
            help="Number of HTTP requests in progress",
            labels=("method",),
        )

        # OAuth flow
        self.oauth_logins_total = Counter(
            name="oauth_logins_total",
            help="Google OAuth callbacks by outcome",
            labels=("result",),
        )
        self.oauth_logouts_total = Counter(
            name="oauth_logouts_total",
            help="Logouts by token revocation outcome",
            labels=("revoked",),
        )

        # Google API
        self.google_api_requests_total = Counter(
            name="google_api_requests_total",
            help="Requests made to Google APIs",
            labels=("endpoint", "status"),
        )
        self.google_api_duration_seconds = Histogram(
            name="google_api_duration_seconds",
            help="Google API request duration in seconds",
            labels=("endpoint",),
        )

    def format_prometheus(self) -> str:
        """Format all metrics in Prometheus exposition format."""
        lines: list[str] = []
        for metric in self.__dict__.values():
            if isinstance(metric, (Counter, Gauge, Histogram)):
                lines.extend(metric.render())
        return "\n".join(lines) + "\n"


# Global metrics registry
metrics = MetricsRegistry()


def _route_label(request: Request) -> str:
    """Label a request by its route template so series stay bounded."""
    route = request.scope.get("route")
    if route is not None and getattr(route, "path", None):
        return route.path
    # Mounts (static files) set an endpoint but no route
    if request.scope.get("endpoint") is not None and request.scope.get("root_path"):
        return request.scope["root_path"]
    return "unmatched"


class MetricsMiddleware(BaseHTTPMiddleware):
    """Middleware to collect HTTP metrics."""

    async def dispatch(self, request: Request, call_next) -> Response:
        method = request.method

        metrics.http_requests_in_progress.inc(method=method)
        start_time = time.monotonic()
        status = "500"
        try:
            response = await call_next(request)
            status = str(response.status_code)
        finally:
            duration = time.monotonic() - start_time
            # Routing fills the scope during call_next
            path = _route_label(request)
            metrics.http_requests_total.inc(method=method, path=path, status=status)
            metrics.http_request_duration_seconds.observe(duration, method=method, path=path)
            metrics.http_requests_in_progress.dec(method=method)

        return response
