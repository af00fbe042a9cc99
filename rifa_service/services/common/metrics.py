"""Prometheus metrics of the Rifa Service.

HTTP (RED) metrics, labelled by `method` and `path`:

    rifa_http_requests_total
        Requests received per endpoint.

    rifa_http_exceptions_total
        Requests ending in an exception, including rejected input
        (:exc:`rifa_service.exceptions.InvalidInput`) and schema errors. Routing
        errors (*404 Not Found*) never reach an endpoint and are not counted.
        Failed transactions are reported through the response and are not counted
        either, see `rifa_ledger_actions_total`.

    rifa_http_requests_latency_seconds
        Time spent processing a request, including waiting for its transaction
        to be mined.

Ledger metrics, labelled by `action` (see :class:`rifa_service.orchestration.ActionKind`):

    rifa_ledger_actions_total
        Submitted actions per `outcome`: `confirmed`, or the failure code of the
        :exc:`rifa_service.exceptions.TransactionFailed` that ended them.

    rifa_ledger_confirmation_seconds
        Time from submission until the action was confirmed or failed.
"""
import timeit

from prometheus_client import Counter, Histogram

HTTP_LABELS = ["method", "path"]

HTTP_REQUESTS_TOTAL = Counter(
    "rifa_http_requests_total", "HTTP requests received.", labelnames=HTTP_LABELS
)
HTTP_EXCEPTIONS_TOTAL = Counter(
    "rifa_http_exceptions_total", "HTTP requests ending in an exception.", labelnames=HTTP_LABELS
)
HTTP_REQUESTS_LATENCY = Histogram(
    "rifa_http_requests_latency_seconds",
    "Duration of HTTP request processing.",
    labelnames=HTTP_LABELS,
)

LEDGER_ACTIONS_TOTAL = Counter(
    "rifa_ledger_actions_total",
    "Ledger actions submitted, by outcome.",
    labelnames=["action", "outcome"],
)
LEDGER_CONFIRMATION_LATENCY = Histogram(
    "rifa_ledger_confirmation_seconds",
    "Seconds from submitting an action until it was confirmed or failed.",
    labelnames=["action"],
    buckets=(0.5, 1, 2, 5, 10, 30, 60, 120, 300),
)


class REDMetricsTracker:
    """Track rate, errors and duration of requests to the endpoint at `path`."""

    def __init__(self, method: str, path: str):
        self.method, self.path = method, path
        self.start = None

    def __enter__(self):
        HTTP_REQUESTS_TOTAL.labels(self.method, self.path).inc()
        self.start = timeit.default_timer()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_val:
            HTTP_EXCEPTIONS_TOTAL.labels(self.method, self.path).inc()
        elapsed = max(timeit.default_timer() - self.start, 0)
        HTTP_REQUESTS_LATENCY.labels(self.method, self.path).observe(elapsed)


def track_ledger_action(action: str, outcome: str, started: float):
    """Record the `outcome` of an `action` submitted at `started` (a :mod:`timeit` timestamp)."""
    LEDGER_ACTIONS_TOTAL.labels(action, outcome).inc()
    elapsed = max(timeit.default_timer() - started, 0)
    LEDGER_CONFIRMATION_LATENCY.labels(action).observe(elapsed)
