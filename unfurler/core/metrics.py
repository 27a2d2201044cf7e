from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

UNFURL_OUTCOMES = ("ok", "empty", "http_error", "fetch_error", "error")

unfurl_requests_total = Counter(
    "unfurl_requests_total",
    "Unfurl calls by outcome",
    ["outcome"],
)
unfurl_duration_seconds = Histogram(
    "unfurl_duration_seconds",
    "Wall time of one unfurl, fetch included",
    buckets=[0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30],
)

# Export every outcome from the start, at zero
for _outcome in UNFURL_OUTCOMES:
    unfurl_requests_total.labels(outcome=_outcome)


def observe_unfurl(outcome: str, seconds: float) -> None:
    unfurl_requests_total.labels(outcome=outcome).inc()
    unfurl_duration_seconds.observe(seconds)


def get_metrics() -> bytes:
    return generate_latest()


def get_metrics_content_type() -> str:
    return CONTENT_TYPE_LATEST
