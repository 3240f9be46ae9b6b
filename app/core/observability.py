from prometheus_client import Counter, Histogram

REQUEST_COUNT = Counter(
    "healthcontent_api_requests_total",
    "Total API requests",
    ["method", "path", "status"],
)

REQUEST_LATENCY = Histogram(
    "healthcontent_api_request_latency_seconds",
    "API request latency",
    ["method", "path"],
)

UNRECOGNIZED_STATUS_COUNT = Counter(
    "healthcontent_unrecognized_status_total",
    "Raw content status values that did not resolve to a canonical status",
)

STATUS_TRANSITION_COUNT = Counter(
    "healthcontent_status_transitions_total",
    "Moderation status transitions applied to content",
    ["from_status", "to_status"],
)
