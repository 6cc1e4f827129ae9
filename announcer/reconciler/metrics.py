"""Prometheus metrics for the reconciler."""

from prometheus_client import Counter

# Pass metrics
RECONCILER_PASSES = Counter(
    "announcer_reconcile_passes_total",
    "Total number of reconciliation passes",
    ["status"],  # ok, feed_error, parse_error
)

# Entry metrics
RECONCILER_ENTRIES = Counter(
    "announcer_reconcile_entries_total",
    "Total number of feed entries handled",
    ["outcome"],  # created, updated, unchanged, previewed, failed
)

# Sink metrics
SINK_REQUESTS = Counter(
    "announcer_sink_requests_total",
    "Total number of messaging API calls",
    ["method", "status"],
)
