"""Prometheus metrics for monitoring rule loading and schedule outcomes"""

from prometheus_client import Counter, Histogram

# Rule loading metrics
rules_resolved_counter = Counter(
    "revolving_rules_resolved_total",
    "Rule sets resolved per widget session",
    ["source"],  # per_tier | legacy
)

tier_fetch_failures_counter = Counter(
    "revolving_tier_fetch_failures_total",
    "Failed per-tier rules fetches",
)

legacy_fetch_failures_counter = Counter(
    "revolving_legacy_fetch_failures_total",
    "Failed legacy rules fetches",
)

rules_fetch_latency_histogram = Histogram(
    "revolving_rules_fetch_latency_seconds",
    "Rules file response time",
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

# Schedule metrics
schedule_counter = Counter(
    "revolving_schedule_total",
    "Schedule requests by outcome",
    ["outcome"],  # ok | empty_cart | ceiling_exceeded | unavailable
)

schedule_tier_counter = Counter(
    "revolving_schedule_tier_total",
    "Schedules computed per selected tier",
    ["tier"],
)


def record_schedule(outcome: str, tier_id: str | None = None) -> None:
    """Record schedule outcome and, when a tier matched, which one"""
    schedule_counter.labels(outcome=outcome).inc()

    if tier_id is not None:
        schedule_tier_counter.labels(tier=tier_id or "unknown").inc()
