"""Prometheus metrics definitions for Vitrine."""

from prometheus_client import Counter, Histogram

# Business metrics
items_created = Counter(
    "vitrine_items_created_total",
    "Total gallery items created",
    ["type"],  # image, text, link, pdf
)

validation_failures = Counter(
    "vitrine_validation_failures_total",
    "Creation inputs rejected before reaching the store",
    ["kind"],  # empty_content, invalid_url, invalid_type
)

store_operation_duration = Histogram(
    "vitrine_store_operation_duration_seconds",
    "Store round trip duration",
    ["operation"],
)

# Error tracking
store_failures = Counter(
    "vitrine_store_failures_total",
    "Total failed store round trips by operation",
    ["operation", "error_type"],
)

login_attempts = Counter(
    "vitrine_login_attempts_total",
    "Password gate attempts",
    ["outcome"],  # accepted, rejected, unconfigured
)
