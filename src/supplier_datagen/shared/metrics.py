"""Prometheus metrics for generation runs."""
from prometheus_client import REGISTRY, Counter, Histogram


def _get_or_create_metric(metric_class, name: str, doc: str, labelnames=None, **kwargs):
    """Get existing metric or create new one to avoid duplication errors in tests."""
    for collector in list(REGISTRY._collector_to_names.keys()):
        if hasattr(collector, "_name") and collector._name == name:
            return collector
    try:
        if labelnames is not None:
            kwargs["labelnames"] = labelnames
        return metric_class(name, doc, registry=REGISTRY, **kwargs)
    except ValueError as e:
        if "Duplicated timeseries" in str(e):
            for collector in list(REGISTRY._collector_to_names.keys()):
                if hasattr(collector, "_name") and collector._name == name:
                    return collector
        raise


generation_runs_total = _get_or_create_metric(
    Counter,
    "generation_runs",
    "Total number of generation runs by outcome",
    ["outcome"],
)

generated_records_total = _get_or_create_metric(
    Counter,
    "generated_records",
    "Total number of transaction records generated",
)

catalog_products = _get_or_create_metric(
    Histogram,
    "catalog_products",
    "Number of products in each parsed price catalog",
    buckets=[1, 10, 50, 100, 500, 1000, 5000, 10000, 50000],
)

generation_duration_seconds = _get_or_create_metric(
    Histogram,
    "generation_duration_seconds",
    "Time taken to generate one consolidated CSV",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)


def record_generation_success(record_count: int, duration_seconds: float) -> None:
    """Record a completed generation run."""
    generation_runs_total.labels(outcome="success").inc()
    generated_records_total.inc(record_count)
    generation_duration_seconds.observe(duration_seconds)


def record_generation_failure(error_type: str) -> None:
    """Record a generation run that aborted."""
    generation_runs_total.labels(outcome=error_type).inc()
