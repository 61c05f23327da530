"""Metric projection - primary/secondary field pairing for chart consumers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .models import ChartPoint, ChartProjection

if TYPE_CHECKING:
    from .models import MetricKey, Series

logger = logging.getLogger("mesh_telemetry.projection")


@dataclass(frozen=True)
class FieldPairing:
    primary_field: str
    secondary_field: str
    primary_name: str
    secondary_name: str


PAIRINGS: dict[str, FieldPairing] = {
    "requests": FieldPairing("requests", "errors", "Requests", "Errors"),
    "errors": FieldPairing("errors", "success_rate", "Errors", "Success Rate"),
    "latency": FieldPairing("latency", "p95_latency", "Latency (ms)", "P95 Latency (ms)"),
    "throughput": FieldPairing("throughput", "qps", "Throughput", "QPS"),
}

DEFAULT_METRIC: MetricKey = "requests"


def resolve_metric(metric_key: str) -> MetricKey:
    """Normalize a user-chosen metric key; unknown keys fall back to requests."""
    if metric_key in PAIRINGS:
        return metric_key  # type: ignore[return-value]
    logger.debug("Unknown metric key %r, falling back to %s", metric_key, DEFAULT_METRIC)
    return DEFAULT_METRIC


def project(series: Series, metric_key: str) -> ChartProjection:
    """Build a chart view of the series; the series itself is left untouched."""
    metric = resolve_metric(metric_key)
    pairing = PAIRINGS[metric]
    points = [
        ChartPoint(
            time=sample.time,
            primary=getattr(sample, pairing.primary_field),
            secondary=getattr(sample, pairing.secondary_field),
        )
        for sample in series.samples
    ]
    return ChartProjection(
        metric=metric,
        primary_field=pairing.primary_field,
        secondary_field=pairing.secondary_field,
        primary_name=pairing.primary_name,
        secondary_name=pairing.secondary_name,
        points=points,
    )


class MetricProjector:
    def project(self, series: Series, metric_key: str) -> ChartProjection:
        return project(series, metric_key)
