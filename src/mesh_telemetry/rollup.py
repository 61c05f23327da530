"""Rollup aggregation - trailing-window summary and health scoring.

The health score is a deterministic threshold ladder over the window's error
rate and average latency, evaluated top-down with the first match winning:

- error rate < 1% and latency < 200ms -> 5
- error rate < 2% and latency < 300ms -> 4
- error rate < 5% and latency < 500ms -> 3
- otherwise -> 2

Zero traffic is not an error: rates fall back to 0 and nothing is ever NaN.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import HealthLadder, RollupSummary, ServiceHealth, TrafficTotals

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .models import MetricSample, Series

DEFAULT_WINDOW = 6


def error_rate_percent(requests: int, errors: int) -> float:
    if requests <= 0:
        return 0.0
    return errors / requests * 100


def score_health(
    error_rate: float,
    avg_latency_ms: float,
    ladder: HealthLadder | None = None,
) -> int:
    """Map (error rate %, average latency ms) onto the health ladder."""
    if ladder is None:
        ladder = HealthLadder()
    for tier in ladder.tiers:
        if error_rate < tier.max_error_rate_percent and avg_latency_ms < tier.max_latency_ms:
            return tier.score
    return ladder.floor_score


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def aggregate(
    series: Series,
    window: int = DEFAULT_WINDOW,
    ladder: HealthLadder | None = None,
) -> RollupSummary:
    """Summarize the last `min(window, len(series))` buckets."""
    if window <= 0:
        raise ValueError(f"window must be positive, got {window}")
    if ladder is None:
        ladder = HealthLadder()

    tail = series.tail(window)
    total_requests = sum(s.requests for s in tail)
    total_errors = sum(s.errors for s in tail)

    rate = error_rate_percent(total_requests, total_errors)
    avg_latency = _mean([s.latency for s in tail])

    return RollupSummary(
        service_health=ServiceHealth(
            current=score_health(rate, avg_latency, ladder),
            total=ladder.total,
        ),
        error_rate_percent=round(rate, 2),
        avg_latency_ms=round(avg_latency, 1),
        throughput_per_min=round(_mean([s.throughput for s in tail]), 1),
        avg_cpu_percent=round(_mean([s.cpu for s in tail]), 1),
        avg_memory_percent=round(_mean([s.memory for s in tail]), 1),
        uptime_percent=round(_uptime(total_requests, rate), 2),
        window=len(tail),
    )


def _uptime(total_requests: int, rate: float) -> float:
    """Share of requests served successfully; an idle window counts as fully up."""
    if total_requests <= 0:
        return 100.0
    return min(100.0, max(0.0, 100.0 - rate))


def summarize_traffic(samples: Sequence[MetricSample]) -> TrafficTotals:
    """Whole-series totals for the traffic overview cards."""
    total_requests = sum(s.requests for s in samples)
    total_errors = sum(s.errors for s in samples)
    return TrafficTotals(
        total_requests=total_requests,
        total_errors=total_errors,
        error_rate_percent=round(error_rate_percent(total_requests, total_errors), 2),
        avg_latency_ms=round(_mean([s.latency for s in samples]), 1),
        throughput_k_per_min=round(sum(s.throughput for s in samples) / 1000, 1),
    )


class RollupAggregator:
    """Aggregator bound to a fixed window and health ladder."""

    def __init__(self, window: int = DEFAULT_WINDOW, ladder: HealthLadder | None = None) -> None:
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        self.window = window
        self.ladder = ladder if ladder is not None else HealthLadder()

    def aggregate(self, series: Series) -> RollupSummary:
        return aggregate(series, self.window, self.ladder)

    def totals(self, series: Series) -> TrafficTotals:
        return summarize_traffic(series.samples)
