"""Series, rollup and projection models produced by the engine."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from .filters import FilterSelection, TimeRange  # noqa: TC001

MetricKey = Literal["requests", "errors", "latency", "throughput"]


class MetricSample(BaseModel):
    """One time bucket of synthesized telemetry."""

    model_config = {"frozen": True}

    time: str
    requests: int = Field(ge=0)
    errors: int = Field(ge=0)
    latency: float = Field(ge=0, description="Mean request latency in ms")
    cpu: float = Field(ge=0, le=100)
    memory: float = Field(ge=0, le=100)
    throughput: int = Field(ge=0, description="Requests handled per minute")
    network_in: float = Field(ge=0)
    network_out: float = Field(ge=0)
    success_rate: float = Field(ge=0, le=100)
    p95_latency: float = Field(ge=0)
    p99_latency: float = Field(ge=0)
    active_connections: int = Field(ge=0)
    qps: int = Field(ge=0)

    @model_validator(mode="after")
    def _errors_within_requests(self) -> MetricSample:
        if self.errors > self.requests:
            raise ValueError(f"errors ({self.errors}) exceed requests ({self.requests})")
        return self


class Series(BaseModel):
    """Ordered samples, oldest bucket first."""

    model_config = {"frozen": True}

    time_range: TimeRange | None = None
    bucket_minutes: int = Field(default=60, gt=0)
    multiplier: float = Field(default=1.0, gt=0)
    samples: list[MetricSample] = Field(default_factory=list)

    def tail(self, window: int) -> list[MetricSample]:
        if window <= 0:
            return []
        return self.samples[-window:]


# ---------------------------------------------------------------------------
# Rollups
# ---------------------------------------------------------------------------


class ServiceHealth(BaseModel):
    current: int = Field(ge=1, le=5)
    total: int = 5


class RollupSummary(BaseModel):
    service_health: ServiceHealth
    error_rate_percent: float = Field(ge=0)
    avg_latency_ms: float = Field(ge=0)
    throughput_per_min: float = Field(ge=0)
    avg_cpu_percent: float = Field(ge=0, le=100)
    avg_memory_percent: float = Field(ge=0, le=100)
    uptime_percent: float = Field(ge=0, le=100)
    window: int = Field(ge=0, description="Number of buckets the rollup covers")


class TrafficTotals(BaseModel):
    """Whole-series totals shown on the traffic overview metric cards."""

    total_requests: int = Field(ge=0)
    total_errors: int = Field(ge=0)
    error_rate_percent: float = Field(ge=0)
    avg_latency_ms: float = Field(ge=0)
    throughput_k_per_min: float = Field(ge=0)


# ---------------------------------------------------------------------------
# Chart projection
# ---------------------------------------------------------------------------


class ChartPoint(BaseModel):
    model_config = {"frozen": True}

    time: str
    primary: float
    secondary: float


class ChartProjection(BaseModel):
    metric: MetricKey
    primary_field: str
    secondary_field: str
    primary_name: str
    secondary_name: str
    points: list[ChartPoint]


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------


class RegenerationTicket(BaseModel):
    model_config = {"frozen": True}

    sequence: int = Field(ge=1)
    selection: FilterSelection
    time_range: TimeRange


class TelemetrySnapshot(BaseModel):
    sequence: int
    selection: FilterSelection
    time_range: TimeRange
    series: Series
    rollup: RollupSummary
    totals: TrafficTotals
