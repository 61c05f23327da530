"""Configuration models for the telemetry engine.

Every table the engine consults is injectable here so a host can extend the
filter catalog or retune the simulator without touching generation logic:

- WeightTable / MultiplierTables: filter value -> scaling weight
- GenerationProfile: oscillation baselines, amplitudes and jitter bands
- HealthLadder: error-rate / latency thresholds for the 1-5 health score
- EngineSettings: top-level settings, overridable from MESH_TELEMETRY_* env vars
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings
from whenever import Instant, TimeZoneNotFoundError

from .filters import BucketingMode, BucketSpec, TimeRange


class WeightTable(BaseModel):
    """Lookup table for one filter dimension.

    exact: the whole filter value must equal a key.
    token: a key may also match one "-"-separated segment of the value,
        so "reviews-v3" picks up the "v3" tier. Exact matches win; otherwise
        the first key in table order that matches a segment is used.
    """

    weights: dict[str, float] = Field(default_factory=dict)
    default: float = Field(default=1.0, gt=0)
    match: Literal["exact", "token"] = "exact"

    @field_validator("weights")
    @classmethod
    def _positive_weights(cls, v: dict[str, float]) -> dict[str, float]:
        bad = sorted(k for k, w in v.items() if w <= 0)
        if bad:
            raise ValueError(f"weights must be positive: {', '.join(bad)}")
        return v

    def lookup(self, value: str) -> float | None:
        """Return the mapped weight for value, or None when unmapped."""
        if value in self.weights:
            return self.weights[value]
        if self.match == "token":
            segments = set(value.split("-"))
            for key, weight in self.weights.items():
                if key in segments:
                    return weight
        return None

    def weight_for(self, value: str) -> float:
        weight = self.lookup(value)
        return self.default if weight is None else weight


class MultiplierTables(BaseModel):
    namespace: WeightTable = Field(
        default_factory=lambda: WeightTable(weights={"istio-system": 1.5, "default": 1.2})
    )
    service: WeightTable = Field(
        default_factory=lambda: WeightTable(weights={"productpage": 1.3, "reviews": 1.1})
    )
    workload: WeightTable = Field(
        default_factory=lambda: WeightTable(weights={"v3": 1.2, "v2": 1.1}, match="token")
    )
    # Not a multiplier: baseline latency (ms) per workload tier
    latency_baseline: WeightTable = Field(
        default_factory=lambda: WeightTable(
            weights={"v1": 220.0, "v2": 180.0, "v3": 160.0},
            default=120.0,
            match="token",
        )
    )


class GenerationProfile(BaseModel):
    """Shape of the synthesized series.

    Oscillating metrics follow base + amplitude * sin(frequency * i) + jitter,
    where jitter is drawn from the injected random source.
    """

    # Requests: seasonal oscillation scaled by the composite multiplier
    requests_base: float = 150.0
    requests_amplitude: float = 100.0
    requests_frequency: float = 0.5
    requests_jitter: tuple[float, float] = Field(
        default=(0.8, 1.2),
        description="Multiplicative jitter band applied to requests",
    )

    # Errors: canonical fraction-of-requests band
    error_rate_band: tuple[float, float] = Field(
        default=(0.005, 0.025),
        description="Errors as a fraction of requests (0.5% - 2.5%)",
    )

    # Latency: baseline comes from MultiplierTables.latency_baseline
    latency_amplitude_ms: float = 35.0
    latency_frequency: float = 0.4
    latency_jitter_ms: float = 20.0
    p95_factor: float = Field(default=1.5, gt=0)
    p99_factor: float = Field(default=2.1, gt=0)

    cpu_base: float = 30.0
    cpu_amplitude: float = 20.0
    cpu_frequency: float = 0.3
    cpu_jitter: float = 10.0

    memory_base: float = 45.0
    memory_amplitude: float = 15.0
    memory_frequency: float = 0.4
    memory_jitter: float = 8.0

    throughput_ratio: float = Field(default=0.8, ge=0)
    throughput_jitter: float = Field(default=50.0, ge=0)

    network_in_base: float = 120.0
    network_in_amplitude: float = 40.0
    network_frequency: float = 0.35
    network_jitter: float = 10.0
    network_out_ratio: float = Field(default=0.8, ge=0)

    connections_ratio: float = Field(default=0.1, ge=0)

    # Business-hours weighting (wall-clock labels only)
    business_hours: tuple[int, int] = (9, 17)
    business_hours_factor: float = Field(default=1.5, gt=0)
    off_hours_factor: float = Field(default=0.8, gt=0)

    @field_validator("requests_jitter", "error_rate_band")
    @classmethod
    def _ordered_band(cls, v: tuple[float, float]) -> tuple[float, float]:
        lo, hi = v
        if lo < 0 or lo > hi:
            raise ValueError(f"band must satisfy 0 <= low <= high, got {v}")
        return v

    @field_validator("error_rate_band")
    @classmethod
    def _fractional_band(cls, v: tuple[float, float]) -> tuple[float, float]:
        if v[1] > 1:
            raise ValueError(f"error rate band is a fraction of requests, got {v}")
        return v


class HealthTier(BaseModel):
    score: int = Field(ge=1, le=5)
    max_error_rate_percent: float = Field(description="Error rate must be strictly below this")
    max_latency_ms: float = Field(description="Average latency must be strictly below this")


class HealthLadder(BaseModel):
    """Ordered threshold ladder, evaluated top-down; first match wins."""

    tiers: list[HealthTier] = Field(
        default_factory=lambda: [
            HealthTier(score=5, max_error_rate_percent=1.0, max_latency_ms=200.0),
            HealthTier(score=4, max_error_rate_percent=2.0, max_latency_ms=300.0),
            HealthTier(score=3, max_error_rate_percent=5.0, max_latency_ms=500.0),
        ]
    )
    floor_score: int = Field(default=2, ge=1, le=5)
    total: int = 5

    @model_validator(mode="after")
    def _scores_within_total(self) -> HealthLadder:
        for score in [*(tier.score for tier in self.tiers), self.floor_score]:
            if score > self.total:
                raise ValueError(f"score {score} exceeds total {self.total}")
        return self


def _default_buckets() -> dict[TimeRange, BucketSpec]:
    return {
        TimeRange.ONE_HOUR: BucketSpec(bucket_count=12, bucket_minutes=5),
        TimeRange.SIX_HOURS: BucketSpec(bucket_count=24, bucket_minutes=15),
        TimeRange.ONE_DAY: BucketSpec(bucket_count=48, bucket_minutes=30),
        TimeRange.SEVEN_DAYS: BucketSpec(bucket_count=96, bucket_minutes=60),
    }


class EngineSettings(BaseSettings):
    """Main configuration for the telemetry engine."""

    rollup_window: int = Field(default=6, gt=0, description="Trailing buckets used for rollups")
    bucketing_mode: BucketingMode = Field(
        default=BucketingMode.RANGE, description="Range-dependent or fixed hourly buckets"
    )
    label_timezone: str = Field(default="UTC", description="IANA zone for wall-clock labels")
    business_hours_weighting: bool = Field(
        default=False, description="Scale requests up during business hours"
    )
    seed: int | None = Field(default=None, description="Seed for reproducible series")

    buckets: dict[TimeRange, BucketSpec] = Field(default_factory=_default_buckets)
    hourly_bucket: BucketSpec = Field(
        default_factory=lambda: BucketSpec(bucket_count=24, bucket_minutes=60)
    )
    multipliers: MultiplierTables = Field(default_factory=MultiplierTables)
    profile: GenerationProfile = Field(default_factory=GenerationProfile)
    health: HealthLadder = Field(default_factory=HealthLadder)

    @field_validator("label_timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            Instant.now().to_tz(v)
        except (TimeZoneNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone {v!r}") from None
        return v

    model_config = {"env_prefix": "MESH_TELEMETRY_", "env_nested_delimiter": "__"}
