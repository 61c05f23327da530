"""Synthetic series generation.

Produces exactly `bucket_count` MetricSample buckets, oldest first. Each metric
is a bounded oscillation plus jitter drawn from the injected RandomSource:

- requests: seasonal sine scaled by the composite multiplier and a
  multiplicative jitter band
- errors: a fraction of requests drawn from one canonical band
- latency: per-workload-tier baseline plus its own oscillation
- p95 / p99: fixed multiples of latency, never drawn separately
- cpu / memory: clamped into [0, 100]
- throughput, qps, active connections, network out: derived from the above

The random source is consumed in a fixed order per bucket, so a seeded
source always replays the same series.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from whenever import Instant, TimeDelta

from .models import BucketingMode, GenerationProfile, MetricSample, Series

if TYPE_CHECKING:
    from .models import TimeRange
    from .random_source import RandomSource

logger = logging.getLogger("mesh_telemetry.generator")


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def success_rate(requests: int, errors: int) -> float:
    """Percentage of successful requests, one decimal; 0.0 with no traffic."""
    if requests <= 0:
        return 0.0
    return round((requests - errors) / requests * 100, 1)


class SeriesGenerator:
    def __init__(self, profile: GenerationProfile | None = None) -> None:
        self.profile = profile if profile is not None else GenerationProfile()

    def generate(
        self,
        multiplier: float,
        bucket_count: int,
        bucket_minutes: int,
        random_source: RandomSource,
        *,
        latency_baseline: float = 120.0,
        mode: BucketingMode = BucketingMode.RANGE,
        now: Instant | None = None,
        label_timezone: str = "UTC",
        business_hours_weighting: bool = False,
        time_range: TimeRange | None = None,
    ) -> Series:
        """Synthesize a full series.

        Args:
            multiplier: Composite filter multiplier, must be positive.
            bucket_count: Number of buckets to produce.
            bucket_minutes: Width of one bucket in minutes.
            random_source: Source of all jitter draws.
            latency_baseline: Baseline latency (ms) for the selected workload tier.
            mode: RANGE labels buckets with wall-clock HH:MM ending at `now`;
                HOURLY labels bucket i as a simulated "{i:02}:00".
            now: End of the series for wall-clock labels (defaults to Instant.now()).
            label_timezone: IANA zone the wall-clock labels are rendered in.
            business_hours_weighting: Scale requests by hour of day.
            time_range: Range the series was generated for, recorded on the Series.
        """
        if multiplier <= 0:
            raise ValueError(f"multiplier must be positive, got {multiplier}")
        if bucket_count <= 0 or bucket_minutes <= 0:
            raise ValueError(
                f"bucket layout must be positive, got ({bucket_count}, {bucket_minutes})"
            )

        if mode == BucketingMode.RANGE and now is None:
            now = Instant.now()

        samples: list[MetricSample] = []
        for i in range(bucket_count):
            if mode == BucketingMode.HOURLY:
                label, hour = f"{i % 24:02}:00", i % 24
            else:
                label, hour = self._wall_clock_label(
                    now, bucket_count - i, bucket_minutes, label_timezone
                )

            traffic_factor = multiplier
            if business_hours_weighting:
                traffic_factor *= self._hour_factor(hour)

            samples.append(self._sample(i, label, traffic_factor, latency_baseline, random_source))

        logger.debug(
            "Generated %d buckets of %d min (mode=%s, multiplier=%.4f)",
            bucket_count,
            bucket_minutes,
            mode.value,
            multiplier,
        )
        return Series(
            time_range=time_range,
            bucket_minutes=bucket_minutes,
            multiplier=multiplier,
            samples=samples,
        )

    # -----------------------------------------------------------------------
    # Internals
    # -----------------------------------------------------------------------

    @staticmethod
    def _wall_clock_label(
        now: Instant,
        buckets_back: int,
        bucket_minutes: int,
        tz: str,
    ) -> tuple[str, int]:
        local = (now - TimeDelta(minutes=buckets_back * bucket_minutes)).to_tz(tz)
        return f"{local.hour:02}:{local.minute:02}", local.hour

    def _hour_factor(self, hour: int) -> float:
        start, end = self.profile.business_hours
        if start <= hour <= end:
            return self.profile.business_hours_factor
        return self.profile.off_hours_factor

    def _sample(
        self,
        i: int,
        label: str,
        traffic_factor: float,
        latency_baseline: float,
        rng: RandomSource,
    ) -> MetricSample:
        p = self.profile

        base_requests = p.requests_base + p.requests_amplitude * math.sin(i * p.requests_frequency)
        requests = max(0, round(base_requests * traffic_factor * rng.uniform(*p.requests_jitter)))

        errors = min(requests, round(requests * rng.uniform(*p.error_rate_band)))

        raw_latency = (
            latency_baseline
            + p.latency_amplitude_ms * math.sin(i * p.latency_frequency)
            + rng.uniform(-p.latency_jitter_ms, p.latency_jitter_ms)
        )
        latency = float(max(0, round(raw_latency)))

        cpu = _clamp(
            round(
                p.cpu_base + p.cpu_amplitude * math.sin(i * p.cpu_frequency)
                + rng.uniform(0, p.cpu_jitter),
                1,
            ),
            0.0,
            100.0,
        )
        memory = _clamp(
            round(
                p.memory_base + p.memory_amplitude * math.sin(i * p.memory_frequency)
                + rng.uniform(0, p.memory_jitter),
                1,
            ),
            0.0,
            100.0,
        )

        throughput = max(
            0, round(requests * p.throughput_ratio + rng.uniform(0, p.throughput_jitter))
        )

        network_in = max(
            0.0,
            round(
                p.network_in_base + p.network_in_amplitude * math.sin(i * p.network_frequency)
                + rng.uniform(-p.network_jitter, p.network_jitter),
                1,
            ),
        )

        return MetricSample(
            time=label,
            requests=requests,
            errors=errors,
            latency=latency,
            cpu=cpu,
            memory=memory,
            throughput=throughput,
            network_in=network_in,
            network_out=round(network_in * p.network_out_ratio, 1),
            success_rate=success_rate(requests, errors),
            p95_latency=p.p95_factor * latency,
            p99_latency=p.p99_factor * latency,
            active_connections=round(requests * p.connections_ratio),
            qps=round(throughput / 60),
        )
