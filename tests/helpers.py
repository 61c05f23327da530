"""Sample builders shared by the unit and property tests."""

from mesh_telemetry.models import MetricSample, Series


def _success_rate(requests: int, errors: int) -> float:
    # Clamped so an out-of-range errors count reaches the model validator
    if requests == 0:
        return 0.0
    return min(100.0, max(0.0, round((requests - errors) / requests * 100, 1)))


def make_sample(
    *,
    time: str = "00:00",
    requests: int = 100,
    errors: int = 1,
    latency: float = 150.0,
    cpu: float = 30.0,
    memory: float = 45.0,
    throughput: int = 80,
) -> MetricSample:
    """Build a sample whose derived fields honour the series invariants."""
    return MetricSample(
        time=time,
        requests=requests,
        errors=errors,
        latency=latency,
        cpu=cpu,
        memory=memory,
        throughput=throughput,
        network_in=100.0,
        network_out=80.0,
        success_rate=_success_rate(requests, errors),
        p95_latency=1.5 * latency,
        p99_latency=2.1 * latency,
        active_connections=round(requests * 0.1),
        qps=round(throughput / 60),
    )


def make_series(samples: list[MetricSample]) -> Series:
    return Series(samples=samples)
