"""Pydantic models for the mesh telemetry engine.

Data flow:
- FilterSelection + TimeRange: supplied by the dashboard
- Series (MetricSample buckets): synthesized by the generator
- RollupSummary / TrafficTotals: reduced from the series
- ChartProjection: primary/secondary view of one metric key
- TelemetrySnapshot: everything one regeneration produces
"""

from .config import (
    EngineSettings,
    GenerationProfile,
    HealthLadder,
    HealthTier,
    MultiplierTables,
    WeightTable,
)
from .filters import (
    ALL_NAMESPACES,
    ALL_SERVICES,
    ALL_WORKLOADS,
    BucketingMode,
    BucketSpec,
    FilterSelection,
    TimeRange,
)
from .series import (
    ChartPoint,
    ChartProjection,
    MetricKey,
    MetricSample,
    RegenerationTicket,
    RollupSummary,
    Series,
    ServiceHealth,
    TelemetrySnapshot,
    TrafficTotals,
)

__all__ = [
    "ALL_NAMESPACES",
    "ALL_SERVICES",
    "ALL_WORKLOADS",
    "BucketSpec",
    "BucketingMode",
    "ChartPoint",
    "ChartProjection",
    "EngineSettings",
    "FilterSelection",
    "GenerationProfile",
    "HealthLadder",
    "HealthTier",
    "MetricKey",
    "MetricSample",
    "MultiplierTables",
    "RegenerationTicket",
    "RollupSummary",
    "Series",
    "ServiceHealth",
    "TelemetrySnapshot",
    "TimeRange",
    "TrafficTotals",
    "WeightTable",
]
