"""Mesh Telemetry - synthetic service-mesh telemetry generation and rollups.

The engine turns a dashboard filter selection and time range into a bucketed
multi-metric series, a trailing-window health rollup and chart projections.
"""

from mesh_telemetry.buckets import InvalidTimeRangeError
from mesh_telemetry.engine import TelemetryEngine
from mesh_telemetry.generator import SeriesGenerator
from mesh_telemetry.multiplier import MultiplierResolver
from mesh_telemetry.projection import MetricProjector
from mesh_telemetry.random_source import RandomSource, SeededRandomSource, SystemRandomSource
from mesh_telemetry.rollup import RollupAggregator

__all__ = [
    "InvalidTimeRangeError",
    "MetricProjector",
    "MultiplierResolver",
    "RandomSource",
    "RollupAggregator",
    "SeededRandomSource",
    "SeriesGenerator",
    "SystemRandomSource",
    "TelemetryEngine",
]
