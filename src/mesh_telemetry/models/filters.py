"""Filter selection and time range models.

The UI layer owns these values and passes them in; the engine never mutates them.
"""

from enum import StrEnum

from pydantic import BaseModel, Field

ALL_NAMESPACES = "All Namespaces"
ALL_SERVICES = "All Services"
ALL_WORKLOADS = "All Workloads"


class TimeRange(StrEnum):
    ONE_HOUR = "1h"
    SIX_HOURS = "6h"
    ONE_DAY = "24h"
    SEVEN_DAYS = "7d"


class BucketingMode(StrEnum):
    """How a time range is split into buckets.

    RANGE: bucket count and width depend on the range, wall-clock labels.
    HOURLY: fixed 24 one-hour buckets with simulated "HH:00" labels.
    """

    RANGE = "range"
    HOURLY = "hourly"


class BucketSpec(BaseModel):
    model_config = {"frozen": True}

    bucket_count: int = Field(gt=0)
    bucket_minutes: int = Field(gt=0)

    @property
    def span_minutes(self) -> int:
        return self.bucket_count * self.bucket_minutes


class FilterSelection(BaseModel):
    """Namespace / service / workload filter chosen in the dashboard."""

    model_config = {"frozen": True}

    namespace: str = ALL_NAMESPACES
    service: str = ALL_SERVICES
    workload: str = ALL_WORKLOADS
