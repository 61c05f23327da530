"""Time range -> bucket layout resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import BucketingMode, BucketSpec, TimeRange

if TYPE_CHECKING:
    from .models import EngineSettings


class InvalidTimeRangeError(ValueError):
    """Raised when a caller passes a time range outside the known enum.

    The dashboard only ever offers validated ranges, so this is a caller
    contract violation rather than a recoverable condition.
    """

    def __init__(self, value: object, accepted: list[str]) -> None:
        self.value = value
        self.accepted = accepted
        super().__init__(f"Unknown time range {value!r}; expected one of: {', '.join(accepted)}")


def parse_time_range(value: TimeRange | str) -> TimeRange:
    try:
        return TimeRange(value)
    except ValueError:
        raise InvalidTimeRangeError(value, [r.value for r in TimeRange]) from None


def resolve_bucket_spec(
    time_range: TimeRange | str,
    table: dict[TimeRange, BucketSpec],
) -> BucketSpec:
    """Look up the (bucket_count, bucket_minutes) pair for a range."""
    parsed = parse_time_range(time_range)
    spec = table.get(parsed)
    if spec is None:
        raise InvalidTimeRangeError(parsed.value, [r.value for r in table])
    return spec


def bucket_spec_for(time_range: TimeRange | str, settings: EngineSettings) -> BucketSpec:
    """Bucket layout honouring the configured bucketing mode.

    The range is validated in both modes; HOURLY then ignores it.
    """
    spec = resolve_bucket_spec(time_range, settings.buckets)
    if settings.bucketing_mode == BucketingMode.HOURLY:
        return settings.hourly_bucket
    return spec
