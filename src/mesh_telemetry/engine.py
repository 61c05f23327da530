"""Telemetry engine - one regeneration per filter / time range change.

A regeneration is issued, run, then adopted:

    ticket = engine.issue(selection, time_range)
    snapshot = engine.run(ticket)
    engine.adopt(ticket, snapshot)

`run` is pure over the ticket, the random source and the clock. `adopt` only
accepts the result of the most recently issued ticket, so when a host lets
regenerations overlap (rapid filter changes) older in-flight results are
discarded rather than merged. `regenerate` does all three in one call.
"""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING

from .buckets import bucket_spec_for, parse_time_range
from .generator import SeriesGenerator
from .models import EngineSettings, FilterSelection, RegenerationTicket, TelemetrySnapshot
from .multiplier import MultiplierResolver
from .random_source import make_random_source
from .rollup import RollupAggregator

if TYPE_CHECKING:
    from whenever import Instant

    from .models import TimeRange
    from .random_source import RandomSource

logger = logging.getLogger("mesh_telemetry.engine")


class TelemetryEngine:
    def __init__(self, settings: EngineSettings | None = None) -> None:
        self.settings = settings if settings is not None else EngineSettings()
        self.resolver = MultiplierResolver(self.settings.multipliers)
        self.generator = SeriesGenerator(self.settings.profile)
        self.aggregator = RollupAggregator(self.settings.rollup_window, self.settings.health)

        self._sequence = itertools.count(1)
        self._latest_issued = 0
        self._current: TelemetrySnapshot | None = None

    @property
    def current(self) -> TelemetrySnapshot | None:
        """The most recently adopted snapshot, if any."""
        return self._current

    def issue(
        self,
        selection: FilterSelection,
        time_range: TimeRange | str,
    ) -> RegenerationTicket:
        """Register a new regeneration; supersedes every earlier ticket."""
        ticket = RegenerationTicket(
            sequence=next(self._sequence),
            selection=selection,
            time_range=parse_time_range(time_range),
        )
        self._latest_issued = ticket.sequence
        return ticket

    def run(
        self,
        ticket: RegenerationTicket,
        random_source: RandomSource | None = None,
        now: Instant | None = None,
    ) -> TelemetrySnapshot:
        """Compute the snapshot for a ticket without adopting it."""
        if random_source is None:
            random_source = make_random_source(self.settings.seed)

        spec = bucket_spec_for(ticket.time_range, self.settings)
        selection = ticket.selection
        multiplier = self.resolver.resolve_selection(selection)

        series = self.generator.generate(
            multiplier,
            spec.bucket_count,
            spec.bucket_minutes,
            random_source,
            latency_baseline=self.resolver.latency_baseline(selection.workload),
            mode=self.settings.bucketing_mode,
            now=now,
            label_timezone=self.settings.label_timezone,
            business_hours_weighting=self.settings.business_hours_weighting,
            time_range=ticket.time_range,
        )

        return TelemetrySnapshot(
            sequence=ticket.sequence,
            selection=selection,
            time_range=ticket.time_range,
            series=series,
            rollup=self.aggregator.aggregate(series),
            totals=self.aggregator.totals(series),
        )

    def adopt(self, ticket: RegenerationTicket, snapshot: TelemetrySnapshot) -> bool:
        """Publish a snapshot if its ticket is still the latest one issued."""
        if ticket.sequence != snapshot.sequence:
            raise ValueError(
                f"snapshot {snapshot.sequence} does not belong to ticket {ticket.sequence}"
            )
        if ticket.sequence != self._latest_issued:
            logger.info(
                "Discarding stale regeneration %d (latest issued %d)",
                ticket.sequence,
                self._latest_issued,
            )
            return False

        self._current = snapshot
        logger.info(
            "Adopted regeneration %d: %s/%s/%s over %s, health %d/%d",
            ticket.sequence,
            ticket.selection.namespace,
            ticket.selection.service,
            ticket.selection.workload,
            ticket.time_range.value,
            snapshot.rollup.service_health.current,
            snapshot.rollup.service_health.total,
        )
        return True

    def regenerate(
        self,
        selection: FilterSelection,
        time_range: TimeRange | str,
        random_source: RandomSource | None = None,
        now: Instant | None = None,
    ) -> TelemetrySnapshot:
        ticket = self.issue(selection, time_range)
        snapshot = self.run(ticket, random_source=random_source, now=now)
        self.adopt(ticket, snapshot)
        return snapshot
