"""Composite multiplier resolution for a filter selection.

Each filter dimension is looked up in its own weight table; the composite
multiplier is the product of the three weights. Unmapped values and the
"All ..." sentinels resolve to the table default (1.0) and are never an error.
"""

from __future__ import annotations

import logging

from .models import FilterSelection, MultiplierTables

logger = logging.getLogger("mesh_telemetry.multiplier")


class MultiplierResolver:
    """Maps namespace / service / workload to scalar weights."""

    def __init__(self, tables: MultiplierTables | None = None) -> None:
        self.tables = tables if tables is not None else MultiplierTables()

    def resolve(self, namespace: str, service: str, workload: str) -> float:
        namespace_weight = self.tables.namespace.weight_for(namespace)
        service_weight = self.tables.service.weight_for(service)
        workload_weight = self.tables.workload.weight_for(workload)
        multiplier = namespace_weight * service_weight * workload_weight

        logger.debug(
            "Resolved multiplier %.4f (namespace=%s:%.2f service=%s:%.2f workload=%s:%.2f)",
            multiplier,
            namespace,
            namespace_weight,
            service,
            service_weight,
            workload,
            workload_weight,
        )
        return multiplier

    def resolve_selection(self, selection: FilterSelection) -> float:
        return self.resolve(selection.namespace, selection.service, selection.workload)

    def latency_baseline(self, workload: str) -> float:
        """Baseline request latency (ms) for the workload's tier."""
        return self.tables.latency_baseline.weight_for(workload)
