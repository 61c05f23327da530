"""Filter catalogs offered by the dashboard dropdowns.

The engine never validates against these lists (unmapped values resolve to a
neutral weight); they exist so hosts and the CLI can show what is selectable
and which weight each option carries.
"""

from pydantic import BaseModel

from .models import ALL_NAMESPACES, ALL_SERVICES, ALL_WORKLOADS, MultiplierTables

NAMESPACES: tuple[str, ...] = (
    ALL_NAMESPACES,
    "default",
    "istio-system",
    "kube-system",
    "monitoring",
)

SERVICES: tuple[str, ...] = (
    ALL_SERVICES,
    "productpage",
    "details",
    "ratings",
    "reviews",
    "bookinfo-gateway",
)

WORKLOADS: tuple[str, ...] = (
    ALL_WORKLOADS,
    "reviews-v1",
    "reviews-v2",
    "reviews-v3",
    "productpage-v1",
    "details-v1",
)


class CatalogEntry(BaseModel):
    dimension: str
    value: str
    weight: float
    mapped: bool


def describe_catalog(tables: MultiplierTables | None = None) -> list[CatalogEntry]:
    """List every catalog option alongside the weight it resolves to."""
    if tables is None:
        tables = MultiplierTables()

    entries: list[CatalogEntry] = []
    for dimension, values, table in (
        ("namespace", NAMESPACES, tables.namespace),
        ("service", SERVICES, tables.service),
        ("workload", WORKLOADS, tables.workload),
    ):
        for value in values:
            weight = table.lookup(value)
            entries.append(
                CatalogEntry(
                    dimension=dimension,
                    value=value,
                    weight=table.default if weight is None else weight,
                    mapped=weight is not None,
                )
            )
    return entries
