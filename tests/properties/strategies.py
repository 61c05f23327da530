"""Hypothesis strategies for generating telemetry domain objects.

These strategies generate filter selections, time ranges, random sources and
hand-built samples for property-based testing.
"""

from hypothesis import strategies as st

from mesh_telemetry.catalog import NAMESPACES, SERVICES, WORKLOADS
from mesh_telemetry.models import FilterSelection, Series, TimeRange
from mesh_telemetry.random_source import FixedRandomSource, SeededRandomSource

from ..helpers import make_sample

# =============================================================================
# FILTERS
# =============================================================================

time_ranges = st.sampled_from(list(TimeRange))

filter_values = st.text(
    alphabet=st.characters(categories=("Ll", "Lu", "Nd"), include_characters="-"),
    max_size=20,
)


@st.composite
def catalog_selections(draw):
    return FilterSelection(
        namespace=draw(st.sampled_from(NAMESPACES)),
        service=draw(st.sampled_from(SERVICES)),
        workload=draw(st.sampled_from(WORKLOADS)),
    )


@st.composite
def arbitrary_selections(draw):
    """Catalog values mixed with values no table knows about."""
    return FilterSelection(
        namespace=draw(st.one_of(st.sampled_from(NAMESPACES), filter_values)),
        service=draw(st.one_of(st.sampled_from(SERVICES), filter_values)),
        workload=draw(st.one_of(st.sampled_from(WORKLOADS), filter_values)),
    )


# =============================================================================
# RANDOMNESS
# =============================================================================

seeded_sources = st.integers(min_value=0, max_value=2**32 - 1).map(SeededRandomSource)

# Pins every draw to one end of its band or the other
edge_sources = st.sampled_from([0.0, 1.0]).map(FixedRandomSource)

random_sources = st.one_of(seeded_sources, edge_sources)

multipliers = st.floats(min_value=0.01, max_value=10.0, allow_nan=False, allow_infinity=False)

# =============================================================================
# SAMPLES
# =============================================================================


@st.composite
def metric_samples(draw):
    requests = draw(st.integers(min_value=0, max_value=5000))
    return make_sample(
        time=f"{draw(st.integers(0, 23)):02}:{draw(st.integers(0, 59)):02}",
        requests=requests,
        errors=draw(st.integers(min_value=0, max_value=requests)),
        latency=float(draw(st.integers(min_value=0, max_value=2000))),
        cpu=draw(st.floats(min_value=0, max_value=100, allow_nan=False)),
        memory=draw(st.floats(min_value=0, max_value=100, allow_nan=False)),
        throughput=draw(st.integers(min_value=0, max_value=5000)),
    )


@st.composite
def series(draw, max_size=96):
    return Series(samples=draw(st.lists(metric_samples(), max_size=max_size)))
