# market_insights/services/composition.py
# -----------------------------------------------------------------------------
# Business-type mix, local vs. reference
# - histograms keep first-seen order, so equal counts stay in that order
#   after the (stable) sort by count
# - percentages are rounded per bucket and NOT renormalized to 100
# -----------------------------------------------------------------------------
from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional, Sequence

from market_insights.core.config import settings
from market_insights.core.rounding import percent
from market_insights.schemas.insights import Composition, CompositionBucket
from market_insights.services.records import NearbyStore, normalize_type


def type_histogram(types: Iterable[Optional[str]]) -> Counter:
    return Counter(normalize_type(t) for t in types)


def to_buckets(histogram: Counter, total: int) -> list[CompositionBucket]:
    """
    Percentage list sorted by count desc. A zero total is treated as 1,
    which leaves every percentage at 0.
    """
    total = total or 1
    buckets = [
        CompositionBucket(type=t, count=c, percentage=percent(c, total))
        for t, c in histogram.items()
    ]
    buckets.sort(key=lambda b: b.count, reverse=True)
    return buckets


def find_underserved(
    local_types: Sequence[CompositionBucket],
    reference_types: Sequence[CompositionBucket],
    reference_min_pct: int = settings.UNDERSERVED_REFERENCE_MIN_PCT,
    local_max_pct: int = settings.UNDERSERVED_LOCAL_MAX_PCT,
    limit: int = settings.UNDERSERVED_LIMIT,
) -> list[str]:
    """Types common in the reference mix but rare or missing locally."""
    local_pct = {b.type: b.percentage for b in local_types}
    underserved = [
        b.type
        for b in reference_types
        if b.percentage > reference_min_pct
        and local_pct.get(b.type, 0) < local_max_pct
    ]
    return underserved[:limit]


def analyze_composition(
    local: Sequence[NearbyStore],
    reference_types: Sequence[Optional[str]],
    reference_limit: int = settings.REFERENCE_TYPES_LIMIT,
) -> Composition:
    local_buckets = to_buckets(
        type_histogram(s.record.store_type for s in local), len(local)
    )
    reference_buckets = to_buckets(
        type_histogram(reference_types), len(reference_types)
    )

    return Composition(
        local_types=local_buckets,
        # underserved scans the full reference list, only the output is capped
        state_types=reference_buckets[:reference_limit],
        underserved=find_underserved(local_buckets, reference_buckets),
    )
