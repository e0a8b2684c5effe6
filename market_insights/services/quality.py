# market_insights/services/quality.py
# -----------------------------------------------------------------------------
# Rating benchmark: local mean vs. the statewide pool
# -----------------------------------------------------------------------------
from __future__ import annotations

from bisect import bisect_left
from typing import Optional, Sequence

from market_insights.core.rounding import percent, round_half_up
from market_insights.schemas.insights import QualityMetrics
from market_insights.services.records import NearbyStore


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def rating_percentile(
    local_mean: Optional[float], reference_ratings: Sequence[float]
) -> Optional[int]:
    """
    Share of individual reference ratings strictly below the local mean, 0-100.
    A reference rating equal to the mean does not count.
    """
    if local_mean is None or not reference_ratings:
        return None
    below = bisect_left(sorted(reference_ratings), local_mean)
    return percent(below, len(reference_ratings))


def benchmark_quality(
    local: Sequence[NearbyStore], reference_ratings: Sequence[float]
) -> QualityMetrics:
    local_ratings = [
        s.record.rating for s in local if s.record.rating is not None
    ]
    local_mean = _mean(local_ratings)
    reference_mean = _mean(reference_ratings)

    return QualityMetrics(
        avg_rating_local=(
            round_half_up(local_mean, 1) if local_mean is not None else None
        ),
        avg_rating_statewide=(
            round_half_up(reference_mean, 1) if reference_mean is not None else None
        ),
        sample_size_local=len(local_ratings),
        # compared against the unrounded mean
        percentile=rating_percentile(local_mean, reference_ratings),
    )
