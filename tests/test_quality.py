import random

import pytest

from market_insights.services.quality import benchmark_quality, rating_percentile
from support import nearby

# 100 statewide ratings, 20 each of 1..5
UNIFORM_REFERENCE = [float(r) for r in range(1, 6) for _ in range(20)]


def test_local_average_against_uniform_reference():
    local = [nearby(rating=4.2) for _ in range(12)]
    q = benchmark_quality(local, UNIFORM_REFERENCE)

    assert q.avg_rating_local == 4.2
    assert q.sample_size_local == 12
    assert q.avg_rating_statewide == 3.0
    assert q.percentile == 80


def test_unrated_local_stores_are_not_sampled():
    local = [nearby(rating=4.0), nearby(rating=None), nearby(rating=5.0)]
    q = benchmark_quality(local, UNIFORM_REFERENCE)
    assert q.sample_size_local == 2
    assert q.avg_rating_local == 4.5


def test_percentile_counts_strictly_lower_ratings_only():
    # mean 4.0; only the 3.0 is strictly below
    assert rating_percentile(4.0, [3.0, 4.0, 4.0, 5.0]) == 25


def test_empty_local_sample():
    q = benchmark_quality([nearby(rating=None)], UNIFORM_REFERENCE)
    assert q.avg_rating_local is None
    assert q.sample_size_local == 0
    assert q.percentile is None
    assert q.avg_rating_statewide == 3.0


def test_empty_reference_population():
    q = benchmark_quality([nearby(rating=4.0)], [])
    assert q.avg_rating_local == 4.0
    assert q.avg_rating_statewide is None
    assert q.percentile is None


def test_averages_round_half_up():
    # 4.25 would become 4.2 with round(); the client shows 4.3
    q = benchmark_quality([nearby(rating=4.0), nearby(rating=4.5)], [4.0, 4.5])
    assert q.avg_rating_local == 4.3
    assert q.avg_rating_statewide == 4.3


def test_percentile_bounds():
    rng = random.Random(9)
    for _ in range(200):
        local = [nearby(rating=rng.uniform(1, 5)) for _ in range(rng.randint(1, 15))]
        reference = [rng.uniform(1, 5) for _ in range(rng.randint(1, 60))]
        q = benchmark_quality(local, reference)
        assert 0 <= q.percentile <= 100


@pytest.mark.parametrize("mean,expected", [(0.5, 0), (5.5, 100), (3.0, 40)])
def test_percentile_extremes(mean, expected):
    assert rating_percentile(mean, UNIFORM_REFERENCE) == expected
