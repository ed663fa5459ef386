import pytest

from pyffa.analysis import consistency_score


def test_short_series_defaults_to_neutral():
    assert consistency_score([]) == 0.5
    assert consistency_score([14.0]) == 0.5


def test_identical_scores_are_fully_consistent():
    assert consistency_score([10.0, 10.0, 10.0]) == pytest.approx(1.0)


def test_uses_population_deviation():
    # mean 15, population stddev 5
    assert consistency_score([10.0, 20.0]) == pytest.approx(1 - 5 / 15)


def test_non_positive_mean_is_maximally_inconsistent():
    assert consistency_score([0.0, 0.0]) == 0.0
    assert consistency_score([-5.0, -10.0]) == 0.0


def test_high_variation_is_clamped():
    assert consistency_score([0.0, 0.0, 30.0]) == 0.0


@pytest.mark.parametrize(
    "scores",
    [[1.0, 2.0], [3.5, 28.0, 12.0, 0.0], [100.0, 99.0, 101.0], [-3.0, 4.0], [7.0, 7.0, 0.5]],
)
def test_score_is_bounded(scores):
    assert 0.0 <= consistency_score(scores) <= 1.0


def test_accepts_generators():
    assert consistency_score(float(x) for x in (10, 20)) == pytest.approx(1 - 5 / 15)
