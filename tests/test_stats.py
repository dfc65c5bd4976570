import math

import numpy as np
import pytest

from vvdsp import core, stats
from vvdsp.core import InvalidSizeError

SIGNAL = [0.3, -1.2, 2.5, 0.7, -0.4, 1.9, -2.2, 0.05]


def test_rms_of_constant_magnitude():
    assert stats.rms([3.0, -3.0, 3.0]) == pytest.approx(3.0)


def test_rms_squared_is_biased_lag_zero_autocorrelation():
    r = stats.autocorrelation(SIGNAL, 3, biased=True)
    assert r[0] == pytest.approx(stats.rms(SIGNAL) ** 2)


def test_peak_matches_extremes():
    assert stats.peak(SIGNAL) == (min(SIGNAL), max(SIGNAL))


def test_crest_factor_silence_is_infinite():
    assert stats.crest_factor([0.0, 0.0, 0.0]) == math.inf


def test_crest_factor_constant():
    assert stats.crest_factor([2.0, -2.0, 2.0, 2.0]) == pytest.approx(1.0)


def test_crest_factor_at_least_one():
    assert stats.crest_factor(SIGNAL) >= 1.0


def test_zero_crossings_alternating():
    x = [1.0, -1.0, 1.0, -1.0, 1.0]
    assert stats.zero_crossing_rate(x) == len(x) - 1


def test_zero_crossings_through_zero_not_counted():
    assert stats.zero_crossing_rate([1.0, 0.0, -1.0]) == 0


def test_skewness_flips_sign_with_signal():
    neg = [-v for v in SIGNAL]
    assert stats.skewness(neg) == pytest.approx(-stats.skewness(SIGNAL))


def test_skewness_and_kurtosis_are_affine_invariant():
    scaled = [2.0 * v + 5.0 for v in SIGNAL]
    assert stats.skewness(scaled) == pytest.approx(stats.skewness(SIGNAL))
    assert stats.kurtosis(scaled) == pytest.approx(stats.kurtosis(SIGNAL))


def test_constant_signal_shape_measures():
    assert stats.skewness([4.0] * 5) == stats.kurtosis([4.0] * 5)
    assert stats.skewness([4.0] * 5) == 0.0


def test_shape_measures_size_limits():
    with pytest.raises(InvalidSizeError):
        stats.skewness([1.0, 2.0])
    with pytest.raises(InvalidSizeError):
        stats.kurtosis([1.0, 2.0, 3.0])


def test_unbiased_autocorrelation_of_constant():
    r = stats.autocorrelation([2.0] * 6, 4, biased=False)
    assert np.allclose(r, 4.0)


def test_autocorrelation_lags_past_signal_are_zero():
    r = stats.autocorrelation([1.0, 2.0], 5, biased=False)
    assert r[2:].tolist() == [0.0, 0.0, 0.0]


def test_cross_correlation_of_self_is_unbiased_autocorrelation():
    assert np.allclose(
        stats.cross_correlation(SIGNAL, SIGNAL, 5),
        stats.autocorrelation(SIGNAL, 5, biased=False),
    )


def test_correlation_rejects_zero_length():
    with pytest.raises(InvalidSizeError):
        stats.autocorrelation(SIGNAL, 0)
    with pytest.raises(InvalidSizeError):
        stats.cross_correlation(SIGNAL, SIGNAL, 0)


def test_sample_and_population_variance_relation():
    n = len(SIGNAL)
    assert stats.sample_variance(SIGNAL) * (n - 1) == pytest.approx(
        stats.population_variance(SIGNAL) * n
    )


def test_population_variance_matches_core_var():
    assert stats.population_variance(SIGNAL) == pytest.approx(core.var(SIGNAL))


def test_stddevs_are_square_roots():
    assert stats.sample_stddev(SIGNAL) ** 2 == pytest.approx(stats.sample_variance(SIGNAL))
    assert stats.population_stddev(SIGNAL) ** 2 == pytest.approx(
        stats.population_variance(SIGNAL)
    )


def test_sample_variance_needs_two_samples():
    with pytest.raises(InvalidSizeError):
        stats.sample_variance([1.0])


@pytest.mark.parametrize(
    "func", [stats.rms, stats.peak, stats.crest_factor, stats.zero_crossing_rate, stats.population_variance]
)
def test_empty_input_rejected(func):
    with pytest.raises(InvalidSizeError):
        func([])