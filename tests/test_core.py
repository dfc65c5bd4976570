import math

import numpy as np
import pytest

from vvdsp import core
from vvdsp.core import InvalidSizeError, OutOfRangeError, TrigFunction

X = [1, 2, 3, 4, 5]


def test_add_int():
    assert core.add_int(2, 3) == 5


def test_sum_min_max():
    assert core.total(X) == 15
    assert core.min_value(X) == 1
    assert core.max_value(X) == 5


def test_argmin_argmax():
    assert core.argmin(X) == 0
    assert core.argmax(X) == 4


def test_argmin_first_occurrence_on_ties():
    assert core.argmin([3, 1, 1, 2]) == 1
    assert core.argmax([5, 2, 5]) == 0


def test_cumsum():
    y = core.cumsum(X)
    assert y[4] == 15
    assert y.tolist() == [1, 3, 6, 10, 15]


def test_diff():
    d = core.diff(X)
    assert len(d) == 4
    assert d[0] == 1 and d[3] == 1


def test_diff_too_short():
    with pytest.raises(InvalidSizeError):
        core.diff([1.0])


def test_mean_and_var():
    assert core.mean(X) == pytest.approx(3.0)
    assert core.var(X) == pytest.approx(2.0)


def test_var_needs_two_samples():
    with pytest.raises(InvalidSizeError):
        core.var([4.0])


@pytest.mark.parametrize(
    "func",
    [core.total, core.mean, core.min_value, core.max_value, core.argmin, core.argmax, core.cumsum],
)
def test_empty_input_rejected(func):
    with pytest.raises(InvalidSizeError):
        func([])


def test_kahan_sum_is_accurate():
    values = [1.0] + [1e-16] * 10000
    assert core.total(values) == pytest.approx(1.0 + 1e-12, rel=1e-15)


def test_clamp():
    assert core.clamp(5.0, 0.0, 1.0) == 1.0
    assert core.clamp(-5.0, 0.0, 1.0) == 0.0
    assert core.clamp(0.5, 0.0, 1.0) == 0.5


def test_complex_helpers():
    assert core.cpx_abs(3 + 4j) == pytest.approx(5.0)
    assert core.cpx_phase(1j) == pytest.approx(math.pi / 2)
    z = core.cpx_from_polar(2.0, math.pi / 2)
    assert z.real == pytest.approx(0.0, abs=1e-12)
    assert z.imag == pytest.approx(2.0)


def test_polar_round_trip():
    z = 1.5 - 2.5j
    back = core.cpx_from_polar(core.cpx_abs(z), core.cpx_phase(z))
    assert back == pytest.approx(z)


def test_window_apply():
    out = core.window_apply([1, 2, 3, 4], [0.5, 1.0, 1.0, 0.5])
    assert out.tolist() == [0.5, 2.0, 3.0, 2.0]


def test_window_apply_length_mismatch():
    with pytest.raises(InvalidSizeError):
        core.window_apply([1, 2, 3], [1, 1])


def test_complex_multiply():
    out = core.complex_multiply([1 + 2j, 2j], [3 + 4j, 2j])
    assert out.tolist() == [(1 + 2j) * (3 + 4j), -4 + 0j]


def test_complex_multiply_empty():
    with pytest.raises(InvalidSizeError):
        core.complex_multiply([], [])


def test_trig_apply():
    x = [0.0, 0.3, 1.2]
    assert np.allclose(core.trig_apply(x, TrigFunction.SIN), np.sin(x))
    assert np.allclose(core.trig_apply(x, TrigFunction.COS), np.cos(x))
    assert np.allclose(core.trig_apply(x, 2), np.tan(x))


def test_trig_apply_bad_selector():
    with pytest.raises(OutOfRangeError):
        core.trig_apply([1.0], 3)