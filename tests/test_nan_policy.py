import math
import threading

import numpy as np
import pytest

from vvdsp.core import NanInfError
from vvdsp.nan_policy import (
    NanPolicy,
    apply_nan_policy,
    get_nan_policy,
    set_nan_policy,
    using_nan_policy,
)

DIRTY = [1.5, math.nan, math.inf, -math.inf]
FLOAT_MAX = float(np.finfo(np.float64).max)


@pytest.fixture(autouse=True)
def _reset_policy():
    yield
    set_nan_policy(NanPolicy.PROPAGATE)


def test_default_policy_in_new_thread_is_propagate():
    seen = []
    set_nan_policy(NanPolicy.ERROR)
    worker = threading.Thread(target=lambda: seen.append(get_nan_policy()))
    worker.start()
    worker.join()
    assert seen == [NanPolicy.PROPAGATE]
    assert get_nan_policy() is NanPolicy.ERROR


def test_set_and_get():
    set_nan_policy(NanPolicy.CLAMP)
    assert get_nan_policy() is NanPolicy.CLAMP


def test_unknown_policy_value_is_ignored():
    set_nan_policy(NanPolicy.IGNORE)
    set_nan_policy(99)
    assert get_nan_policy() is NanPolicy.IGNORE


def test_propagate_keeps_values_and_copies():
    data = np.array(DIRTY)
    out = apply_nan_policy(data)
    assert out[0] == data[0]
    assert math.isnan(out[1])
    assert out[2] == math.inf and out[3] == -math.inf
    out[0] = -7.0
    assert data[0] == DIRTY[0]


def test_ignore_replaces_with_zero():
    with using_nan_policy(NanPolicy.IGNORE):
        out = apply_nan_policy(DIRTY)
    assert out.tolist() == [1.5, 0.0, 0.0, 0.0]


def test_clamp_limits_infinities():
    with using_nan_policy(NanPolicy.CLAMP):
        out = apply_nan_policy(DIRTY)
    assert out.tolist() == [1.5, 0.0, FLOAT_MAX, -FLOAT_MAX]


def test_error_raises():
    with using_nan_policy(NanPolicy.ERROR):
        with pytest.raises(NanInfError):
            apply_nan_policy(DIRTY)


@pytest.mark.parametrize("policy", list(NanPolicy))
def test_finite_data_unchanged(policy):
    clean = [0.25, -3.0, 8.5]
    with using_nan_policy(policy):
        assert apply_nan_policy(clean).tolist() == clean


def test_context_manager_restores_after_error():
    set_nan_policy(NanPolicy.IGNORE)
    with pytest.raises(NanInfError):
        with using_nan_policy(NanPolicy.ERROR) as active:
            assert active is NanPolicy.ERROR
            apply_nan_policy(DIRTY)
    assert get_nan_policy() is NanPolicy.IGNORE


def test_empty_input_passes_through():
    with using_nan_policy(NanPolicy.ERROR):
        out = apply_nan_policy([])
    assert out.size == 0