"""Per-thread policy for handling NaN and infinite values in input data."""

from __future__ import annotations

import enum
import threading
from contextlib import contextmanager
from typing import Iterable, Iterator

import numpy as np

from .core import NanInfError


class NanPolicy(enum.IntEnum):
    """How non-finite values are treated."""

    PROPAGATE = 0
    IGNORE = 1
    ERROR = 2
    CLAMP = 3


_state = threading.local()
_FLOAT_MAX = float(np.finfo(np.float64).max)


def set_nan_policy(policy: NanPolicy | int) -> None:
    """Set the policy for the current thread; unknown values leave it unchanged."""
    try:
        _state.policy = NanPolicy(policy)
    except ValueError:
        pass


def get_nan_policy() -> NanPolicy:
    """Return the policy in force for the current thread."""
    return getattr(_state, "policy", NanPolicy.PROPAGATE)


@contextmanager
def using_nan_policy(policy: NanPolicy | int) -> Iterator[NanPolicy]:
    """Temporarily switch the current thread's policy."""
    previous = get_nan_policy()
    set_nan_policy(policy)
    try:
        yield get_nan_policy()
    finally:
        _state.policy = previous


def apply_nan_policy(data: Iterable[float]) -> np.ndarray:
    """Return a copy of *data* with the current policy applied.

    IGNORE replaces NaN and infinities by zero, CLAMP replaces NaN by zero and
    infinities by the largest finite value of matching sign, and ERROR raises
    :class:`NanInfError` on the first non-finite value.
    """
    arr = np.array(data, dtype=np.float64)
    policy = get_nan_policy()
    if policy is NanPolicy.PROPAGATE or arr.size == 0:
        return arr
    bad = ~np.isfinite(arr)
    if not bad.any():
        return arr
    if policy is NanPolicy.ERROR:
        raise NanInfError("non-finite value in input")
    if policy is NanPolicy.IGNORE:
        arr[bad] = 0.0
    else:
        arr[np.isnan(arr)] = 0.0
        arr[np.isposinf(arr)] = _FLOAT_MAX
        arr[np.isneginf(arr)] = -_FLOAT_MAX
    return arr