"""Basic real and complex helpers: sums, extrema, running sums and element-wise maths."""

from __future__ import annotations

import enum
import math
from typing import Iterable

import numpy as np


class DspError(Exception):
    """Base class for every error raised by the package."""


class InvalidSizeError(DspError, ValueError):
    """An input is empty or has a length the operation cannot use."""


class OutOfRangeError(DspError, ValueError):
    """A parameter lies outside its allowed range."""


class NanInfError(DspError, ArithmeticError):
    """Non-finite data was met while the NaN policy asks for an error."""


class TrigFunction(enum.IntEnum):
    """Element-wise trigonometric function selector."""

    SIN = 0
    COS = 1
    TAN = 2


_TRIG = {
    TrigFunction.SIN: np.sin,
    TrigFunction.COS: np.cos,
    TrigFunction.TAN: np.tan,
}


def _as_real(x: Iterable[float]) -> np.ndarray:
    """Return *x* as a flat float64 array, rejecting empty input."""
    arr = np.asarray(x, dtype=np.float64).ravel()
    if arr.size == 0:
        raise InvalidSizeError("input must not be empty")
    return arr


def add_int(a: int, b: int) -> int:
    """Return the sum of two integers."""
    return a + b


def cpx_abs(z: complex) -> float:
    """Magnitude of a complex number, computed without overflow."""
    return math.hypot(z.real, z.imag)


def cpx_phase(z: complex) -> float:
    """Phase angle of a complex number in radians."""
    return math.atan2(z.imag, z.real)


def cpx_from_polar(r: float, theta: float) -> complex:
    """Build a complex number from magnitude and angle."""
    return complex(math.cos(theta) * r, math.sin(theta) * r)


def total(x: Iterable[float]) -> float:
    """Sum of the samples using compensated (Kahan) summation."""
    s = 0.0
    c = 0.0
    for v in _as_real(x).tolist():
        y = v - c
        t = s + y
        c = (t - s) - y
        s = t
    return s


def mean(x: Iterable[float]) -> float:
    """Arithmetic mean of the samples."""
    arr = _as_real(x)
    return total(arr) / arr.size


def var(x: Iterable[float]) -> float:
    """Population variance computed with Welford's algorithm."""
    arr = _as_real(x)
    if arr.size < 2:
        raise InvalidSizeError("variance needs at least two samples")
    m = 0.0
    m2 = 0.0
    for k, xk in enumerate(arr.tolist(), start=1):
        delta = xk - m
        m += delta / k
        m2 += delta * (xk - m)
    return m2 / arr.size


def min_value(x: Iterable[float]) -> float:
    """Smallest sample."""
    return min(_as_real(x).tolist())


def max_value(x: Iterable[float]) -> float:
    """Largest sample."""
    return max(_as_real(x).tolist())


def argmin(x: Iterable[float]) -> int:
    """Index of the first smallest sample."""
    values = _as_real(x).tolist()
    return min(range(len(values)), key=values.__getitem__)


def argmax(x: Iterable[float]) -> int:
    """Index of the first largest sample."""
    values = _as_real(x).tolist()
    return max(range(len(values)), key=values.__getitem__)


def cumsum(x: Iterable[float]) -> np.ndarray:
    """Running sum of the samples."""
    return np.cumsum(_as_real(x))


def diff(x: Iterable[float]) -> np.ndarray:
    """First difference ``x[i] - x[i-1]``; the result is one shorter."""
    arr = _as_real(x)
    if arr.size < 2:
        raise InvalidSizeError("diff needs at least two samples")
    return np.diff(arr)


def clamp(v: float, lo: float, hi: float) -> float:
    """Limit *v* to the closed range [lo, hi]."""
    if v < lo:
        return lo
    if v > hi:
        return hi
    return v


def window_apply(x: Iterable[float], window: Iterable[float]) -> np.ndarray:
    """Multiply a signal by a window of the same length."""
    arr = _as_real(x)
    win = _as_real(window)
    if win.size != arr.size:
        raise InvalidSizeError("window length must match signal length")
    return arr * win


def complex_multiply(a: Iterable[complex], b: Iterable[complex]) -> np.ndarray:
    """Element-wise product of two complex sequences of equal length."""
    ca = np.asarray(a, dtype=np.complex128).ravel()
    cb = np.asarray(b, dtype=np.complex128).ravel()
    if ca.size == 0 or cb.size == 0:
        raise InvalidSizeError("input must not be empty")
    if ca.size != cb.size:
        raise InvalidSizeError("inputs must have the same length")
    return ca * cb


def trig_apply(x: Iterable[float], func: TrigFunction | int) -> np.ndarray:
    """Apply sin, cos or tan to every sample."""
    arr = _as_real(x)
    try:
        selected = TrigFunction(func)
    except ValueError:
        raise OutOfRangeError(f"unknown trigonometric function: {func!r}") from None
    return _TRIG[selected](arr)