"""Signal statistics: level, shape and correlation measures."""

from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .core import InvalidSizeError, _as_real


def rms(x: Iterable[float]) -> float:
    """Root-mean-square level."""
    arr = _as_real(x)
    return math.sqrt(float(np.dot(arr, arr)) / arr.size)


def peak(x: Iterable[float]) -> tuple[float, float]:
    """Return ``(minimum, maximum)`` of the samples."""
    values = _as_real(x).tolist()
    return min(values), max(values)


def crest_factor(x: Iterable[float]) -> float:
    """Peak absolute value divided by RMS; infinite for a silent signal."""
    arr = _as_real(x)
    mn, mx = peak(arr)
    top = mx if mx > -mn else -mn
    level = rms(arr)
    if level == 0.0:
        return math.inf
    return top / level


def zero_crossing_rate(x: Iterable[float]) -> int:
    """Number of sign changes between adjacent samples (zeros do not count)."""
    arr = _as_real(x)
    a, b = arr[:-1], arr[1:]
    return int(np.count_nonzero(((a > 0) & (b < 0)) | ((a < 0) & (b > 0))))


def skewness(x: Iterable[float]) -> float:
    """Population skewness from a single streaming pass."""
    arr = _as_real(x)
    n = arr.size
    if n < 3:
        raise InvalidSizeError("skewness needs at least three samples")
    m = m2 = m3 = 0.0
    for k, xi in enumerate(arr.tolist(), start=1):
        delta = xi - m
        delta_n = delta / k
        term1 = delta * delta_n * (k - 1)
        m3 += term1 * delta_n * (k - 2) - 3.0 * delta_n * m2
        m2 += term1
        m += delta_n
    variance = m2 / n
    if variance <= 0.0:
        return 0.0
    return (m3 / n) / variance**1.5


def kurtosis(x: Iterable[float]) -> float:
    """Excess kurtosis from a single streaming pass."""
    arr = _as_real(x)
    n = arr.size
    if n < 4:
        raise InvalidSizeError("kurtosis needs at least four samples")
    m = m2 = m3 = m4 = 0.0
    for k, xi in enumerate(arr.tolist(), start=1):
        delta = xi - m
        delta_n = delta / k
        delta_n2 = delta_n * delta_n
        term1 = delta * delta_n * (k - 1)
        m4 += term1 * delta_n2 * (k * k - 3.0 * k + 3.0) + 6.0 * delta_n2 * m2 - 4.0 * delta_n * m3
        m3 += term1 * delta_n * (k - 2) - 3.0 * delta_n * m2
        m2 += term1
        m += delta_n
    variance = m2 / n
    if variance <= 0.0:
        return 0.0
    return (m4 / n) / (variance * variance) - 3.0


def autocorrelation(x: Iterable[float], r_len: int, biased: bool = True) -> np.ndarray:
    """Autocorrelation for lags ``0 .. r_len-1``.

    The biased estimate divides by the signal length, the unbiased one by the
    number of overlapping products.  Lags beyond the signal give zero.
    """
    arr = _as_real(x)
    if r_len <= 0:
        raise InvalidSizeError("r_len must be positive")
    n = arr.size
    r = np.zeros(r_len)
    for lag in range(min(r_len, n)):
        count = n - lag
        acc = float(np.dot(arr[:count], arr[lag:]))
        r[lag] = acc / n if biased else acc / count
    return r


def cross_correlation(x: Iterable[float], y: Iterable[float], r_len: int) -> np.ndarray:
    """Cross-correlation with *y* delayed by lags ``0 .. r_len-1``, normalised by overlap."""
    ax = _as_real(x)
    ay = _as_real(y)
    if r_len <= 0:
        raise InvalidSizeError("r_len must be positive")
    r = np.zeros(r_len)
    for lag in range(r_len):
        count = min(ax.size, ay.size - lag)
        if count <= 0:
            continue
        r[lag] = float(np.dot(ax[:count], ay[lag : lag + count])) / count
    return r


def _sum_sq_dev(arr: np.ndarray) -> float:
    centred = arr - float(np.sum(arr)) / arr.size
    return float(np.dot(centred, centred))


def sample_variance(x: Iterable[float]) -> float:
    """Unbiased variance (divides by ``n - 1``)."""
    arr = _as_real(x)
    if arr.size <= 1:
        raise InvalidSizeError("sample variance needs at least two samples")
    return _sum_sq_dev(arr) / (arr.size - 1)


def sample_stddev(x: Iterable[float]) -> float:
    """Square root of the unbiased variance."""
    return math.sqrt(sample_variance(x))


def population_variance(x: Iterable[float]) -> float:
    """Population variance (divides by ``n``)."""
    arr = _as_real(x)
    return _sum_sq_dev(arr) / arr.size


def population_stddev(x: Iterable[float]) -> float:
    """Square root of the population variance."""
    return math.sqrt(population_variance(x))