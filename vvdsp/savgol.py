"""Savitzky–Golay smoothing and differentiation filter."""

from __future__ import annotations

import enum
import math
from typing import Iterable

import numpy as np

from .core import DspError, InvalidSizeError, OutOfRangeError
from .nan_policy import apply_nan_policy

_MAX_COLS = 16
_MAX_WINDOW = 257


class SavgolMode(enum.IntEnum):
    """Edge extension used before filtering."""

    REFLECT = 0
    CONSTANT = 1
    NEAREST = 2
    WRAP = 3


def _normal_matrix(window_length: int, cols: int) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(A, A^T A)`` for the centred Vandermonde matrix A."""
    half = window_length // 2
    t = np.arange(window_length, dtype=np.float64) - half
    vander = np.ones((window_length, cols))
    for j in range(1, cols):
        vander[:, j] = vander[:, j - 1] * t
    return vander, vander.T @ vander


def _solve(matrix: np.ndarray, rhs: np.ndarray) -> np.ndarray:
    """Gauss-Jordan elimination with partial pivoting; raises on a zero pivot."""
    m = matrix.astype(np.float64, copy=True)
    b = np.array(rhs, dtype=np.float64, copy=True)
    if b.ndim == 1:
        b = b[:, None]
    n = m.shape[0]
    for k in range(n):
        piv = k + int(np.argmax(np.abs(m[k:, k])))
        if abs(m[piv, k]) == 0.0:
            raise DspError("singular system while building Savitzky-Golay kernel")
        if piv != k:
            m[[k, piv]] = m[[piv, k]]
            b[[k, piv]] = b[[piv, k]]
        diag = m[k, k]
        m[k] /= diag
        b[k] /= diag
        for r in range(n):
            if r != k:
                f = m[r, k]
                m[r] -= f * m[k]
                b[r] -= f * b[k]
    return b


def _smoothing_kernel(window_length: int, polyorder: int) -> np.ndarray:
    cols = polyorder + 1
    if cols > _MAX_COLS:
        raise OutOfRangeError("polyorder too large")
    vander, ata = _normal_matrix(window_length, cols)
    solution = _solve(ata, vander.T)
    kernel = solution[0].copy()
    s = float(np.sum(kernel))
    if s != 0.0:
        kernel *= 1.0 / s
    return kernel


def _derivative_kernel(window_length: int, polyorder: int, deriv: int, delta: float) -> np.ndarray:
    cols = polyorder + 1
    if cols > _MAX_COLS:
        raise OutOfRangeError("polyorder too large")
    vander, ata = _normal_matrix(window_length, cols)
    target = np.zeros(cols)
    target[deriv] = float(math.factorial(deriv))
    coeffs = _solve(ata, target)[:, 0]
    kernel = vander @ coeffs
    if deriv > 0:
        scale = float(delta) ** deriv
        if scale == 0.0:
            raise OutOfRangeError("delta too small for derivative scaling")
        kernel = kernel * (1.0 / scale)
    return kernel


def _pad(x: np.ndarray, pad: int, mode: SavgolMode) -> np.ndarray:
    n = x.size
    left = np.empty(pad)
    right = np.empty(pad)
    for i in range(pad):
        if mode is SavgolMode.REFLECT:
            left[pad - 1 - i] = x[min(i + 1, n - 1)]
            right[i] = x[n - 2 - i] if n >= 2 else x[n - 1]
        elif mode is SavgolMode.WRAP:
            left[pad - 1 - i] = x[(n - (i % n) - 1) % n]
            right[i] = x[i % n]
        else:
            left[pad - 1 - i] = x[0]
            right[i] = x[n - 1]
    return np.concatenate([left, x, right])


def savgol(
    y: Iterable[float],
    window_length: int,
    polyorder: int,
    deriv: int = 0,
    delta: float = 1.0,
    mode: SavgolMode | int = SavgolMode.REFLECT,
) -> np.ndarray:
    """Filter *y* with a Savitzky–Golay kernel.

    With ``deriv == 0`` the signal is smoothed; otherwise the ``deriv``-th
    derivative is estimated using sample spacing *delta*.  The current NaN
    policy is applied to both the input and the output.
    """
    if y is None:
        raise TypeError("input must not be None")
    data = np.asarray(y, dtype=np.float64).ravel()
    n = data.size
    if n == 0:
        raise InvalidSizeError("input must not be empty")
    if window_length <= 0 or window_length % 2 == 0:
        raise OutOfRangeError("window_length must be a positive odd number")
    if polyorder < 0:
        raise OutOfRangeError("polyorder must be non-negative")
    if deriv < 0 or deriv > polyorder:
        raise OutOfRangeError("deriv must lie in [0, polyorder]")
    if window_length > n:
        raise InvalidSizeError("window_length exceeds signal length")
    if deriv > 0 and not delta > 0:
        raise OutOfRangeError("delta must be positive for derivatives")
    mode = SavgolMode(mode)

    processed = apply_nan_policy(data)
    if window_length > _MAX_WINDOW:
        raise OutOfRangeError("window_length too large")

    if deriv == 0:
        kernel = _smoothing_kernel(window_length, polyorder)
    else:
        kernel = _derivative_kernel(window_length, polyorder, deriv, delta)

    padded = _pad(processed, window_length // 2, mode)
    output = np.correlate(padded, kernel, mode="valid")
    return apply_nan_policy(output)