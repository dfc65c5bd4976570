"""Spectral envelope tools: real cepstrum, minimum-phase reconstruction and LPC."""

from __future__ import annotations

from typing import Iterable

import numpy as np

from .core import DspError, InvalidSizeError

_LOG_FLOOR = 1e-12


def _as_array(x: Iterable[float]) -> np.ndarray:
    if x is None:
        raise TypeError("input must not be None")
    arr = np.asarray(x, dtype=np.float64).ravel()
    if arr.size == 0:
        raise InvalidSizeError("input must not be empty")
    return arr


def _causal_window(c: np.ndarray) -> np.ndarray:
    """Fold a real cepstrum onto its causal part: c[0], 2*c[1..n/2-1], zeros after."""
    n = c.size
    folded = np.zeros(n, dtype=np.complex128)
    folded[0] = c[0]
    half = n // 2
    if half > 1:
        folded[1:half] = 2.0 * c[1:half]
    return folded


def cepstrum_real(x: Iterable[float]) -> np.ndarray:
    """Real cepstrum: inverse FFT of the log magnitude spectrum."""
    data = _as_array(x)
    spectrum = np.fft.fft(data)
    log_mag = np.log(np.abs(spectrum) + _LOG_FLOOR)
    return np.fft.ifft(log_mag.astype(np.complex128)).real


def minphase_from_cepstrum(c: Iterable[float]) -> np.ndarray:
    """Minimum-phase magnitude spectrum obtained from a real cepstrum."""
    cep = _as_array(c)
    h = np.fft.fft(_causal_window(cep))
    return np.exp(h.real).astype(np.complex128)


def icepstrum_minphase(c: Iterable[float]) -> np.ndarray:
    """Minimum-phase time signal reconstructed from a real cepstrum."""
    spectrum = minphase_from_cepstrum(c)
    return np.fft.ifft(spectrum).real


def autocorr(x: Iterable[float], order: int) -> np.ndarray:
    """Unnormalised autocorrelation for lags ``0 .. order``."""
    data = _as_array(x)
    if order < 0 or order + 1 > data.size:
        raise InvalidSizeError("order must be less than the signal length")
    n = data.size
    return np.array([float(np.dot(data[: n - k], data[k:])) for k in range(order + 1)])


def levinson(r: Iterable[float], order: int) -> tuple[np.ndarray, float]:
    """Levinson-Durbin recursion.

    Returns the prediction polynomial ``a`` (``a[0] == 1``) of length
    ``order + 1`` and the final prediction error.
    """
    corr = _as_array(r)
    if order < 0 or corr.size < order + 1:
        raise InvalidSizeError("autocorrelation is shorter than order + 1")
    e = float(corr[0])
    if e <= 0.0:
        raise DspError("zero-lag autocorrelation must be positive")
    a_prev = np.zeros(order + 1)
    for m in range(1, order + 1):
        acc = float(corr[m]) + float(np.dot(a_prev[1:m], corr[m - 1 : 0 : -1]))
        k = -acc / e
        a = a_prev.copy()
        a[0] = 1.0
        a[m] = k
        a[1:m] = a_prev[1:m] + k * a_prev[m - 1 : 0 : -1]
        e *= 1.0 - k * k
        a_prev = a
    return a_prev, e


def lpc(x: Iterable[float], order: int) -> tuple[np.ndarray, float]:
    """Linear prediction coefficients and prediction error of *x*."""
    return levinson(autocorr(x, order), order)


def lpspec(a: Iterable[float], order: int, gain: float, nfft: int) -> np.ndarray:
    """Magnitude of the all-pole model ``gain / |A(e^jw)|`` at *nfft* equally spaced bins."""
    coeffs = _as_array(a)
    if order < 0 or coeffs.size < order + 1:
        raise InvalidSizeError("coefficients are shorter than order + 1")
    if nfft <= 0:
        return np.zeros(0)
    theta = 2.0 * np.pi * np.arange(nfft) / nfft
    m = np.arange(1, order + 1)
    angles = np.outer(theta, m)
    re = 1.0 - np.cos(angles) @ coeffs[1 : order + 1]
    im = -(np.sin(angles) @ coeffs[1 : order + 1])
    den = np.sqrt(re * re + im * im)
    mag = np.zeros(nfft)
    positive = den > 0.0
    mag[positive] = gain / den[positive]
    return mag