"""FIR filter design and application: windowed-sinc low-pass, streaming, FFT and zero-phase."""

from __future__ import annotations

import enum
from typing import Iterable

import numpy as np

from .core import DspError, InvalidSizeError, OutOfRangeError


class WindowType(enum.IntEnum):
    """Window applied to the ideal low-pass response."""

    RECTANGULAR = 0
    HAMMING = 1
    HANNING = 2
    BLACKMAN = 3


def _design_window(n: int, window: WindowType | int) -> np.ndarray:
    try:
        kind = WindowType(window)
    except ValueError:
        raise DspError(f"unknown window type: {window!r}") from None
    if kind is WindowType.RECTANGULAR:
        return np.ones(n)
    idx = np.arange(n, dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore"):
        phase = 2.0 * np.pi * idx / np.float64(n - 1)
    if kind is WindowType.HAMMING:
        return 0.54 - 0.46 * np.cos(phase)
    if kind is WindowType.HANNING:
        return 0.5 - 0.5 * np.cos(phase)
    return 0.42 - 0.5 * np.cos(phase) + 0.08 * np.cos(2.0 * phase)


def _as_taps(h: Iterable[float], count: int) -> np.ndarray:
    taps = np.asarray(h, dtype=np.float64).ravel()
    if taps.size < count:
        raise InvalidSizeError("fewer coefficients than filter taps")
    return taps[:count]


def fir_design_lowpass(
    num_taps: int,
    fc: float,
    window: WindowType | int = WindowType.HAMMING,
) -> np.ndarray:
    """Design a windowed-sinc low-pass filter.

    *fc* is the cut-off normalised to the Nyquist frequency and must lie
    strictly between 0 and 1.
    """
    if num_taps <= 0:
        raise InvalidSizeError("num_taps must be positive")
    if not (0.0 < fc < 1.0):
        raise OutOfRangeError("fc must lie in (0, 1)")
    alpha = (num_taps - 1) / 2.0
    m = np.arange(num_taps, dtype=np.float64) - alpha
    ideal = 2.0 * fc * np.sinc(2.0 * fc * m)
    return ideal * _design_window(num_taps, window)


class FirState:
    """Streaming direct-form FIR filter that keeps input history between calls."""

    def __init__(self, num_taps: int) -> None:
        if num_taps <= 0:
            raise InvalidSizeError("num_taps must be positive")
        self.num_taps = num_taps
        self._history = np.zeros(num_taps - 1)

    def reset(self) -> None:
        """Clear the stored input history."""
        self._history[:] = 0.0

    def process(self, h: Iterable[float], x: Iterable[float]) -> np.ndarray:
        """Filter a block of samples with coefficients *h*, continuing from earlier blocks."""
        taps = _as_taps(h, self.num_taps)
        data = np.asarray(x, dtype=np.float64).ravel()
        n = data.size
        if n == 0:
            return np.zeros(0)
        lag = self.num_taps - 1
        ext = np.concatenate([self._history, data])
        y = np.convolve(ext, taps)[lag : lag + n]
        if lag:
            self._history = ext[-lag:].copy()
        return y


def fir_apply_fft(h: Iterable[float], x: Iterable[float]) -> np.ndarray:
    """Filter *x* with *h* by FFT convolution, zero initial conditions, same length as *x*."""
    taps = np.asarray(h, dtype=np.float64).ravel()
    if taps.size == 0:
        raise InvalidSizeError("filter needs at least one tap")
    data = np.asarray(x, dtype=np.float64).ravel()
    n = data.size
    lin_len = n + taps.size - 1
    nfft = 1
    while nfft < lin_len:
        nfft <<= 1
    spectrum = np.fft.rfft(data, nfft) * np.fft.rfft(taps, nfft)
    return np.fft.irfft(spectrum, nfft)[:n]


def _pad_symmetric(x: np.ndarray, pad: int) -> np.ndarray:
    n = x.size
    left = np.array([x[min(i, n - 1)] for i in range(pad)])[::-1]
    right = np.array([x[n - 1 - i] if i < n else x[0] for i in range(pad)])
    return np.concatenate([left, x, right]) if pad else x.copy()


def filtfilt_fir(coeffs: Iterable[float], x: Iterable[float]) -> np.ndarray:
    """Zero-phase FIR filtering: forward pass, then backward pass, with edge padding."""
    taps = np.asarray(coeffs, dtype=np.float64).ravel()
    if taps.size == 0:
        raise InvalidSizeError("filter needs at least one tap")
    data = np.asarray(x, dtype=np.float64).ravel()
    n = data.size
    if n == 0:
        return np.zeros(0)
    pad = taps.size - 1
    ext = _pad_symmetric(data, pad)
    ext_n = ext.size
    forward = np.convolve(ext, taps)[:ext_n]
    backward = np.convolve(forward[::-1], taps)[:ext_n][::-1]
    return backward[pad : pad + n].copy()