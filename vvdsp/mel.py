"""Mel scale conversion, triangular Mel filterbanks and log-Mel spectrograms."""

from __future__ import annotations

import enum
import math
from typing import Iterable, Optional

import numpy as np

from .core import InvalidSizeError, OutOfRangeError


class MelVariant(enum.IntEnum):
    """Mel scale formula."""

    HTK = 0
    SLANEY = 1


def hz_to_mel(hz: float) -> float:
    """HTK Mel value of a frequency; negative input gives 0."""
    if hz < 0.0:
        return 0.0
    return 2595.0 * math.log10(1.0 + hz / 700.0)


def mel_to_hz(mel: float) -> float:
    """Frequency of an HTK Mel value; negative input gives 0."""
    if mel < 0.0:
        return 0.0
    return 700.0 * (10.0 ** (mel / 2595.0) - 1.0)


def mel_filterbank(
    n_fft: int,
    n_mels: int,
    sample_rate: float,
    fmin: float = 0.0,
    fmax: Optional[float] = None,
    variant: MelVariant | int = MelVariant.HTK,
) -> np.ndarray:
    """Triangular Mel filters as an array of shape ``(n_mels, n_fft // 2 + 1)``.

    Each non-empty filter is normalised so its weights sum to one.
    """
    if fmax is None:
        fmax = sample_rate / 2.0
    if n_fft <= 0 or n_mels <= 0 or sample_rate <= 0.0 or fmin < 0.0 or fmax <= fmin:
        raise InvalidSizeError("invalid filterbank dimensions or frequency range")
    if fmax > sample_rate / 2.0:
        raise OutOfRangeError("fmax exceeds the Nyquist frequency")
    if variant != MelVariant.HTK:
        raise OutOfRangeError("only the HTK Mel variant is supported")

    n_bins = n_fft // 2 + 1
    if n_mels >= n_bins:
        raise InvalidSizeError("n_mels must be smaller than the number of FFT bins")

    mel_points = np.linspace(hz_to_mel(fmin), hz_to_mel(fmax), n_mels + 2)
    hz_points = np.array([mel_to_hz(m) for m in mel_points.tolist()])
    fft_freqs = np.arange(n_bins) * sample_rate / n_fft
    edges = np.searchsorted(fft_freqs, hz_points, side="left")

    bank = np.zeros((n_mels, n_bins))
    for m in range(n_mels):
        left, center, right = hz_points[m : m + 3]
        li, ci, ri = edges[m : m + 3]
        if ci > li:
            bank[m, li:ci] = (fft_freqs[li:ci] - left) / (center - left)
        if ri > ci:
            bank[m, ci:ri] = (right - fft_freqs[ci:ri]) / (right - center)
        total = float(np.sum(bank[m]))
        if total > 0.0:
            bank[m] /= total
    return bank


def log_mel_spectrogram(
    power_spectrogram: Iterable[Iterable[float]],
    filterbank: Iterable[Iterable[float]],
    log_epsilon: float = 1e-10,
) -> np.ndarray:
    """Natural log of the Mel energies, shape ``(num_frames, n_mels)``.

    *power_spectrogram* has one row of FFT-bin powers per frame; a single
    one-dimensional frame is accepted too.
    """
    if power_spectrogram is None or filterbank is None:
        raise TypeError("inputs must not be None")
    power = np.atleast_2d(np.asarray(power_spectrogram, dtype=np.float64))
    bank = np.atleast_2d(np.asarray(filterbank, dtype=np.float64))
    if power.size == 0 or bank.size == 0:
        raise InvalidSizeError("inputs must not be empty")
    if power.shape[1] != bank.shape[1]:
        raise InvalidSizeError("spectrogram and filterbank bin counts differ")
    if log_epsilon < 0.0:
        raise OutOfRangeError("log_epsilon must be non-negative")
    return np.log(power @ bank.T + log_epsilon)