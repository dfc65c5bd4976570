"""Signal framing and overlap-add helpers for short-time processing."""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from .core import InvalidSizeError


def _reflect_index(idx: int, signal_len: int) -> int:
    """Map an out-of-range index back into the signal by mirror reflection."""
    if signal_len == 0:
        return 0
    if idx < 0:
        mirrored = -idx - 1
        if mirrored >= signal_len:
            period = 2 * signal_len
            mirrored %= period
            if mirrored >= signal_len:
                mirrored = period - 1 - mirrored
        return mirrored
    if idx >= signal_len:
        overflow = idx - signal_len
        reflected = signal_len - 1 - overflow
        if reflected < 0:
            reflected = -reflected - 1
            if reflected >= signal_len:
                period = 2 * signal_len
                reflected %= period
                if reflected >= signal_len:
                    reflected = period - 1 - reflected
        return min(max(reflected, 0), signal_len - 1)
    return idx


def get_num_frames(signal_len: int, frame_len: int, hop_len: int, center: bool = False) -> int:
    """Number of frames a signal yields.

    Centred framing gives ``ceil(signal_len / hop_len)`` frames; otherwise
    ``1 + (signal_len - frame_len) // hop_len``, or zero when the signal is
    shorter than one frame.  A zero hop length yields zero frames.
    """
    if hop_len == 0:
        return 0
    if center:
        return (signal_len + hop_len - 1) // hop_len
    if signal_len < frame_len:
        return 0
    return 1 + (signal_len - frame_len) // hop_len


def fetch_frame(
    signal: Iterable[float],
    frame_len: int,
    hop_len: int,
    frame_index: int,
    center: bool = False,
    window: Optional[Iterable[float]] = None,
) -> np.ndarray:
    """Extract one frame of *signal*, optionally multiplied by *window*.

    Centred frames are positioned around ``frame_index * hop_len`` and use
    reflection padding; non-centred frames start at that position and are
    zero-padded past the end of the signal.
    """
    if signal is None:
        raise TypeError("signal must not be None")
    sig = np.asarray(signal, dtype=np.float64).ravel()
    signal_len = sig.size
    if signal_len == 0 or frame_len <= 0 or hop_len <= 0:
        raise InvalidSizeError("signal, frame and hop lengths must be positive")

    win = None
    if window is not None:
        win = np.asarray(window, dtype=np.float64).ravel()
        if win.size < frame_len:
            raise InvalidSizeError("window is shorter than the frame")
        win = win[:frame_len]

    if center:
        start = frame_index * hop_len - frame_len // 2
        indices = [_reflect_index(start + i, signal_len) for i in range(frame_len)]
        frame = sig[indices]
    else:
        start = frame_index * hop_len
        frame = np.zeros(frame_len)
        lo = max(start, 0)
        hi = min(start + frame_len, signal_len)
        if hi > lo:
            frame[lo - start : hi - start] = sig[lo:hi]

    if win is not None:
        frame = frame * win
    return frame


def overlap_add(
    frame: Iterable[float],
    output: np.ndarray,
    hop_len: int,
    frame_index: int,
) -> np.ndarray:
    """Add *frame* into *output* at ``frame_index * hop_len``.

    Samples falling past the end of *output* are dropped.  A float64 NumPy
    array is updated in place; the updated array is also returned.
    """
    if frame is None:
        raise TypeError("frame must not be None")
    if output is None:
        raise TypeError("output must not be None")
    fr = np.asarray(frame, dtype=np.float64).ravel()
    out = np.asarray(output, dtype=np.float64)
    if out.size == 0 or fr.size == 0 or hop_len <= 0:
        raise InvalidSizeError("output, frame and hop lengths must be positive")
    start = frame_index * hop_len
    if start < out.size:
        count = min(fr.size, out.size - start)
        out[start : start + count] += fr[:count]
    return out