"""Reading and writing of uncompressed WAV files as planar float channels."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Tuple, Union

import numpy as np

from .core import DspError, InvalidSizeError

_FORMAT_PCM = 1
_FORMAT_FLOAT = 3
_FMT_SIZE = 16
_MAX_CHANNELS = 8
_SUPPORTED_BITS = (16, 24, 32)

_RIFF = struct.Struct("<4sI4s")
_CHUNK = struct.Struct("<4sI")
_FMT = struct.Struct("<HHIIHH")

PathLike = Union[str, "os.PathLike[str]"]


class WavError(DspError, ValueError):
    """A WAV file could not be opened, parsed or written."""


@dataclass(frozen=True)
class WavInfo:
    """Layout of the audio held in a WAV file."""

    num_samples: int
    num_channels: int
    sample_rate: int
    bit_depth: int = 16
    is_float: bool = False


def _find_chunk(fp: BinaryIO, target: bytes) -> int:
    """Advance past chunks until *target* is found; return its size."""
    while True:
        raw = fp.read(_CHUNK.size)
        if len(raw) != _CHUNK.size:
            raise WavError(f"{target.decode('ascii').strip()} chunk not found")
        fourcc, size = _CHUNK.unpack(raw)
        if fourcc == target:
            return size
        fp.seek(size + (size & 1), os.SEEK_CUR)


def _parse_header(fp: BinaryIO) -> WavInfo:
    raw = fp.read(_RIFF.size)
    if len(raw) != _RIFF.size:
        raise WavError("Failed to read RIFF header")
    riff, _file_size, wave = _RIFF.unpack(raw)
    if riff != b"RIFF":
        raise WavError("File is not a RIFF file")
    if wave != b"WAVE":
        raise WavError("File is not a WAVE file")

    fmt_size = _find_chunk(fp, b"fmt ")
    if fmt_size < _FMT_SIZE:
        raise WavError("fmt chunk too small")
    raw = fp.read(_FMT.size)
    if len(raw) != _FMT.size:
        raise WavError("Failed to read format chunk")
    format_tag, channels, sample_rate, _byte_rate, _block_align, bits = _FMT.unpack(raw)
    if fmt_size > _FMT_SIZE:
        fp.seek(fmt_size - _FMT_SIZE, os.SEEK_CUR)

    if format_tag not in (_FORMAT_PCM, _FORMAT_FLOAT):
        raise WavError("Unsupported WAV format (only PCM and float supported)")
    if channels == 0 or channels > _MAX_CHANNELS:
        raise WavError("Invalid number of channels")
    if bits not in _SUPPORTED_BITS:
        raise WavError("Unsupported bit depth (only 16, 24, and 32 bits supported)")

    data_size = _find_chunk(fp, b"data")
    bytes_per_sample = bits // 8
    return WavInfo(
        num_samples=data_size // (bytes_per_sample * channels),
        num_channels=channels,
        sample_rate=sample_rate,
        bit_depth=bits,
        is_float=format_tag == _FORMAT_FLOAT,
    )


def _decode(raw: bytes, info: WavInfo) -> np.ndarray:
    """Convert interleaved sample bytes into a planar float64 array."""
    if info.is_float and info.bit_depth == 32:
        values = np.frombuffer(raw, dtype="<f4").astype(np.float64)
    elif info.bit_depth == 16:
        values = np.frombuffer(raw, dtype="<i2").astype(np.float64) * (1.0 / 32768.0)
    elif info.bit_depth == 24:
        b = np.frombuffer(raw, dtype=np.uint8).reshape(-1, 3).astype(np.int32)
        ints = b[:, 0] | (b[:, 1] << 8) | (b[:, 2] << 16)
        ints = np.where(ints & 0x800000, ints - 0x1000000, ints)
        values = ints.astype(np.float64) * (1.0 / 8388608.0)
    elif info.bit_depth == 32:
        values = np.frombuffer(raw, dtype="<i4").astype(np.float64) * (1.0 / 2147483648.0)
    else:
        raise WavError("Unsupported bit depth")
    return values.reshape(info.num_samples, info.num_channels).T.copy()


def _scale_clipped(planar: np.ndarray, scale: float, lo: int, hi: int) -> np.ndarray:
    clamped = np.clip(planar, -1.0, 1.0)
    return np.clip(np.trunc(clamped * scale), lo, hi).astype(np.int64)


def _encode(planar: np.ndarray, info: WavInfo) -> bytes:
    """Convert planar samples into interleaved sample bytes."""
    interleaved = planar.T.ravel()
    if info.is_float and info.bit_depth == 32:
        return interleaved.astype("<f4").tobytes()
    if info.bit_depth == 16:
        return _scale_clipped(interleaved, 32767.0, -32768, 32767).astype("<i2").tobytes()
    if info.bit_depth == 24:
        ints = _scale_clipped(interleaved, 8388607.0, -8388608, 8388607) & 0xFFFFFF
        out = np.empty((ints.size, 3), dtype=np.uint8)
        out[:, 0] = ints & 0xFF
        out[:, 1] = (ints >> 8) & 0xFF
        out[:, 2] = (ints >> 16) & 0xFF
        return out.tobytes()
    if info.bit_depth == 32:
        ints = _scale_clipped(interleaved, 2147483647.0, -2147483648, 2147483647)
        return ints.astype("<i4").tobytes()
    raise WavError("Unsupported bit depth")


def wav_info(path: PathLike) -> WavInfo:
    """Read only the header of a WAV file."""
    try:
        with open(path, "rb") as fp:
            return _parse_header(fp)
    except OSError as exc:
        raise WavError("Failed to open file for reading") from exc


def read_wav(path: PathLike) -> Tuple[np.ndarray, WavInfo]:
    """Read a WAV file.

    Returns an array of shape ``(num_channels, num_samples)`` with samples
    scaled to [-1, 1), together with the file's :class:`WavInfo`.
    """
    try:
        with open(path, "rb") as fp:
            info = _parse_header(fp)
            size = info.num_samples * info.num_channels * (info.bit_depth // 8)
            raw = fp.read(size)
    except OSError as exc:
        raise WavError("Failed to open file for reading") from exc
    if len(raw) != size:
        raise WavError("Failed to read audio data")
    return _decode(raw, info), info


def write_wav(path: PathLike, channels: Iterable[Iterable[float]], info: WavInfo) -> None:
    """Write planar *channels* to *path* in the layout described by *info*.

    Samples are clamped to [-1, 1] before integer conversion.
    """
    if channels is None or info is None:
        raise TypeError("channels and info must not be None")
    if info.num_channels <= 0 or info.num_samples == 0 or info.sample_rate <= 0:
        raise InvalidSizeError("Invalid WAV parameters")
    if info.bit_depth not in _SUPPORTED_BITS:
        raise WavError("Unsupported bit depth")
    planar = np.atleast_2d(np.asarray(channels, dtype=np.float64))
    if planar.ndim != 2 or planar.shape[0] < info.num_channels or planar.shape[1] < info.num_samples:
        raise InvalidSizeError("channel data is smaller than the described layout")
    planar = planar[: info.num_channels, : info.num_samples]

    bytes_per_sample = info.bit_depth // 8
    data_size = info.num_samples * info.num_channels * bytes_per_sample
    file_size = _RIFF.size - 8 + _CHUNK.size + _FMT.size + _CHUNK.size + data_size
    header = b"".join(
        [
            _RIFF.pack(b"RIFF", file_size, b"WAVE"),
            _CHUNK.pack(b"fmt ", _FMT_SIZE),
            _FMT.pack(
                _FORMAT_FLOAT if info.is_float else _FORMAT_PCM,
                info.num_channels,
                int(info.sample_rate),
                int(info.sample_rate * info.num_channels * bytes_per_sample),
                info.num_channels * bytes_per_sample,
                info.bit_depth,
            ),
            _CHUNK.pack(b"data", data_size),
        ]
    )
    payload = _encode(planar, info)
    try:
        with open(path, "wb") as fp:
            fp.write(header)
            fp.write(payload)
    except OSError as exc:
        raise WavError("Failed to open file for writing") from exc