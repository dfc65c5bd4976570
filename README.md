# vvdsp

A small digital signal processing library for audio analysis, built on NumPy.

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## What it covers

- `vvdsp.core`: basic statistics (`total` with Kahan summation, `mean`,
  `var`, `min_value`, `max_value`, `argmin`, `argmax`), `cumsum`, `diff`,
  `clamp`, complex helpers (`cpx_abs`, `cpx_phase`, `cpx_from_polar`), and
  element-wise `window_apply`, `complex_multiply` and `trig_apply`
  (selected with `TrigFunction`).
- `vvdsp.stats`: `rms`, `peak`, `crest_factor`, `zero_crossing_rate`,
  `skewness`, `kurtosis`, `autocorrelation`, `cross_correlation`, and
  `sample_variance`, `sample_stddev`, `population_variance`,
  `population_stddev`.
- `vvdsp.nan_policy`: a per-thread choice of how NaN and infinite values are
  handled (`NanPolicy` with `PROPAGATE`, `IGNORE`, `ERROR`, `CLAMP`;
  `set_nan_policy`, `get_nan_policy`, the `using_nan_policy` context manager,
  and `apply_nan_policy`).
- `vvdsp.framing`: `get_num_frames`, `fetch_frame` (zero padding, or
  reflection padding for centred frames) and `overlap_add` for STFT-style
  analysis and synthesis.
- `vvdsp.savgol`: Savitzky–Golay smoothing and derivatives (`savgol`, with
  edge modes in `SavgolMode`); the current NaN policy is applied to input and
  output.
- `vvdsp.fir`: windowed-sinc low-pass design (`fir_design_lowpass`,
  `WindowType`), the streaming `FirState`, FFT convolution (`fir_apply_fft`)
  and zero-phase `filtfilt_fir`.
- `vvdsp.iir`: `Biquad` sections in direct form II transposed and
  `iir_apply` for cascades.
- `vvdsp.envelope`: real cepstrum (`cepstrum_real`), minimum-phase
  reconstruction (`minphase_from_cepstrum`, `icepstrum_minphase`), LPC via
  Levinson-Durbin (`autocorr`, `levinson`, `lpc`) and the all-pole magnitude
  spectrum (`lpspec`).
- `vvdsp.mel`: HTK mel scale (`hz_to_mel`, `mel_to_hz`), triangular
  `mel_filterbank` and `log_mel_spectrogram`.
- `vvdsp.wav`: read and write 16/24/32-bit PCM and 32-bit float WAV files
  (`read_wav`, `write_wav`, `wav_info`, `WavInfo`).

## Example

```python
import numpy as np
from vvdsp.fir import WindowType, fir_design_lowpass, filtfilt_fir
from vvdsp.framing import get_num_frames, fetch_frame, overlap_add
from vvdsp.savgol import SavgolMode, savgol
from vvdsp.wav import WavInfo, read_wav, write_wav

x = np.sin(np.linspace(0, 20, 1000)) + 0.1 * np.random.randn(1000)

h = fir_design_lowpass(31, 0.1, WindowType.HAMMING)
smooth = filtfilt_fir(h, x)

sg = savgol(x, 11, 3, 0, 1.0, SavgolMode.REFLECT)

out = np.zeros(len(x))
for i in range(get_num_frames(len(x), 256, 128, False)):
    frame = fetch_frame(x, 256, 128, i, False, None)
    overlap_add(frame, out, 128, i)  # updates `out` in place

info = WavInfo(num_samples=len(x), num_channels=1, sample_rate=16000, bit_depth=16)
write_wav("out.wav", [smooth], info)
channels, info = read_wav("out.wav")  # channels has shape (1, 1000)
```

Errors are raised as exceptions derived from `vvdsp.core.DspError`, such as
`InvalidSizeError`, `OutOfRangeError` and `NanInfError`; WAV problems raise
`vvdsp.wav.WavError`.

## What it does not do

- There is no sample-rate conversion or fractional-position interpolation.
- Only the HTK mel formula is available; `MelVariant.SLANEY` is rejected. There
  is no MFCC step beyond the log-mel spectrogram.
- WAV support covers plain PCM and float files only, not compressed or
  extensible formats.
- There is no command-line tool; the package is a library only.