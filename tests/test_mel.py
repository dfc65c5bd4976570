import math

import numpy as np
import pytest

from vvdsp.core import InvalidSizeError, OutOfRangeError
from vvdsp.mel import MelVariant, hz_to_mel, log_mel_spectrogram, mel_filterbank, mel_to_hz


@pytest.mark.parametrize("hz", [0.0, 1000.0, 2000.0, 4000.0, 8000.0])
def test_mel_round_trip(hz):
    assert abs(mel_to_hz(hz_to_mel(hz)) - hz) <= 1e-3


def test_negative_inputs_give_zero():
    assert hz_to_mel(-100.0) == 0.0
    assert mel_to_hz(-100.0) == 0.0


def test_hz_to_mel_known_value():
    assert hz_to_mel(700.0) == pytest.approx(2595.0 * math.log10(2.0))


def test_filterbank_shape_and_content():
    bank = mel_filterbank(512, 26, 16000.0, 0.0, 8000.0, MelVariant.HTK)
    assert bank.shape == (26, 257)
    assert np.any(bank > 0.0)
    assert np.all(bank >= 0.0)
    sums = bank.sum(axis=1)
    assert np.allclose(sums[sums > 0], 1.0)


def test_filterbank_rejects_fmax_above_nyquist():
    with pytest.raises(OutOfRangeError):
        mel_filterbank(512, 26, 16000.0, 0.0, 9000.0)


def test_filterbank_rejects_slaney():
    with pytest.raises(OutOfRangeError):
        mel_filterbank(512, 26, 16000.0, 0.0, 8000.0, MelVariant.SLANEY)


def test_filterbank_rejects_too_many_mels():
    with pytest.raises(InvalidSizeError):
        mel_filterbank(16, 9, 16000.0, 0.0, 8000.0)


def test_filterbank_rejects_bad_range():
    with pytest.raises(InvalidSizeError):
        mel_filterbank(512, 26, 16000.0, 100.0, 100.0)


def test_log_mel_values():
    power = [[1.0, 2.0], [3.0, 4.0]]
    bank = [[1.0, 0.0]]
    out = log_mel_spectrogram(power, bank, 0.0)
    assert out.shape == (2, 1)
    assert np.allclose(out[:, 0], np.log([1.0, 3.0]))


def test_log_mel_finite_for_decreasing_spectrum():
    bank = mel_filterbank(512, 26, 16000.0, 0.0, 8000.0)
    power = 1.0 / (1.0 + np.arange(257))
    out = log_mel_spectrogram(power, bank, 1e-10)
    assert out.shape == (1, 26)
    assert np.all(np.isfinite(out))


def test_log_mel_rejects_negative_epsilon():
    with pytest.raises(OutOfRangeError):
        log_mel_spectrogram([[1.0]], [[1.0]], -1.0)


def test_log_mel_rejects_bin_mismatch():
    with pytest.raises(InvalidSizeError):
        log_mel_spectrogram([[1.0, 2.0]], [[1.0, 0.0, 0.0]], 0.0)