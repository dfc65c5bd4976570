"""Signal processing for audio analysis: statistics, framing, filters, envelopes, mel features and WAV I/O."""

__version__ = "0.1.0"