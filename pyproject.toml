[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vvdsp"
version = "0.1.0"
description = "Digital signal processing toolkit: statistics, framing, FIR/IIR and Savitzky-Golay filters, spectral envelopes, mel filterbanks and WAV I/O"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "dsp",
    "audio",
    "signal-processing",
    "filter",
    "savitzky-golay",
    "lpc",
    "cepstrum",
    "mel",
    "wav",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["vvdsp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
