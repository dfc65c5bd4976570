"""Biquad sections and cascaded IIR filtering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np


@dataclass
class Biquad:
    """Second-order section in direct form II transposed (``a0`` is 1)."""

    b0: float
    b1: float
    b2: float
    a1: float
    a2: float
    z1: float = field(default=0.0, init=False)
    z2: float = field(default=0.0, init=False)

    def reset(self) -> None:
        """Clear the internal state."""
        self.z1 = 0.0
        self.z2 = 0.0

    def process(self, x: float) -> float:
        """Filter one sample."""
        y = self.b0 * x + self.z1
        self.z1 = self.b1 * x - self.a1 * y + self.z2
        self.z2 = self.b2 * x - self.a2 * y
        return y


def iir_apply(biquads: Sequence[Biquad], x: Iterable[float]) -> np.ndarray:
    """Run every sample through the cascade of *biquads*, updating their state."""
    if biquads is None:
        raise TypeError("biquads must not be None")
    out = []
    for v in np.asarray(x, dtype=np.float64).ravel().tolist():
        for section in biquads:
            v = section.process(v)
        out.append(v)
    return np.array(out, dtype=np.float64)