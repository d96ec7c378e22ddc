from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class LuminanceField:
    """
    Per-pixel luminance, float64 of shape (H, W).
    Built once per frame and never written to afterwards.
    """
    values: np.ndarray

    def __post_init__(self):
        if self.values.ndim != 2:
            raise ValueError(f"luminance must be 2-D, got shape {self.values.shape}")
        # Freeze a view, not the caller's array.
        frozen = self.values.view()
        frozen.flags.writeable = False
        object.__setattr__(self, "values", frozen)

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])


@dataclass(frozen=True)
class EdgeField:
    """Final edge intensities, uint8 of shape (H, W). Border pixels are 0."""
    intensities: np.ndarray

    def __post_init__(self):
        if self.intensities.ndim != 2 or self.intensities.dtype != np.uint8:
            raise ValueError("edge intensities must be a 2-D uint8 array")

    @property
    def width(self) -> int:
        return int(self.intensities.shape[1])

    @property
    def height(self) -> int:
        return int(self.intensities.shape[0])
