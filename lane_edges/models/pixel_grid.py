from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple
import operator
import numpy as np

from .errors import BoundsError


@dataclass
class PixelGrid:
    """
    Simple data object: RGB pixels (+ optional source path for bookkeeping).
    Row 0 is the visual top row, whatever order the file stored rows in.
    """
    pixels: np.ndarray # Shape (H, W, 3), dtype uint8, RGB order.
    path: Path | None = None # Source of the grid.

    def __post_init__(self):
        if not isinstance(self.pixels, np.ndarray):
            raise ValueError("pixels must be a numpy array")
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"pixels must have shape (H, W, 3), got {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"pixels must be uint8, got {self.pixels.dtype}")
        if self.pixels.shape[0] < 1 or self.pixels.shape[1] < 1:
            raise ValueError(f"grid must be at least 1x1, got {self.width}x{self.height}")
        if self.path is not None:
            self.path = Path(self.path)

    @classmethod
    def blank(cls, width: int, height: int, path: Path | None = None) -> PixelGrid:
        """All-black grid of the given size."""
        if width < 1 or height < 1:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        return cls(np.zeros((height, width, 3), dtype=np.uint8), path)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise BoundsError(
                f"pixel ({x}, {y}) outside {self.width}x{self.height} grid"
            )

    # ── Pixel accessors ──────────────────────────────────────────────
    def get(self, x: int, y: int) -> Tuple[int, int, int]:
        self._check(x, y)
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def put(self, x: int, y: int, r: int, g: int, b: int) -> None:
        """Overwrite the pixel at (x, y). Last write wins."""
        self._check(x, y)
        channels = tuple(operator.index(value) for value in (r, g, b))  # TypeError for floats
        for value in channels:
            if not 0 <= value <= 255:
                raise ValueError(f"channel value {value} outside [0, 255]")
        self.pixels[y, x] = channels

    def copy(self) -> PixelGrid:
        return PixelGrid(self.pixels.copy(), self.path)
