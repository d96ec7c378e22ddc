from typing import Tuple
import logging
import numpy as np

from ..models.fields import EdgeField, LuminanceField
from ..models.pixel_grid import PixelGrid

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights
R_WEIGHT = 0.299
G_WEIGHT = 0.587
B_WEIGHT = 0.114

MAX_INTENSITY = 255


class GradientService:
    """
    Sobel edge strength over a PixelGrid.

    The kernel pair is fixed at 3x3.  Border pixels have no full
    neighbourhood and are written as 0.  Inputs are never modified;
    every stage returns a fresh array.
    """

    @staticmethod
    def compute_luminance(grid: PixelGrid) -> LuminanceField:
        rgb = grid.pixels.astype(np.float64)
        values = R_WEIGHT * rgb[:, :, 0] + G_WEIGHT * rgb[:, :, 1] + B_WEIGHT * rgb[:, :, 2]
        return LuminanceField(values)

    @staticmethod
    def compute_sums(field: LuminanceField) -> Tuple[np.ndarray, np.ndarray]:
        """
        Raw horizontal and vertical Sobel responses, float64 of shape (H, W).

        Returns:
            (sum_x, sum_y): zero on the one-pixel border.
        """
        lum = field.values
        sum_x = np.zeros(lum.shape, dtype=np.float64)
        sum_y = np.zeros(lum.shape, dtype=np.float64)
        if field.height < 3 or field.width < 3:
            return sum_x, sum_y

        # 3x3 neighbourhood of every interior pixel, as shifted views
        top_l, top_c, top_r = lum[:-2, :-2], lum[:-2, 1:-1], lum[:-2, 2:]
        mid_l, mid_r = lum[1:-1, :-2], lum[1:-1, 2:]
        bot_l, bot_c, bot_r = lum[2:, :-2], lum[2:, 1:-1], lum[2:, 2:]

        sum_x[1:-1, 1:-1] = (top_r + 2 * mid_r + bot_r) - (top_l + 2 * mid_l + bot_l)
        sum_y[1:-1, 1:-1] = (top_l + 2 * top_c + top_r) - (bot_l + 2 * bot_c + bot_r)
        return sum_x, sum_y

    def compute_gradients(self, field: LuminanceField) -> EdgeField:
        sum_x, sum_y = self.compute_sums(field)
        magnitude = np.sqrt(sum_x * sum_x + sum_y * sum_y)

        # Truncate, halve with integer division, then saturate at 255.
        halved = np.floor(magnitude).astype(np.int64) // 2
        intensities = np.clip(halved, 0, MAX_INTENSITY).astype(np.uint8)
        return EdgeField(intensities)

    @staticmethod
    def to_pixel_grid(edges: EdgeField) -> PixelGrid:
        """Grayscale-as-RGB: the intensity goes into all three channels."""
        pixels = np.repeat(edges.intensities[:, :, np.newaxis], 3, axis=2)
        return PixelGrid(np.ascontiguousarray(pixels))

    def detect(self, grid: PixelGrid) -> PixelGrid:
        """Luminance -> Sobel magnitude -> new grid.  `grid` is left untouched."""
        field = self.compute_luminance(grid)
        edges = self.compute_gradients(field)
        logger.debug(
            f"Edge map {edges.width}x{edges.height}: "
            f"max={int(edges.intensities.max())}, "
            f"saturated={int((edges.intensities == MAX_INTENSITY).sum())}"
        )
        return self.to_pixel_grid(edges)
