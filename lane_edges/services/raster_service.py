from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union
import numpy as np

from ..models.pixel_grid import PixelGrid
from ..repositories.bitmap_repository import BitmapRepository


class RasterService:
    """I/O and pixel-access helpers.  No gradient logic."""
    def __init__(self, bitmap_repository: BitmapRepository | None = None):
        self.bitmap_repository = bitmap_repository or BitmapRepository()

    @staticmethod
    def create_grid(pixels: np.ndarray, path: Union[str, Path] = None) -> PixelGrid:
        return PixelGrid(pixels, path)

    def load(self, path: Union[str, Path]) -> PixelGrid:
        """Decode a single bitmap from disk into a PixelGrid."""
        return self.bitmap_repository.decode(path)

    def save(self, grid: PixelGrid, path: Union[str, Path] = None) -> Path:
        """
        Encode `grid` to `path`, or to the grid's own path when none is given.
        """
        target = path if path is not None else grid.path
        if target is None:
            raise ValueError("no destination path given and grid has no path")
        self.bitmap_repository.encode(grid, target)
        return Path(target)

    def stream_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Tuple[Path, PixelGrid]]:
        """
        Yield grids lazily instead of returning a gigantic list.
        """
        return self.bitmap_repository.iter_dir(folder, recursive=recursive, exts=exts)

    @staticmethod
    def get_dimensions(grid: PixelGrid) -> Tuple[int, int]:
        """(width, height) of the grid."""
        return grid.width, grid.height

    @staticmethod
    def get_pixel(grid: PixelGrid, x: int, y: int) -> Tuple[int, int, int]:
        return grid.get(x, y)

    @staticmethod
    def put_pixel(grid: PixelGrid, x: int, y: int, r: int, g: int, b: int) -> None:
        grid.put(x, y, r, g, b)
