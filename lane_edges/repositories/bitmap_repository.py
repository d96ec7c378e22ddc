from pathlib import Path
from typing import Union, Iterable, Iterator, Tuple
import logging
import os
import tempfile
import numpy as np

from .. import config
from ..models.bitmap_header import BitmapHeader
from ..models.errors import FormatError, RasterError, RasterIOError
from ..models.pixel_grid import PixelGrid

logger = logging.getLogger(__name__)


class BitmapRepository:
    """
    Handles file I/O for PixelGrid entities stored as 24-bit BMP files.
    Files keep channels as BGR and rows bottom-up, or top-down when the
    stored height is negative. Grids are always top-down RGB, and encode
    always writes bottom-up.
    """
    def __init__(self, valid_exts: Iterable[str] | None = None):
        self.VALID_EXTS = {e.lower() for e in (valid_exts or config.VALID_IMAGE_EXTENSIONS)}

    # ---------- private helpers ----------
    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        try:
            with open(path, "rb") as fh:
                return fh.read()
        except OSError as err:
            raise FormatError(f"{path}: cannot open ({err.strerror or err})") from err

    @staticmethod
    def _rows_from_body(body: bytes, header: BitmapHeader) -> np.ndarray:
        """Strip padding, flip bottom-up files to top-down, swap BGR -> RGB."""
        stored = np.frombuffer(body, dtype=np.uint8, count=header.data_size)
        stored = stored.reshape(header.height, header.stride)
        bgr = stored[:, :header.width * 3].reshape(header.height, header.width, 3)
        if not header.top_down:
            bgr = bgr[::-1]
        return np.ascontiguousarray(bgr[:, :, ::-1])

    @staticmethod
    def _body_from_rows(pixels: np.ndarray) -> bytes:
        """Inverse of _rows_from_body: bottom-up BGR rows, zero-padded."""
        height, width = pixels.shape[:2]
        header = BitmapHeader.for_grid(width, height)
        stored = np.zeros((height, header.stride), dtype=np.uint8)
        stored[:, :width * 3] = pixels[::-1, :, ::-1].reshape(height, width * 3)
        return stored.tobytes()

    # ---------- public API ----------
    def decode(self, path: Union[str, Path]) -> PixelGrid:
        path = Path(path)
        data = self._read_bytes(path)

        try:
            header = BitmapHeader.parse(data)
        except FormatError as err:
            raise FormatError(f"{path}: {err}") from err

        body = data[header.pixel_offset:header.pixel_offset + header.data_size]
        if len(body) < header.data_size:
            raise FormatError(
                f"{path}: truncated pixel data ({len(body)} of {header.data_size} bytes)"
            )

        grid = PixelGrid(self._rows_from_body(body, header), path)
        logger.debug(f"Decoded {path}: {grid.width}x{grid.height}")
        return grid

    def encode(self, grid: PixelGrid, path: Union[str, Path]) -> None:
        """
        Write `grid` as a 24-bit BMP at `path`.
        The file is assembled in a temporary sibling and renamed into place,
        so a failed write never leaves a truncated bitmap behind.
        """
        path = Path(path)
        header = BitmapHeader.for_grid(grid.width, grid.height)
        payload = header.pack() + self._body_from_rows(grid.pixels)

        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "wb", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as fh:
                tmp_name = fh.name
                fh.write(payload)
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, path)
        except OSError as err:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise RasterIOError(f"{path}: cannot write ({err.strerror or err})") from err

        logger.debug(f"Encoded {path}: {grid.width}x{grid.height}, {len(payload)} bytes")

    def iter_dir(
        self,
        folder: Union[str, Path],
        *,
        recursive: bool = False,
        exts: Iterable[str] | None = None,
    ) -> Iterator[Tuple[Path, PixelGrid]]:
        """
        Yield (path, grid) pairs one at a time.  Nothing accumulates in memory.
        Files that fail to decode are logged and skipped.
        """
        folder = Path(folder)
        if not folder.is_dir():
            raise NotADirectoryError(f"{folder}: not a directory")

        allowed = {e.lower() for e in (exts or self.VALID_EXTS)}
        pattern = "**/*" if recursive else "*"

        # Listing is taken up front; files written while iterating are not seen.
        for p in sorted(folder.glob(pattern)):
            if p.suffix.lower() not in allowed or not p.is_file():
                continue
            try:
                grid = self.decode(p)
            except RasterError as err:
                logger.warning(f"Skipping {p.name}: {err}")
                continue
            yield p, grid
