import struct
from pathlib import Path

import numpy as np
import pytest


def bmp_bytes(pixels: np.ndarray, *, bpp: int = 24, compression: int = 0,
              info_size: int = 40, padding_byte: int = 0, signature: bytes = b"BM",
              top_down: bool = False) -> bytes:
    """
    Assemble a BMP by hand from an (H, W, 3) RGB array, bottom-up unless
    `top_down` is set (stored with a negative height).

    Independent of the codec under test so the two can be checked against
    each other. Non-24 `bpp` values only change the header; the body stays
    24-bit, which is enough to exercise header validation.
    """
    height, width = pixels.shape[:2]
    stride = (width * 3 + 3) // 4 * 4
    rows = []
    order = range(height) if top_down else range(height - 1, -1, -1)
    for y in order:
        row = bytearray()
        for x in range(width):
            r, g, b = (int(v) for v in pixels[y, x])
            row += bytes((b, g, r))
        row += bytes([padding_byte]) * (stride - width * 3)
        rows.append(bytes(row))
    body = b"".join(rows)

    offset = 14 + info_size
    file_header = struct.pack("<2sIHHI", signature, offset + len(body), 0, 0, offset)
    info = struct.pack("<IiiHHIIiiII", info_size, width, -height if top_down else height, 1, bpp,
                       compression, len(body), 2835, 2835, 0, 0)
    info += bytes(info_size - 40)
    return file_header + info + body


@pytest.fixture
def write_bmp(tmp_path: Path):
    def _write(name: str, pixels: np.ndarray, **kwargs) -> Path:
        path = tmp_path / name
        path.write_bytes(bmp_bytes(pixels, **kwargs))
        return path
    return _write


@pytest.fixture
def random_rgb():
    rng = np.random.default_rng(1234)

    def _make(width: int, height: int) -> np.ndarray:
        return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)
    return _make
