from __future__ import annotations
from dataclasses import dataclass
import struct

from .errors import FormatError

SIGNATURE = b"BM"
FILE_HEADER = struct.Struct("<2sIHHI")       # signature, file size, reserved x2, pixel offset
INFO_HEADER = struct.Struct("<IiiHHIIiiII")  # BITMAPINFOHEADER
FILE_HEADER_SIZE = FILE_HEADER.size          # 14
INFO_HEADER_SIZE = INFO_HEADER.size          # 40
HEADER_SIZE = FILE_HEADER_SIZE + INFO_HEADER_SIZE

BITS_PER_PIXEL = 24
BI_RGB = 0
PIXELS_PER_METER = 2835  # 72 dpi


def row_stride(width: int) -> int:
    """Bytes per stored row: width * 3 rounded up to a multiple of 4."""
    return (width * 3 + 3) // 4 * 4


@dataclass
class BitmapHeader:
    """
    Value-object for the 14-byte file header plus the 40-byte info header.
    Only the fields this codec cares about are validated.
    """
    width: int
    height: int                  # row count, always positive
    top_down: bool = False       # stored height was negative
    bits_per_pixel: int = BITS_PER_PIXEL
    compression: int = BI_RGB
    pixel_offset: int = HEADER_SIZE
    info_size: int = INFO_HEADER_SIZE
    file_size: int = 0
    planes: int = 1
    image_size: int = 0
    x_ppm: int = PIXELS_PER_METER
    y_ppm: int = PIXELS_PER_METER
    colors_used: int = 0
    colors_important: int = 0

    @property
    def stride(self) -> int:
        return row_stride(self.width)

    @property
    def data_size(self) -> int:
        return self.stride * self.height

    # ── Construction ─────────────────────────────────────────────────
    @classmethod
    def for_grid(cls, width: int, height: int) -> BitmapHeader:
        """Header for a freshly encoded 24-bit, bottom-up, uncompressed file."""
        header = cls(width=width, height=height)
        header.image_size = header.data_size
        header.file_size = HEADER_SIZE + header.data_size
        return header

    @classmethod
    def parse(cls, data: bytes) -> BitmapHeader:
        """
        Parse and validate the headers at the start of `data`.
        Raises FormatError for anything other than an uncompressed 24-bit bitmap.
        """
        if len(data) < HEADER_SIZE:
            raise FormatError(f"truncated header ({len(data)} of {HEADER_SIZE} bytes)")

        signature, file_size, _, _, pixel_offset = FILE_HEADER.unpack_from(data, 0)
        if signature != SIGNATURE:
            raise FormatError(f"bad signature {signature!r}, expected {SIGNATURE!r}")

        (info_size, width, height, planes, bpp, compression, image_size,
         x_ppm, y_ppm, colors_used, colors_important) = INFO_HEADER.unpack_from(data, FILE_HEADER_SIZE)

        if info_size < INFO_HEADER_SIZE:
            raise FormatError(f"unsupported info header size {info_size}")
        if bpp != BITS_PER_PIXEL:
            raise FormatError(f"unsupported color depth {bpp} bpp, expected {BITS_PER_PIXEL}")
        if compression != BI_RGB:
            raise FormatError(f"unsupported compression type {compression}")
        if planes != 1:
            raise FormatError(f"unsupported plane count {planes}")
        if width <= 0 or height == 0:
            raise FormatError(f"invalid dimensions {width}x{height}")
        if pixel_offset < FILE_HEADER_SIZE + info_size:
            raise FormatError(f"pixel data offset {pixel_offset} overlaps the header")

        return cls(
            width=width,
            height=abs(height),
            top_down=height < 0,
            bits_per_pixel=bpp,
            compression=compression,
            pixel_offset=pixel_offset,
            info_size=info_size,
            file_size=file_size,
            planes=planes,
            image_size=image_size,
            x_ppm=x_ppm,
            y_ppm=y_ppm,
            colors_used=colors_used,
            colors_important=colors_important,
        )

    def pack(self) -> bytes:
        stored_height = -self.height if self.top_down else self.height
        return FILE_HEADER.pack(
            SIGNATURE, self.file_size, 0, 0, self.pixel_offset
        ) + INFO_HEADER.pack(
            self.info_size, self.width, stored_height, self.planes,
            self.bits_per_pixel, self.compression, self.image_size,
            self.x_ppm, self.y_ppm, self.colors_used, self.colors_important,
        )
