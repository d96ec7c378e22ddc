class RasterError(Exception):
    """Base class for every failure raised by the raster codec and grid."""


class FormatError(RasterError, ValueError):
    """The input is not a readable, uncompressed 24-bit bitmap."""


class BoundsError(RasterError, IndexError):
    """A pixel coordinate falls outside the grid."""


class RasterIOError(RasterError, OSError):
    """The destination bitmap could not be created or written."""
