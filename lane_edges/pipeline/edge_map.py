from pathlib import Path
from typing import List, Tuple, Union
import logging

from .. import config
from ..models.pixel_grid import PixelGrid
from ..services.gradient_service import GradientService
from ..services.raster_service import RasterService

logger = logging.getLogger(__name__)


def output_path_for(input_path: Union[str, Path], suffix: str = config.OUTPUT_SUFFIX) -> Path:
    """frame.bmp -> frame_edges.bmp"""
    input_path = Path(input_path)
    return input_path.with_name(f"{input_path.stem}{suffix}{input_path.suffix}")


def detect_edges(
    grid: PixelGrid,
    gradient_service: GradientService | None = None,
) -> PixelGrid:
    gradient_service = gradient_service or GradientService()
    return gradient_service.detect(grid)


def process_file(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    raster_service: RasterService | None = None,
    gradient_service: GradientService | None = None,
) -> Tuple[PixelGrid, PixelGrid]:
    """
    Decode `input_path`, compute its edge map and encode it to `output_path`.
    Any failure propagates before the destination is touched.

    Returns:
        (source grid, edge grid)
    """
    raster_service = raster_service or RasterService()

    source = raster_service.load(input_path)
    edges = detect_edges(source, gradient_service)
    edges.path = Path(output_path)
    raster_service.save(edges)
    return source, edges


def process_dir(
    folder: Union[str, Path],
    suffix: str = config.OUTPUT_SUFFIX,
    *,
    recursive: bool = False,
    raster_service: RasterService | None = None,
    gradient_service: GradientService | None = None,
) -> List[Path]:
    """
    Write an edge map beside every bitmap in `folder`.
    Files that already carry `suffix` are treated as earlier output and skipped.
    """
    raster_service = raster_service or RasterService()
    gradient_service = gradient_service or GradientService()

    written = []
    for path, grid in raster_service.stream_dir(folder, recursive=recursive):
        if suffix and path.stem.endswith(suffix):
            continue
        target = output_path_for(path, suffix)
        edges = detect_edges(grid, gradient_service)
        raster_service.save(edges, target)
        logger.info(f"{path.name} -> {target.name} ({grid.width}x{grid.height})")
        written.append(target)
    return written
