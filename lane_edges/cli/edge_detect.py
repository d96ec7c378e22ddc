import argparse
import logging
import sys
from typing import List, Optional

from .. import config
from ..models.errors import RasterError
from ..pipeline.edge_map import detect_edges, process_dir
from ..services.raster_service import RasterService

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def _fail(err: Exception) -> int:
    print(f"error: {err}", file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="lane-edges",
        description=f"Write a Sobel edge map of BASE{config.INPUT_EXTENSION} "
                    f"to BASE{config.OUTPUT_SUFFIX}{config.INPUT_EXTENSION}.",
    )
    parser.add_argument("base", help="input file name without extension")
    args = parser.parse_args(argv)
    _configure_logging()

    input_path = f"{args.base}{config.INPUT_EXTENSION}"
    output_path = f"{args.base}{config.OUTPUT_SUFFIX}{config.INPUT_EXTENSION}"

    raster_service = RasterService()
    try:
        source = raster_service.load(input_path)
        logger.info(f"Input:  {input_path} ({source.width}x{source.height})")
        edges = detect_edges(source)
        raster_service.save(edges, output_path)
    except RasterError as err:
        return _fail(err)

    logger.info(f"Output: {output_path} ({edges.width}x{edges.height})")
    logger.info("Done.")
    return 0


def batch_main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="lane-edges-batch",
        description="Write a Sobel edge map beside every bitmap in FOLDER.",
    )
    parser.add_argument("folder", help="directory holding the input bitmaps")
    parser.add_argument("--recursive", action="store_true", help="descend into subdirectories")
    args = parser.parse_args(argv)
    _configure_logging()

    try:
        written = process_dir(args.folder, config.OUTPUT_SUFFIX, recursive=args.recursive)
    except (RasterError, NotADirectoryError) as err:
        return _fail(err)

    logger.info(f"Wrote {len(written)} edge maps under {args.folder}")
    logger.info("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
