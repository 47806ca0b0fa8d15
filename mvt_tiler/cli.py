import argparse
import logging
import sys
from pathlib import Path
from time import perf_counter

from .config import EXTENT, SIMPLIFY_TOLERANCE, MvtParams
from .datasource import iter_tile_geoms, load_geodataframe
from .layer_props import UserDataKeyValueMapConverter
from .tiler import TileGeometryPipeline
from .tiler_bounds import TileEnvelope

logger = logging.getLogger(__name__)


def build_parser():
    ap = argparse.ArgumentParser(description="Clip GeoParquet/GeoJSON geometry to one XYZ tile and write it as MVT.")
    ap.add_argument("--input", required=True, help="Path to input GeoParquet or GeoJSON.")
    ap.add_argument("--z", type=int, required=True, help="Tile zoom.")
    ap.add_argument("--x", type=int, required=True, help="Tile column.")
    ap.add_argument("--y", type=int, required=True, help="Tile row (top-left origin).")
    ap.add_argument("--out", required=True, help="Output .mvt file.")
    ap.add_argument("--layer", default="layer0", help="Layer name (default: layer0).")
    ap.add_argument("--extent", type=int, default=EXTENT, help=f"Tile extent (default: {EXTENT}).")
    ap.add_argument("--tolerance", type=float, default=SIMPLIFY_TOLERANCE,
                    help="Simplification tolerance in pixels, 0 < t < 0.5.")
    ap.add_argument("--id-column", default=None, help="Attribute holding positive integer feature ids.")
    ap.add_argument("--log-level", default="INFO", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)

    level = getattr(logging, args.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        params = MvtParams(extent=args.extent, simplify_tolerance=args.tolerance, layer_name=args.layer)
        envelope = TileEnvelope.from_tile(args.z, args.x, args.y, extent=args.extent)
    except ValueError as e:
        logger.error("Bad tile configuration: %s", e)
        return 2

    logger.debug("Tile %d/%d/%d covers lon/lat %s", args.z, args.x, args.y, envelope.bbox_4326)

    try:
        gdf = load_geodataframe(args.input)
    except Exception as e:
        logger.error("Failed to read %s: %s", args.input, e)
        return 1

    start = perf_counter()
    pipeline = TileGeometryPipeline(
        envelope,
        params,
        user_data_converter=UserDataKeyValueMapConverter(id_key=args.id_column),
    )
    tile_bytes = pipeline.encode_tile(iter_tile_geoms(gdf))

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(tile_bytes)
    logger.info("Wrote tile %d/%d/%d (%d bytes) to %s in %.2f seconds",
                args.z, args.x, args.y, len(tile_bytes), out, perf_counter() - start)
    return 0


if __name__ == "__main__":
    sys.exit(main())
