import logging
from typing import Iterable, List

import shapely
from shapely.errors import GEOSException

from .models import TileGeometry, as_tile_geometry

logger = logging.getLogger(__name__)


def flat_intersection(envelope_geom, tile_geoms: Iterable) -> List[TileGeometry]:
    """
    Intersect each flat geometry with the tile envelope.

    Invalid inputs and GEOS failures are logged and skipped, empty results
    (geometry outside the tile) are dropped. Order follows the input.
    """
    out = []

    for i, tg in enumerate(tile_geoms):
        tg = as_tile_geometry(tg)
        geom = tg.geom

        try:
            if not shapely.is_valid(geom):
                logger.error("Skipping invalid geometry #%d: %s", i, shapely.is_valid_reason(geom))
                continue

            clipped = envelope_geom.intersection(geom)
        except GEOSException as e:
            logger.error("Intersection failed for geometry #%d: %s", i, e)
            continue

        if clipped.is_empty:
            continue

        out.append(tg.with_geom(clipped))

    logger.debug("Clipped %d geometries to the tile envelope", len(out))
    return out
