import logging
from typing import Iterable, List

import numpy as np
import shapely
from shapely import affinity

from .config import SIMPLIFY_TOLERANCE
from .models import TileGeometry, as_tile_geometry

logger = logging.getLogger(__name__)


def round_coords(geom):
    """Snap every coordinate to the nearest integer (half up), kept as floats."""
    return shapely.transform(geom, lambda coords: np.floor(coords + 0.5))


class TileTransformer:
    """
    World -> tile pixel grid for one envelope.

    Shifts the envelope's min corner to the origin, scales to the extent,
    flips Y (pixel rows grow downward) and moves Y back to [0, extent].
    """

    def __init__(self, envelope, simplify_tolerance=SIMPLIFY_TOLERANCE):
        if not 0.0 < simplify_tolerance < 0.5:
            raise ValueError(
                f"simplify_tolerance must be in (0, 0.5), got {simplify_tolerance!r}"
            )
        self.envelope = envelope
        self.simplify_tolerance = simplify_tolerance
        self.affine_params = self._build_affine(envelope)

    @staticmethod
    def _build_affine(envelope):
        sx = envelope.extent / envelope.width
        sy = -envelope.extent / envelope.height
        # [a, b, d, e, xoff, yoff]: x' = a*x + b*y + xoff, y' = d*x + e*y + yoff
        return [
            sx, 0.0,
            0.0, sy,
            -envelope.minx * sx,
            -envelope.miny * sy + envelope.extent,
        ]

    def to_tile_coords(self, geom):
        return affinity.affine_transform(geom, self.affine_params)

    def transform(self, tile_geom):
        """
        Transform, round and simplify one clipped geometry.

        Returns a new TileGeometry with the same user data, or None when
        nothing is left after simplification.
        """
        tile_geom = as_tile_geometry(tile_geom)

        g = self.to_tile_coords(tile_geom.geom)
        g = round_coords(g)
        g = g.simplify(self.simplify_tolerance, preserve_topology=True)

        if g.is_empty:
            logger.debug("Geometry collapsed to empty after rounding/simplification")
            return None

        return tile_geom.with_geom(g)

    def transform_all(self, tile_geoms: Iterable) -> List[TileGeometry]:
        out = []
        for tg in tile_geoms:
            transformed = self.transform(tg)
            if transformed is not None:
                out.append(transformed)
        return out
