import logging
import math
from typing import Iterable, List, Optional

import numpy as np
import shapely
from shapely.geometry import (
    Point,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
)

from .cursor import Cursor, move_cursor, equal_as_ints
from .flatten import to_geom_type
from .geom_cmd import CMD_HDR_LEN_MAX, Command, cmd_hdr, close_path_cmd_hdr
from .layer_props import LayerProps, UserDataIgnoreConverter, accept_all
from .models import Feature, GeomType, as_tile_geometry

logger = logging.getLogger(__name__)


def signed_area(coords) -> float:
    """Shoelace area of a closed ring; positive when counter-clockwise (y up)."""
    xy = np.asarray(coords, dtype=float)
    if len(xy) < 3:
        return 0.0
    x, y = xy[:, 0], xy[:, 1]
    return 0.5 * float(np.sum(x[:-1] * y[1:] - x[1:] * y[:-1]))


def _rounds_to_zero(area: float) -> bool:
    return math.floor(area + 0.5) == 0


def pts_to_geom_cmds(geom, cursor: Cursor) -> List[int]:
    """
    Encode a Point or MultiPoint as one MoveTo run.

    Points equal (as ints) to the previous emitted point are skipped, except
    the first. The cursor is left untouched when the run is rejected.
    """
    coords = shapely.get_coordinates(geom)
    if len(coords) == 0:
        return []

    start = cursor.copy()
    geom_cmds = [0]
    move_len = 0

    for i, (x, y) in enumerate(coords):
        if i == 0 or not equal_as_ints(cursor, x, y):
            move_len += 1
            move_cursor(cursor, geom_cmds, x, y)

    if move_len > CMD_HDR_LEN_MAX:
        cursor.restore(start)
        return []

    geom_cmds[0] = cmd_hdr(Command.MOVE_TO, move_len)
    return geom_cmds


def lines_to_geom_cmds(coords, close_enabled: bool, cursor: Cursor, min_line_to_len: int) -> List[int]:
    """
    Encode one line or ring: MoveTo, a LineTo run, optionally ClosePath.

    The last coordinate is dropped when it repeats the cursor, or, for
    closed paths, when it repeats the first coordinate. Runs shorter than
    `min_line_to_len` or longer than the header allows yield [] and leave
    the cursor where it was.
    """
    coords = np.asarray(coords, dtype=float)
    if len(coords) < 2:
        return []

    start = cursor.copy()

    geom_cmds = [cmd_hdr(Command.MOVE_TO, 1)]
    move_cursor(cursor, geom_cmds, coords[0][0], coords[0][1])

    line_to_hdr_idx = len(geom_cmds)
    geom_cmds.append(0)
    line_to_len = 0

    for x, y in coords[1:-1]:
        if not equal_as_ints(cursor, x, y):
            line_to_len += 1
            move_cursor(cursor, geom_cmds, x, y)

    last_x, last_y = coords[-1]
    closes_on_start = last_x == coords[0][0] and last_y == coords[0][1]
    if not equal_as_ints(cursor, last_x, last_y) and not (close_enabled and closes_on_start):
        line_to_len += 1
        move_cursor(cursor, geom_cmds, last_x, last_y)

    if line_to_len < min_line_to_len or line_to_len > CMD_HDR_LEN_MAX:
        cursor.restore(start)
        return []

    geom_cmds[line_to_hdr_idx] = cmd_hdr(Command.LINE_TO, line_to_len)
    if close_enabled:
        geom_cmds.append(close_path_cmd_hdr())
    return geom_cmds


def _polygon_to_geom_cmds(poly: Polygon, cursor: Cursor) -> List[int]:
    """
    Exterior ring first (made CCW), then holes (made CW).

    Returns [] for the whole polygon when the exterior is degenerate or a
    hole is at least as large as the exterior.
    """
    start = cursor.copy()

    ext = shapely.get_coordinates(poly.exterior)
    ext_area = signed_area(ext)
    if _rounds_to_zero(ext_area):
        logger.debug("Dropping polygon with degenerate exterior ring (area %.3f)", ext_area)
        return []

    if ext_area < 0:
        ext = ext[::-1]

    poly_cmds = lines_to_geom_cmds(ext, True, cursor, 2)
    if not poly_cmds:
        logger.debug("Dropping polygon, exterior ring has too few distinct points")
        return []

    for ring in poly.interiors:
        hole = shapely.get_coordinates(ring)
        hole_area = signed_area(hole)
        if _rounds_to_zero(hole_area):
            logger.debug("Skipping degenerate interior ring (area %.3f)", hole_area)
            continue

        if hole_area > 0:
            hole = hole[::-1]

        if abs(ext_area) <= abs(hole_area):
            logger.debug("Dropping polygon, hole area %.1f >= exterior area %.1f", abs(hole_area), abs(ext_area))
            cursor.restore(start)
            return []

        poly_cmds.extend(lines_to_geom_cmds(hole, True, cursor, 2))

    return poly_cmds


def to_feature(tile_geom, cursor: Cursor, feature_id: int, layer_props: LayerProps,
               user_data_converter) -> Optional[Feature]:
    """
    Encode one flat geometry in tile coordinates as an MVT feature.

    Returns None for unknown geometry types and for geometry that encodes to
    no commands at all.
    """
    tile_geom = as_tile_geometry(tile_geom)
    geom = tile_geom.geom

    geom_type = to_geom_type(geom)
    if geom_type == GeomType.UNKNOWN:
        logger.debug("Unsupported geometry type %s", geom.geom_type)
        return None

    geom_cmds = []

    if isinstance(geom, (Point, MultiPoint)):
        geom_cmds.extend(pts_to_geom_cmds(geom, cursor))

    elif isinstance(geom, (LineString, MultiLineString)):
        lines = geom.geoms if isinstance(geom, MultiLineString) else [geom]
        for line in lines:
            geom_cmds.extend(lines_to_geom_cmds(shapely.get_coordinates(line), False, cursor, 1))

    elif isinstance(geom, (Polygon, MultiPolygon)):
        polys = geom.geoms if isinstance(geom, MultiPolygon) else [geom]
        for poly in polys:
            geom_cmds.extend(_polygon_to_geom_cmds(poly, cursor))

    if not geom_cmds:
        return None

    feature = Feature(id=feature_id, type=geom_type, geometry=geom_cmds)
    user_data_converter.add_tags(tile_geom.user_data, layer_props, feature)
    return feature


def to_features(flat_geoms: Iterable, geom_filter=accept_all, layer_props: Optional[LayerProps] = None,
                user_data_converter=None) -> List[Feature]:
    """
    Encode a flat list of tile-space geometries as the features of one layer.

    One cursor is shared by the whole pass, so feature order matters. Ids
    count up from 1 for every geometry the filter accepts, including those
    that then fail to encode.
    """
    if layer_props is None:
        layer_props = LayerProps()
    if user_data_converter is None:
        user_data_converter = UserDataIgnoreConverter()

    features = []
    cursor = Cursor()
    next_feature_id = 1

    for tg in flat_geoms:
        tg = as_tile_geometry(tg)
        if not geom_filter(tg):
            continue

        feature = to_feature(tg, cursor, next_feature_id, layer_props, user_data_converter)
        next_feature_id += 1
        if feature is not None:
            features.append(feature)
        else:
            logger.debug("Geometry %d produced no feature", next_feature_id - 1)

    return features
