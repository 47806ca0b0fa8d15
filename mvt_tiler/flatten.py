from typing import Iterable, List

from shapely.geometry import (
    Point,
    LineString,
    Polygon,
    MultiPoint,
    MultiLineString,
    MultiPolygon,
    GeometryCollection
)

from .models import GeomType, TileGeometry, as_tile_geometry

PRIMITIVE_TYPES = (Point, MultiPoint, LineString, MultiLineString, Polygon, MultiPolygon)


def flat_feature_list(geom) -> List:
    """
    Flatten a (possibly nested) geometry into a list holding only
    points, lines and polygons and their multi- variants.

    Collections are walked depth first in child order with an explicit
    stack; any other geometry type is discarded.
    """
    out = []
    stack = [geom]

    while stack:
        g = stack.pop()
        if g is None:
            continue

        if isinstance(g, PRIMITIVE_TYPES):
            out.append(g)
        elif isinstance(g, GeometryCollection):
            # reversed so children pop off in their original order
            stack.extend(reversed(list(g.geoms)))

    return out


def flat_tile_geoms(tile_geoms: Iterable) -> List[TileGeometry]:
    """Flatten each entry, handing its user data on to every part."""
    out = []
    for tg in tile_geoms:
        tg = as_tile_geometry(tg)
        out.extend(tg.with_geom(part) for part in flat_feature_list(tg.geom))
    return out


def to_geom_type(geom) -> GeomType:
    if isinstance(geom, (Point, MultiPoint)):
        return GeomType.POINT
    if isinstance(geom, (LineString, MultiLineString)):
        return GeomType.LINESTRING
    if isinstance(geom, (Polygon, MultiPolygon)):
        return GeomType.POLYGON
    return GeomType.UNKNOWN
