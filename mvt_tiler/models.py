from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, List, Optional

from shapely.geometry.base import BaseGeometry

from .config import EXTENT


class GeomType(IntEnum):
    """Feature geometry types, values as in the MVT protobuf schema."""
    UNKNOWN = 0
    POINT = 1
    LINESTRING = 2
    POLYGON = 3


@dataclass(frozen=True)
class TileGeometry:
    """
    A shapely geometry plus the caller's attachment for it.

    Shapely geometries are immutable and take no attributes, so the
    attachment travels next to the geometry through clipping and transforms.
    """
    geom: BaseGeometry
    user_data: Any = None

    def with_geom(self, geom: BaseGeometry) -> "TileGeometry":
        return TileGeometry(geom, self.user_data)


@dataclass
class Feature:
    id: int
    type: GeomType
    geometry: List[int] = field(default_factory=list)
    tags: List[int] = field(default_factory=list)


@dataclass
class Layer:
    name: str
    features: List[Feature]
    layer_props: Optional[Any] = None
    extent: int = EXTENT
    version: int = 2


def as_tile_geometry(g) -> TileGeometry:
    if isinstance(g, TileGeometry):
        return g
    return TileGeometry(g)
