from dataclasses import dataclass

from shapely.geometry import box
from pyproj import Transformer

from .config import EXTENT

LIM = 20037508.342789244

tf_3857_to_4326 = Transformer.from_crs(3857, 4326, always_xy=True)


@dataclass(frozen=True)
class TileEnvelope:
    """World coordinate rectangle of a tile plus its pixel grid size."""
    minx: float
    miny: float
    width: float
    height: float
    extent: int = EXTENT

    def __post_init__(self):
        if not self.width > 0 or not self.height > 0:
            raise ValueError(
                f"Tile envelope needs positive width and height, got {self.width!r} x {self.height!r}"
            )
        if not isinstance(self.extent, int) or self.extent <= 0:
            raise ValueError(f"Tile extent must be a positive integer, got {self.extent!r}")

    @classmethod
    def from_bounds(cls, minx, miny, maxx, maxy, extent=EXTENT):
        return cls(minx, miny, maxx - minx, maxy - miny, extent)

    @classmethod
    def from_tile(cls, z, x, y, extent=EXTENT):
        """EPSG:3857 envelope of XYZ tile (z, x, y), top-left origin."""
        n = 2 ** z
        if not (0 <= x < n and 0 <= y < n):
            raise ValueError(f"Tile {z}/{x}/{y} is outside the zoom {z} grid")
        tile_size = (2 * LIM) / n

        minx = -LIM + x * tile_size
        maxx = -LIM + (x + 1) * tile_size
        maxy = LIM - y * tile_size
        miny = LIM - (y + 1) * tile_size
        return cls.from_bounds(minx, miny, maxx, maxy, extent)

    @property
    def maxx(self):
        return self.minx + self.width

    @property
    def maxy(self):
        return self.miny + self.height

    @property
    def bounds(self):
        return self.minx, self.miny, self.maxx, self.maxy

    @property
    def bbox_4326(self):
        lon1, lat1 = tf_3857_to_4326.transform(self.minx, self.miny)
        lon2, lat2 = tf_3857_to_4326.transform(self.maxx, self.maxy)
        return lon1, lat1, lon2, lat2

    def to_polygon(self):
        return box(*self.bounds)
