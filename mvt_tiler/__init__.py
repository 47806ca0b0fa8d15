from .config import EXTENT, MvtParams
from .cursor import Cursor
from .flatten import flat_feature_list, to_geom_type
from .models import Feature, GeomType, Layer, TileGeometry
from .mvt_encoder import to_feature, to_features
from .tiler import TileGeometryPipeline
from .tiler_bounds import TileEnvelope
from .transform import TileTransformer

__all__ = [
    "EXTENT",
    "MvtParams",
    "Cursor",
    "flat_feature_list",
    "to_geom_type",
    "Feature",
    "GeomType",
    "Layer",
    "TileGeometry",
    "to_feature",
    "to_features",
    "TileGeometryPipeline",
    "TileEnvelope",
    "TileTransformer",
]
