import logging
from typing import Iterable, List, Optional

from .clip import flat_intersection
from .config import MvtParams
from .flatten import flat_tile_geoms
from .layer_props import LayerProps, UserDataIgnoreConverter, accept_all
from .models import Layer, TileGeometry
from .mvt_encoder import to_features
from .tile_writer import encode_tile, empty_tile
from .tiler_bounds import TileEnvelope
from .transform import TileTransformer

logger = logging.getLogger(__name__)


class TileGeometryPipeline:
    """
    Source geometry -> encoded features for one tile layer.

    clip to the envelope, move into the pixel grid, flatten, encode.
    """

    def __init__(self, envelope: TileEnvelope, params: Optional[MvtParams] = None,
                 geom_filter=accept_all, user_data_converter=None):
        self.params = params or MvtParams(extent=envelope.extent)
        if envelope.extent != self.params.extent:
            raise ValueError(
                f"Envelope extent {envelope.extent} does not match params extent {self.params.extent}"
            )
        self.envelope = envelope
        self.envelope_geom = envelope.to_polygon()
        self.transformer = TileTransformer(envelope, self.params.simplify_tolerance)
        self.geom_filter = geom_filter
        self.user_data_converter = user_data_converter or UserDataIgnoreConverter()

    def create_tile_geom(self, geoms: Iterable) -> List[TileGeometry]:
        """Clip, transform and flatten; the result is ready for encoding."""
        flat = flat_tile_geoms(geoms)
        clipped = flat_intersection(self.envelope_geom, flat)
        transformed = self.transformer.transform_all(clipped)
        tile_geoms = flat_tile_geoms(transformed)
        logger.debug(
            "Tile geometry: %d flat inputs, %d clipped, %d after transform",
            len(flat), len(clipped), len(tile_geoms),
        )
        return tile_geoms

    def encode_layer(self, geoms: Iterable, layer_props: Optional[LayerProps] = None) -> Layer:
        if layer_props is None:
            layer_props = LayerProps()

        tile_geoms = self.create_tile_geom(geoms)
        features = to_features(tile_geoms, self.geom_filter, layer_props, self.user_data_converter)
        logger.info("Layer %s: encoded %d features from %d tile geometries",
                    self.params.layer_name, len(features), len(tile_geoms))

        return Layer(
            name=self.params.layer_name,
            features=features,
            layer_props=layer_props,
            extent=self.params.extent,
            version=self.params.version,
        )

    def encode_tile(self, geoms: Iterable) -> bytes:
        layer = self.encode_layer(geoms)
        if not layer.features:
            return empty_tile(layer.name, layer.extent)
        return encode_tile([layer])
