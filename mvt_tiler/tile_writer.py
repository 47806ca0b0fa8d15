import logging
from typing import Iterable

from mapbox_vector_tile.Mapbox import vector_tile_pb2

from .config import EXTENT
from .layer_props import LayerProps
from .models import GeomType, Layer

logger = logging.getLogger(__name__)


def _set_value(pb_value, value):
    # bool first, it is an int subclass
    if isinstance(value, bool):
        pb_value.bool_value = value
    elif isinstance(value, int):
        if value < 0:
            pb_value.sint_value = value
        else:
            pb_value.uint_value = value
    elif isinstance(value, float):
        pb_value.double_value = value
    else:
        pb_value.string_value = str(value)


def _add_layer(tile, layer: Layer):
    pb_layer = tile.layers.add()
    pb_layer.name = layer.name
    pb_layer.version = layer.version
    pb_layer.extent = layer.extent

    props = layer.layer_props if layer.layer_props is not None else LayerProps()
    pb_layer.keys.extend(props.keys)
    for value in props.values:
        _set_value(pb_layer.values.add(), value)

    for feature in layer.features:
        if feature.type == GeomType.UNKNOWN or not feature.geometry:
            logger.warning("Refusing to write feature %d without geometry", feature.id)
            continue
        pb_feature = pb_layer.features.add()
        pb_feature.id = feature.id
        pb_feature.type = int(feature.type)
        pb_feature.geometry.extend(feature.geometry)
        pb_feature.tags.extend(feature.tags)


def encode_tile(layers: Iterable[Layer]) -> bytes:
    tile = vector_tile_pb2.tile()
    for layer in layers:
        _add_layer(tile, layer)
    return tile.SerializeToString()


def empty_tile(name="layer0", extent=EXTENT) -> bytes:
    return encode_tile([Layer(name=name, features=[], extent=extent)])
