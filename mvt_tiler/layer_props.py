import logging
from typing import Dict, List, Optional

from .flatten import to_geom_type

logger = logging.getLogger(__name__)

VALUE_TYPES = (str, bool, int, float)

# sint64 / uint64 value slots
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 64 - 1


class LayerProps:
    """Interned feature property keys and values shared by one layer."""

    def __init__(self):
        self._keys: Dict[str, int] = {}
        self._values: Dict[tuple, int] = {}
        self._value_list: List = []

    def add_key(self, key: str) -> int:
        idx = self._keys.get(key)
        if idx is None:
            idx = len(self._keys)
            self._keys[key] = idx
        return idx

    def add_value(self, value) -> Optional[int]:
        if not isinstance(value, VALUE_TYPES):
            return None
        if isinstance(value, int) and not isinstance(value, bool) and not INT_MIN <= value <= INT_MAX:
            return None

        # 1, 1.0 and True hash alike; keep them apart
        token = (type(value), value)
        idx = self._values.get(token)
        if idx is None:
            idx = len(self._value_list)
            self._values[token] = idx
            self._value_list.append(value)
        return idx

    def key_index(self, key: str) -> Optional[int]:
        return self._keys.get(key)

    @property
    def keys(self) -> List[str]:
        return list(self._keys)

    @property
    def values(self) -> List:
        return list(self._value_list)


# ------------------------- tag converters ------------------------- #
class UserDataIgnoreConverter:
    def add_tags(self, user_data, layer_props, feature):
        pass


class UserDataKeyValueMapConverter:
    """
    Tag features from a dict of properties.

    With `id_key` set, a positive int stored under that key replaces the
    feature id and is not written as a tag.
    """

    def __init__(self, id_key=None):
        self.id_key = id_key

    def add_tags(self, user_data, layer_props, feature):
        if not isinstance(user_data, dict):
            return

        for key, value in user_data.items():
            if self.id_key is not None and key == self.id_key:
                if isinstance(value, int) and not isinstance(value, bool) and value > 0:
                    feature.id = value
                continue

            if key is None or value is None:
                continue

            value_idx = layer_props.add_value(value)
            if value_idx is None:
                logger.debug("Skipping property %r with unsupported value type %s", key, type(value).__name__)
                continue

            feature.tags.append(layer_props.add_key(str(key)))
            feature.tags.append(value_idx)


# ------------------------- acceptance filters ------------------------- #
def accept_all(tile_geom) -> bool:
    return True


class GeomTypeFilter:
    def __init__(self, *geom_types):
        self.geom_types = frozenset(geom_types)

    def __call__(self, tile_geom) -> bool:
        return to_geom_type(tile_geom.geom) in self.geom_types
