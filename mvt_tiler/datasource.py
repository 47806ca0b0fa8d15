import logging
import math
from pathlib import Path
from typing import Iterator

import geopandas as gpd
import numpy as np

from .models import TileGeometry

logger = logging.getLogger(__name__)


def is_geojson_path(path) -> bool:
    p = str(path).lower()
    return p.endswith((".geojson", ".geojsonl", ".json", ".jsonl"))


def load_geodataframe(path) -> gpd.GeoDataFrame:
    """Read GeoParquet or GeoJSON and reproject to EPSG:3857."""
    path = Path(path)
    if is_geojson_path(path):
        logger.info("Reading GeoJSON %s", path)
        gdf = gpd.read_file(path)
    else:
        logger.info("Reading GeoParquet %s", path)
        gdf = gpd.read_parquet(path)

    if gdf.crs is None:
        logger.warning("No CRS recorded in %s, assuming EPSG:4326", path)
        gdf = gdf.set_crs(4326)
    if gdf.crs.to_epsg() != 3857:
        gdf = gdf.to_crs(3857)

    logger.info("Loaded %d rows from %s", len(gdf), path)
    return gdf


def _plain(value):
    # numpy scalars only; list columns arrive as ndarrays and stay for LayerProps to reject
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def iter_tile_geoms(gdf: gpd.GeoDataFrame) -> Iterator[TileGeometry]:
    geom_col = gdf.geometry.name
    columns = [c for c in gdf.columns if c != geom_col]
    records = gdf[columns].to_dict("records")

    for geom, row in zip(gdf.geometry, records):
        if geom is None or geom.is_empty:
            continue

        attrs = {}
        for k, v in row.items():
            v = _plain(v)
            if v is not None:
                attrs[str(k)] = v
        yield TileGeometry(geom, attrs)
