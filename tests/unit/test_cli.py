"""Tests for the single-tile command line entry point."""

import json
import logging

import mapbox_vector_tile

from mvt_tiler.cli import main


def _write_geojson(path):
    fc = {
        "type": "FeatureCollection",
        "features": [
            {
                "type": "Feature",
                "properties": {"name": "harbour", "rank": 3},
                "geometry": {"type": "Point", "coordinates": [10.0, 10.0]},
            },
            {
                "type": "Feature",
                "properties": {"name": "coast", "rank": 1},
                "geometry": {"type": "LineString", "coordinates": [[-20.0, 5.0], [30.0, 15.0]]},
            },
        ],
    }
    path.write_text(json.dumps(fc))


class TestCli:
    def test_writes_world_tile(self, tmp_path):
        src = tmp_path / "in.geojson"
        out = tmp_path / "tiles" / "0" / "0" / "0.mvt"
        _write_geojson(src)

        code = main([
            "--input", str(src), "--z", "0", "--x", "0", "--y", "0",
            "--out", str(out), "--layer", "places", "--log-level", "WARNING",
        ])

        assert code == 0
        decoded = mapbox_vector_tile.decode(out.read_bytes())
        features = decoded["places"]["features"]
        assert len(features) == 2
        assert {f["properties"]["name"] for f in features} == {"harbour", "coast"}

    def test_id_column(self, tmp_path):
        src = tmp_path / "in.geojson"
        out = tmp_path / "tile.mvt"
        _write_geojson(src)

        code = main([
            "--input", str(src), "--z", "0", "--x", "0", "--y", "0",
            "--out", str(out), "--id-column", "rank",
        ])

        assert code == 0
        features = mapbox_vector_tile.decode(out.read_bytes())["layer0"]["features"]
        assert sorted(f["id"] for f in features) == [1, 3]

    def test_bad_tolerance(self, tmp_path):
        src = tmp_path / "in.geojson"
        _write_geojson(src)
        code = main([
            "--input", str(src), "--z", "0", "--x", "0", "--y", "0",
            "--out", str(tmp_path / "t.mvt"), "--tolerance", "0.5",
        ])
        assert code == 2

    def test_missing_input(self, tmp_path):
        code = main([
            "--input", str(tmp_path / "nope.parquet"), "--z", "0", "--x", "0", "--y", "0",
            "--out", str(tmp_path / "t.mvt"),
        ])
        assert code == 1

    def test_logs_tile_lon_lat_bounds(self, tmp_path, caplog):
        src = tmp_path / "in.geojson"
        _write_geojson(src)

        with caplog.at_level(logging.DEBUG, logger="mvt_tiler.cli"):
            code = main([
                "--input", str(src), "--z", "1", "--x", "1", "--y", "0",
                "--out", str(tmp_path / "t.mvt"), "--log-level", "DEBUG",
            ])

        assert code == 0
        msgs = [r.getMessage() for r in caplog.records if "lon/lat" in r.getMessage()]
        assert len(msgs) == 1
        assert msgs[0].startswith("Tile 1/1/0 covers lon/lat (")
