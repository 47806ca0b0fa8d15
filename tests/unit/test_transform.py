"""Tests for tile envelopes and the world -> tile pixel transform."""

import pytest
import shapely
from shapely.geometry import LineString, Point, Polygon

from mvt_tiler.config import MvtParams
from mvt_tiler.models import TileGeometry
from mvt_tiler.tiler_bounds import LIM, TileEnvelope
from mvt_tiler.transform import TileTransformer, round_coords


@pytest.fixture
def transformer():
    return TileTransformer(TileEnvelope(0.0, 0.0, 10.0, 10.0, 4096))


class TestTileEnvelope:
    @pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-1, 10), (10, -5)])
    def test_rejects_non_positive_size(self, width, height):
        with pytest.raises(ValueError):
            TileEnvelope(0, 0, width, height)

    def test_rejects_non_positive_extent(self):
        with pytest.raises(ValueError):
            TileEnvelope(0, 0, 10, 10, extent=0)

    def test_from_bounds(self):
        env = TileEnvelope.from_bounds(2, 3, 12, 8)
        assert (env.width, env.height) == (10, 5)
        assert env.bounds == (2, 3, 12, 8)
        assert env.extent == 4096

    def test_world_tile(self):
        env = TileEnvelope.from_tile(0, 0, 0)
        assert env.bounds == pytest.approx((-LIM, -LIM, LIM, LIM))

    def test_top_left_tile_at_zoom_one(self):
        env = TileEnvelope.from_tile(1, 0, 0)
        assert env.bounds == pytest.approx((-LIM, 0.0, 0.0, LIM), abs=1e-6)

    def test_tile_outside_grid(self):
        with pytest.raises(ValueError):
            TileEnvelope.from_tile(1, 2, 0)

    def test_bbox_4326(self):
        lon1, lat1, lon2, lat2 = TileEnvelope.from_tile(0, 0, 0).bbox_4326
        assert (lon1, lon2) == pytest.approx((-180.0, 180.0), abs=1e-6)
        assert (lat1, lat2) == pytest.approx((-85.0511287798, 85.0511287798), abs=1e-4)


class TestMvtParams:
    @pytest.mark.parametrize("tol", [0.0, 0.5, 0.7, -0.1])
    def test_tolerance_bounds(self, tol):
        with pytest.raises(ValueError):
            MvtParams(simplify_tolerance=tol)

    def test_defaults(self):
        params = MvtParams()
        assert params.extent == 4096
        assert 0 < params.simplify_tolerance < 0.5


class TestTileTransformer:
    def test_center_point(self, transformer):
        p = transformer.to_tile_coords(Point(5, 5))
        assert (p.x, p.y) == pytest.approx((2048.0, 2048.0))

    def test_corners_flip_y(self, transformer):
        lower_left = transformer.to_tile_coords(Point(0, 0))
        upper_right = transformer.to_tile_coords(Point(10, 10))
        assert (lower_left.x, lower_left.y) == pytest.approx((0.0, 4096.0))
        assert (upper_right.x, upper_right.y) == pytest.approx((4096.0, 0.0))

    def test_inside_points_stay_in_extent(self, transformer):
        for x, y in [(0.001, 9.999), (3.3, 7.7), (9.5, 0.2), (6.25, 6.25)]:
            p = transformer.to_tile_coords(Point(x, y))
            assert 0.0 <= p.x <= 4096.0
            assert 0.0 <= p.y <= 4096.0

    def test_transform_rounds_and_keeps_user_data(self, transformer):
        data = {"id": 7}
        out = transformer.transform(TileGeometry(Point(5, 5), data))
        assert out.geom.equals(Point(2048, 2048))
        assert out.user_data is data

    def test_rounded_coordinates_are_integral(self, transformer):
        out = transformer.transform(TileGeometry(LineString([(0.01, 0.02), (3.33, 4.44), (9.87, 1.23)])))
        coords = shapely.get_coordinates(out.geom)
        assert (coords == coords.round()).all()

    def test_simplify_drops_collinear_vertex(self):
        t = TileTransformer(TileEnvelope(0, 0, 4096, 4096, 4096))
        out = t.transform(LineString([(0, 0), (100, 100), (200, 200)]))
        assert len(shapely.get_coordinates(out.geom)) == 2

    def test_polygon_stays_valid(self, transformer):
        poly = Polygon([(1, 1), (9, 1), (9, 9), (1, 9)], [[(3, 3), (3, 6), (6, 6), (6, 3)]])
        out = transformer.transform(poly)
        assert out.geom.is_valid
        assert out.geom.geom_type == "Polygon"
        assert len(out.geom.interiors) == 1

    def test_transform_all_preserves_order(self, transformer):
        out = transformer.transform_all([Point(1, 1), Point(2, 2)])
        assert [(g.geom.x, g.geom.y) for g in out] == [(410.0, 3686.0), (819.0, 3277.0)]

    @pytest.mark.parametrize("tol", [0.0, 0.5])
    def test_tolerance_bounds(self, tol):
        with pytest.raises(ValueError):
            TileTransformer(TileEnvelope(0, 0, 10, 10), simplify_tolerance=tol)


class TestRoundCoords:
    def test_half_up(self):
        p = round_coords(Point(1.5, -1.5))
        assert (p.x, p.y) == (2.0, -1.0)

    def test_returns_new_geometry(self):
        src = Point(1.2, 3.7)
        out = round_coords(src)
        assert (src.x, src.y) == (1.2, 3.7)
        assert (out.x, out.y) == (1.0, 4.0)
