import math

import pytest

from cnmap.projection import (
    LL2MC, LLBAND, MC2LL, MCBAND, BaiduMercator, SegmentLookupError,
    convert, forward, inverse,
)

BEIJING = (116.3913, 39.9075)

# One point per northern band plus the equatorial band.
ROUND_TRIP_POINTS = [
    BEIJING,
    (121.4737, 31.2304),    # Shanghai
    (113.2644, 23.1291),    # Guangzhou
    (126.5350, 45.8038),    # Harbin
    (113.9334, 22.3115),    # Hong Kong airport
    (103.8198, 1.3521),     # Singapore
    (-74.0060, 40.7128),    # New York
    (10.0, -5.0),
]


def test_tables_have_six_bands():
    assert len(LLBAND) == len(LL2MC) == 6
    assert len(MCBAND) == len(MC2LL) == 6
    assert all(len(t) == 10 for t in LL2MC + MC2LL)


def test_beijing_magnitude():
    x, y = forward(*BEIJING)
    assert 1.28e7 < x < 1.30e7
    assert 4.80e6 < y < 4.86e6


@pytest.mark.parametrize("lng,lat", ROUND_TRIP_POINTS)
def test_round_trip(lng, lat):
    back_lng, back_lat = inverse(*forward(lng, lat))
    assert back_lng == pytest.approx(lng, abs=1e-5)
    assert back_lat == pytest.approx(lat, abs=1e-5)


def test_longitude_wraps_by_one_period():
    assert forward(190, 35) == forward(-170, 35)
    assert forward(-545, 35) == forward(175, 35)


def test_latitude_clamps():
    assert forward(116, 80) == forward(116, 74)
    assert forward(116, -89) == forward(116, -74)


# Neighbouring segments are separate fits; they meet at the band edges to
# within a meter up to 45 degrees and more loosely at 60.
@pytest.mark.parametrize("band,tol_m", [(15, 1.0), (30, 1.0), (45, 2.0), (60, 25.0)])
def test_forward_continuous_across_band_edge(band, tol_m):
    on_edge = forward(100, band)[1]
    below = forward(100, band - 1e-9)[1]
    above = forward(100, band + 1e-9)[1]
    assert below == pytest.approx(on_edge, abs=tol_m)
    assert above == pytest.approx(on_edge, abs=tol_m)


# The top edge (75 degrees) lies outside the clamped domain and its fits
# disagree by about 0.01 degrees, so only the interior edges are checked.
@pytest.mark.parametrize("edge", MCBAND[1:-1])
def test_inverse_continuous_across_band_edge(edge):
    on_edge = inverse(1e6, edge)[1]
    below = inverse(1e6, edge - 1e-3)[1]
    assert below == pytest.approx(on_edge, abs=5e-4)


def test_band_edge_selects_upper_segment():
    assert forward(100, 30) == convert(100, 30, LL2MC[3])
    assert inverse(1e6, MCBAND[3]) == convert(1e6, MCBAND[3], MC2LL[3])


def test_longitude_sign_symmetry():
    x, y = forward(116.4, 39.9)
    mx, my = forward(-116.4, 39.9)
    assert mx == -x
    assert my == y


def test_latitude_sign_symmetry_in_equatorial_band():
    x, y = forward(103.8, 10.0)
    sx, sy = forward(103.8, -10.0)
    assert sy == -y
    assert sx == x


def test_southern_latitudes_use_equatorial_segment():
    # The reverse pass matches the 0 breakpoint first for any negative lat.
    assert forward(151.2, -33.9) == convert(151.2, -33.9, LL2MC[5])


def test_zero_counts_as_positive():
    x, y = forward(0, 0)
    assert x == LL2MC[5][0]
    assert y == LL2MC[5][2]


def test_inverse_is_symmetric_in_y():
    lng, lat = inverse(1.2e7, 4.8e6)
    assert inverse(1.2e7, -4.8e6) == (lng, -lat)


def test_inverse_does_not_clamp():
    # Far beyond the data extent the polynomial is still evaluated.
    lng, lat = inverse(1e6, 3e7)
    assert math.isfinite(lat)
    assert lat > 74


def test_non_finite_longitude_rejected():
    with pytest.raises(ValueError):
        forward(math.inf, 10)


def test_nan_latitude_is_an_invariant_violation():
    with pytest.raises(SegmentLookupError):
        forward(10, math.nan)


def test_baidu_mercator_lat_first_order():
    proj = BaiduMercator()
    x, y = proj.project(BEIJING[1], BEIJING[0])
    assert (x, y) == forward(*BEIJING)
    lat, lon = proj.unproject(x, y)
    assert lat == pytest.approx(BEIJING[1], abs=1e-5)
    assert lon == pytest.approx(BEIJING[0], abs=1e-5)
