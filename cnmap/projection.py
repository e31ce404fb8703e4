"""Baidu Mercator projection: lon/lat degrees <-> Baidu projected meters.

Baidu does not use a closed-form Mercator.  Each direction is a set of six
polynomial segments, one per latitude (or |y|) band.
"""

import math

# Latitude breakpoints (degrees) for the degrees -> meters direction.
LLBAND = (75, 60, 45, 30, 15, 0)

# |y| breakpoints (meters) for the meters -> degrees direction.
MCBAND = (12890594.86, 8362377.87, 5591021, 3481989.83, 1678043.12, 0)

LL2MC = (
    (-0.0015702102444, 111320.7020616939, 1704480524535203,
     -10338987376042340, 26112667856603880, -35149669176653700,
     26595700718403920, -10725012454188240, 1800819912950474, 82.5),
    (0.0008277824516172526, 111320.7020463578, 647795574.6671607,
     -4082003173.641316, 10774905663.51142, -15171875531.51559,
     12053065338.62167, -5124939663.577472, 913311935.9512032, 67.5),
    (0.00337398766765, 111320.7020202162, 4481351.045890365,
     -23393751.19931662, 79682215.47186455, -115964993.2797253,
     97236711.15602145, -43661946.33752821, 8477230.501135234, 52.5),
    (0.00220636496208, 111320.7020209128, 51751.86112841131,
     3796837.749470245, 992013.7397791013, -1221952.21711287,
     1340652.697009075, -620943.6990984312, 144416.9293806241, 37.5),
    (-0.0003441963504368392, 111320.7020576856, 278.2353980772752,
     2485758.690035394, 6070.750963243378, 54821.18345352118,
     9540.606633304236, -2710.55326746645, 1405.483844121726, 22.5),
    (-0.0003218135878613132, 111320.7020701615, 0.00369383431289,
     823725.6402795718, 0.46104986909093, 2351.343141331292,
     1.58060784298199, 8.77738589078284, 0.37238884252424, 7.45),
)

MC2LL = (
    (1.410526172116255e-8, 0.00000898305509648872, -1.9939833816331,
     200.9824383106796, -187.2403703815547, 91.6087516669843,
     -23.38765649603339, 2.57121317296198, -0.03801003308653, 17337981.2),
    (-7.435856389565537e-9, 0.000008983055097726239, -0.78625201886289,
     96.32687599759846, -1.85204757529826, -59.36935905485877,
     47.40033549296737, -16.50741931063887, 2.28786674699375, 10260144.86),
    (-3.030883460898826e-8, 0.00000898305509983578, 0.30071316287616,
     59.74293618442277, 7.357984074871, -25.38371002664745,
     13.45380521110908, -3.29883767235584, 0.32710905363475, 6856817.37),
    (-1.981981304930552e-8, 0.000008983055099779535, 0.03278182852591,
     40.31678527705744, 0.65659298677277, -4.44255534477492,
     0.85341911805263, 0.12923347998204, -0.04625736007561, 4482777.06),
    (3.09191371068437e-9, 0.000008983055096812155, 0.00006995724062,
     23.10934304144901, -0.00023663490511, -0.6321817810242,
     -0.00663494467273, 0.03430082397953, -0.00466043876332, 2555164.4),
    (2.890871144776878e-9, 0.000008983055095805407, -3.068298e-8,
     7.47137025468032, -0.00000353937994, -0.02145144861037,
     -0.00001234426596, 0.00010322952773, -0.00000323890364, 826088.5),
)

MAX_LAT = 74.0

# Projected rectangle actually reached by valid inputs:
# (-180, -71.988531) .. (180, 74.000022)
DATA_EXTENT = (-20037726.37, -11708041.66, 20037726.37, 12474104.17)


class SegmentLookupError(RuntimeError):
    """No polynomial segment matched an input (only reachable with NaN)."""


def _clamp(v: float, lo: float, hi: float) -> float:
    return min(max(v, lo), hi)


def _wrap(v: float, lo: float, hi: float) -> float:
    """Wrap v into [lo, hi] by whole periods."""
    if not math.isfinite(v):
        raise ValueError(f"cannot wrap non-finite value {v!r}")
    d = hi - lo
    while v > hi:
        v -= d
    while v < lo:
        v += d
    return v


def convert(p: float, q: float, table) -> tuple[float, float]:
    """Evaluate one polynomial segment on (p, q).

    Linear in |p|, 6th-degree polynomial in |q| / table[9].  Signs of the
    inputs are reattached afterwards, with 0 counted as positive.
    """
    a = table[0] + table[1] * abs(p)
    d = abs(q) / table[9]
    b = table[8]
    for c in reversed(table[2:8]):
        b = b * d + c
    return (
        a * (-1 if p < 0 else 1),
        b * (-1 if q < 0 else 1),
    )


def _ll_segment(lat: float):
    for band, table in zip(LLBAND, LL2MC):
        if lat >= band:
            return table
    # Southern hemisphere: second pass from the equator outwards.
    for band, table in zip(reversed(LLBAND), reversed(LL2MC)):
        if lat <= -band:
            return table
    raise SegmentLookupError(f"no LL2MC segment for latitude {lat!r}")


def _mc_segment(y: float):
    y_abs = abs(y)
    for band, table in zip(MCBAND, MC2LL):
        if y_abs >= band:
            return table
    raise SegmentLookupError(f"no MC2LL segment for y {y!r}")


def forward(lng: float, lat: float) -> tuple[float, float]:
    """Degrees -> Baidu meters.  Returns (x, y)."""
    lng = _wrap(lng, -180.0, 180.0)
    lat = _clamp(lat, -MAX_LAT, MAX_LAT)
    return convert(lng, lat, _ll_segment(lat))


def inverse(x: float, y: float) -> tuple[float, float]:
    """Baidu meters -> degrees.  Returns (lng, lat)."""
    return convert(x, y, _mc_segment(y))


class BaiduMercator:
    """Stateless projection object for map-widget adapters.

    Uses lat-first argument order, like the other projectors in the package.
    """

    bounds = DATA_EXTENT

    def project(self, lat: float, lon: float) -> tuple[float, float]:
        """Return (x, y) in Baidu meters."""
        return forward(lon, lat)

    def unproject(self, x: float, y: float) -> tuple[float, float]:
        """Return (lat, lon) in degrees."""
        lon, lat = inverse(x, y)
        return (lat, lon)
