"""Baidu coordinate reference system: projected meters <-> widget pixels."""

import math
from dataclasses import dataclass

from .projection import BaiduMercator

TILE_SIZE = 256

# Baidu meters at zoom 18 are one pixel; shift 8 more bits for the tile size.
REFERENCE_EXPONENT = -18 - 8

MAX_EXTENT = 2 ** 25  # 33554432


@dataclass(frozen=True)
class Transformation:
    """Per-axis affine map ``pixel = scale * (a * m + b)``."""
    a: float
    b: float
    c: float
    d: float

    def transform(self, x: float, y: float, scale: float = 1.0) -> tuple[float, float]:
        return (scale * (self.a * x + self.b), scale * (self.c * y + self.d))

    def untransform(self, px: float, py: float, scale: float = 1.0) -> tuple[float, float]:
        return ((px / scale - self.b) / self.a, (py / scale - self.d) / self.c)


class CoordinateSystem:
    """Scale, offset and bounds used to lay Baidu tiles and markers out.

    The map widget projects each point with ``projection`` and then applies
    ``transformation`` scaled by ``scale(zoom)``.  ``bounds`` is a square
    deliberately looser than the projection's real data extent.
    """

    code = "EPSG:3857"

    def __init__(self, projection=None, exponent: int = REFERENCE_EXPONENT,
                 max_extent: float = MAX_EXTENT):
        self.projection = projection or BaiduMercator()
        s = 2.0 ** exponent
        self.transformation = Transformation(s, 0.5, -s, 0.5)
        self.bounds = (-max_extent, -max_extent, max_extent, max_extent)

    def scale(self, zoom: float) -> float:
        return TILE_SIZE * 2.0 ** zoom

    def zoom(self, scale: float) -> float:
        return math.log2(scale / TILE_SIZE)

    def transform(self, x: float, y: float, zoom: float) -> tuple[float, float]:
        """Projected meters -> pixels at ``zoom``."""
        return self.transformation.transform(x, y, self.scale(zoom))

    def untransform(self, px: float, py: float, zoom: float) -> tuple[float, float]:
        """Pixels at ``zoom`` -> projected meters."""
        return self.transformation.untransform(px, py, self.scale(zoom))

    def lat_lng_to_point(self, lat: float, lng: float, zoom: float) -> tuple[float, float]:
        x, y = self.projection.project(lat, lng)
        return self.transform(x, y, zoom)

    def point_to_lat_lng(self, px: float, py: float, zoom: float) -> tuple[float, float]:
        x, y = self.untransform(px, py, zoom)
        return self.projection.unproject(x, y)

    def contains(self, x: float, y: float) -> bool:
        min_x, min_y, max_x, max_y = self.bounds
        return min_x <= x <= max_x and min_y <= y <= max_y

    def pixel_bounds(self, zoom: float) -> tuple[float, float, float, float]:
        """Return (min_px, min_py, max_px, max_py) of ``bounds`` at ``zoom``."""
        min_x, min_y, max_x, max_y = self.bounds
        x0, y0 = self.transform(min_x, max_y, zoom)
        x1, y1 = self.transform(max_x, min_y, zoom)
        return (x0, y0, x1, y1)

    def to_dict(self) -> dict:
        t = self.transformation
        return {
            "code": self.code,
            "tile_size": TILE_SIZE,
            "transformation": [t.a, t.b, t.c, t.d],
            "bounds": list(self.bounds),
            "data_extent": list(self.projection.bounds),
        }


BAIDU_CRS = CoordinateSystem()
