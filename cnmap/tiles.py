"""Tile addressing: standard slippy-map tiles and Baidu's centred tile grid."""

import math
from dataclasses import dataclass

from .crs import BAIDU_CRS, TILE_SIZE

# No provider in the catalogue goes past 23; beyond this the grid arithmetic
# only burns time.
MAX_ZOOM = 30


class TileConfigError(ValueError):
    """Tile zoom that cannot be mapped (not an integer, or out of range)."""


@dataclass(frozen=True)
class TileAddress:
    zoom: int
    x: int
    y: int


def _check_zoom(zoom: int, min_zoom: int) -> int:
    if not isinstance(zoom, int) or isinstance(zoom, bool):
        raise TileConfigError(f"zoom must be an integer, got {zoom!r}")
    if zoom < min_zoom:
        raise TileConfigError(f"zoom must be >= {min_zoom}, got {zoom}")
    if zoom > MAX_ZOOM:
        raise TileConfigError(f"zoom must be <= {MAX_ZOOM}, got {zoom}")
    return zoom


def _offset(zoom: int) -> int:
    """Half the grid width at ``zoom``: the Baidu origin in standard tiles."""
    return 2 ** (_check_zoom(zoom, 1) - 1)


def to_baidu_tile(tile: TileAddress) -> TileAddress:
    """Standard (top-left origin, y down) -> Baidu (centre origin, y up)."""
    offset = _offset(tile.zoom)
    return TileAddress(tile.zoom, tile.x - offset, offset - tile.y - 1)


def to_standard_tile(tile: TileAddress) -> TileAddress:
    """Inverse of :func:`to_baidu_tile`."""
    offset = _offset(tile.zoom)
    return TileAddress(tile.zoom, tile.x + offset, offset - tile.y - 1)


def web_mercator_tile_for(lat: float, lon: float, zoom: int) -> TileAddress:
    """EPSG:3857 tile containing (lat, lon), clamped to the grid.

    For the non-Baidu providers; the point must be in the provider's datum.
    """
    n = 2 ** _check_zoom(zoom, 0)
    merc_y = math.asinh(math.tan(math.radians(lat)))
    x = math.floor((lon + 180.0) / 360.0 * n)
    y = math.floor((1.0 - merc_y / math.pi) / 2.0 * n)
    return TileAddress(zoom, min(max(x, 0), n - 1), min(max(y, 0), n - 1))


def web_mercator_tile_corner(tile: TileAddress) -> tuple[float, float]:
    """(lat, lon) of the north-west corner of an EPSG:3857 tile."""
    n = 2 ** _check_zoom(tile.zoom, 0)
    lat = math.degrees(math.atan(math.sinh(math.pi * (1 - 2 * tile.y / n))))
    return lat, tile.x / n * 360.0 - 180.0


def baidu_tile_for(lat: float, lon: float, zoom: int, crs=BAIDU_CRS) -> TileAddress:
    """Baidu tile containing a BD-09 point at ``zoom``.

    The point is placed in widget pixels the way the map widget does it,
    then the resulting standard tile is remapped to Baidu's grid.
    """
    _check_zoom(zoom, 1)
    px, py = crs.lat_lng_to_point(lat, lon, zoom)
    standard = TileAddress(zoom, math.floor(px / TILE_SIZE), math.floor(py / TILE_SIZE))
    return to_baidu_tile(standard)
