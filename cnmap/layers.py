"""Tile layer catalogue and switching the map view between datums.

Each provider serves tiles in one geodetic datum.  When the user switches
layers the view centre must be moved into the new datum, and the zoom
shifted by one when entering or leaving the Baidu grid.  The datum offset
functions themselves (``wgs2bd``, ``gcj2wgs`` ...) come from an external
coordinate-offset library; pass any object or module exposing them.
"""

import logging
from dataclasses import dataclass, replace

logger = logging.getLogger(__name__)

WGS84 = "wgs84"
GCJ02 = "gcj02"
BD09 = "bd09"

_DATUM_PREFIX = {WGS84: "wgs", GCJ02: "gcj", BD09: "bd"}


class UnknownLayerError(KeyError):
    pass


@dataclass(frozen=True)
class Layer:
    name: str
    label: str
    datum: str
    baidu: bool = False   # drawn on the Baidu CRS instead of EPSG:3857
    min_zoom: int = 0
    max_zoom: int = 18


LAYERS: dict[str, Layer] = {
    "mapbox":      Layer("mapbox", "Mapbox Streets", WGS84, max_zoom=23),
    "mapboxsat":   Layer("mapboxsat", "Mapbox Satellite", WGS84, max_zoom=23),
    "baidu":       Layer("baidu", "Baidu", BD09, baidu=True, min_zoom=3, max_zoom=19),
    "baidusat":    Layer("baidusat", "Baidu Satellite", BD09, baidu=True, min_zoom=3, max_zoom=19),
    "tianditu":    Layer("tianditu", "Tianditu", WGS84),
    "tianditusat": Layer("tianditusat", "Tianditu Satellite", WGS84),
    "gaode":       Layer("gaode", "GaoDe", GCJ02),
    "gaodesat":    Layer("gaodesat", "GaoDe Satellite", GCJ02),
    "geoq":        Layer("geoq", "Geoq", GCJ02),
    "googlecn":    Layer("googlecn", "Google CN", GCJ02),
}

DEFAULT_LAYER = "baidu"


def get_layer(name: str) -> Layer:
    try:
        return LAYERS[name]
    except KeyError:
        raise UnknownLayerError(f"unknown layer {name!r}; expected one of {sorted(LAYERS)}") from None


@dataclass(frozen=True)
class MapView:
    """Centre, zoom and active layer of the map.

    ``layer`` is None before the first layer is shown; the centre is then
    in WGS-84.
    """
    lat: float
    lng: float
    zoom: int
    layer: str | None = None

    @property
    def datum(self) -> str:
        return get_layer(self.layer).datum if self.layer else WGS84


def datum_transform_name(src: str, dst: str) -> str | None:
    """Name of the offset function taking ``src`` to ``dst``, e.g. ``wgs2bd``."""
    if src == dst:
        return None
    return f"{_DATUM_PREFIX[src]}2{_DATUM_PREFIX[dst]}"


def switch_layer(view: MapView, name: str, transforms) -> MapView:
    """Return the view moved onto layer ``name``."""
    target = get_layer(name)
    lat, lng = view.lat, view.lng

    fn_name = datum_transform_name(view.datum, target.datum)
    if fn_name:
        lat, lng = getattr(transforms, fn_name)(lat, lng)

    zoom = view.zoom
    if view.layer is not None:
        current = get_layer(view.layer)
        if target.baidu and not current.baidu:
            zoom += 1
        elif current.baidu and not target.baidu:
            zoom -= 1

    logger.debug("switch %s -> %s via %s: zoom %s -> %s",
                 view.layer, name, fn_name or "identity", view.zoom, zoom)
    return replace(view, lat=lat, lng=lng, zoom=zoom, layer=name)


def transform_bounds(bounds: tuple[float, float, float, float], fn) -> tuple[float, float, float, float]:
    """Move a (south, west, north, east) box through a datum function.

    ``fn`` takes and returns (lat, lng).  Both corners are converted and the
    result is re-normalized so south <= north and west <= east.
    """
    south, west, north, east = bounds
    lat1, lng1 = fn(south, west)
    lat2, lng2 = fn(north, east)
    return (min(lat1, lat2), min(lng1, lng2), max(lat1, lat2), max(lng1, lng2))
