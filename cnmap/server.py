"""Flask application exposing the projection and tile mapping as JSON."""

import logging
import math

from flask import Flask, jsonify, request

from .config import Settings
from .crs import BAIDU_CRS
from .layers import LAYERS, get_layer
from .projection import forward, inverse
from .tiles import (
    TileAddress, TileConfigError, baidu_tile_for, to_baidu_tile,
    web_mercator_tile_corner, web_mercator_tile_for,
)

logger = logging.getLogger(__name__)


def _float_args(*names: str) -> list[float]:
    values = [float(request.args[n]) for n in names]
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"{', '.join(names)} must be finite numbers")
    return values


def _int_args(*names: str) -> list[int]:
    return [int(request.args[n]) for n in names]


def _bad_request(exc: Exception):
    logger.warning("bad request %s: %s", request.full_path, exc)
    return jsonify({"error": f"Invalid parameters: {exc}"}), 400


def create_app(settings: Settings | None = None) -> Flask:
    settings = settings or Settings.from_env()
    default_layer = get_layer(settings.default_layer)

    app = Flask(__name__)
    app.config["CNMAP_SETTINGS"] = settings

    @app.route("/api/crs")
    def crs():
        return jsonify(BAIDU_CRS.to_dict())

    @app.route("/api/layers")
    def layers():
        lat, lng = settings.default_center
        return jsonify({
            "layers": [
                {
                    "name": layer.name,
                    "label": layer.label,
                    "datum": layer.datum,
                    "baidu": layer.baidu,
                    "min_zoom": layer.min_zoom,
                    "max_zoom": layer.max_zoom,
                }
                for layer in LAYERS.values()
            ],
            "default": {
                "layer": default_layer.name,
                "zoom": settings.default_zoom,
                "center": {"lat": lat, "lng": lng},
            },
        })

    @app.route("/api/forward")
    def project():
        try:
            lng, lat = _float_args("lng", "lat")
            x, y = forward(lng, lat)
        except (KeyError, ValueError, OverflowError) as exc:
            return _bad_request(exc)
        return jsonify({"x": x, "y": y})

    @app.route("/api/inverse")
    def unproject():
        try:
            x, y = _float_args("x", "y")
            lng, lat = inverse(x, y)
        except (KeyError, ValueError, OverflowError) as exc:
            return _bad_request(exc)
        return jsonify({"lng": lng, "lat": lat})

    @app.route("/api/tile")
    def tile():
        try:
            z, x, y = _int_args("z", "x", "y")
            baidu = to_baidu_tile(TileAddress(z, x, y))
        except TileConfigError as exc:
            logger.warning("tile config error: %s", exc)
            return jsonify({"error": str(exc)}), 400
        except (KeyError, ValueError, OverflowError) as exc:
            return _bad_request(exc)
        return jsonify({
            "standard": {"z": z, "x": x, "y": y},
            "baidu": {"z": baidu.zoom, "x": baidu.x, "y": baidu.y},
        })

    @app.route("/api/locate")
    def locate():
        """Tile containing a point on ``layer`` (default layer if omitted).

        The point must already be in the layer's datum.
        """
        try:
            lat, lng = _float_args("lat", "lng")
            (z,) = _int_args("z")
            layer = get_layer(request.args.get("layer", default_layer.name))
            if layer.baidu:
                found = baidu_tile_for(lat, lng, z)
            else:
                found = web_mercator_tile_for(lat, lng, z)
        except TileConfigError as exc:
            logger.warning("tile config error: %s", exc)
            return jsonify({"error": str(exc)}), 400
        except (KeyError, ValueError, OverflowError) as exc:
            return _bad_request(exc)
        result = {"layer": layer.name, "z": found.zoom, "x": found.x, "y": found.y}
        if not layer.baidu:
            nw_lat, nw_lng = web_mercator_tile_corner(found)
            result["nw"] = {"lat": nw_lat, "lng": nw_lng}
        return jsonify(result)

    return app
