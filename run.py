#!/usr/bin/env python3
"""CNMAP - coordinate service for overlaying Chinese web-map tile providers.

Starts the Flask JSON API.
"""

import logging

from cnmap.config import Settings
from cnmap.server import create_app


if __name__ == "__main__":
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    app.run(host=settings.host, port=settings.port, debug=False)
