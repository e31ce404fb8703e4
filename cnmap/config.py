"""Runtime settings, read from environment variables."""

import os
from dataclasses import dataclass

from .layers import DEFAULT_LAYER


def _env_int(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_center(env, name: str, default: tuple[float, float]) -> tuple[float, float]:
    raw = env.get(name)
    if not raw:
        return default
    try:
        lat, lng = (float(part) for part in raw.split(","))
    except ValueError:
        raise ValueError(f"{name} must look like 'lat,lng', got {raw!r}") from None
    return (lat, lng)


@dataclass(frozen=True)
class Settings:
    host: str = "127.0.0.1"
    port: int = 5050
    log_level: str = "INFO"
    default_layer: str = DEFAULT_LAYER
    default_zoom: int = 17
    default_center: tuple[float, float] = (39.9075, 116.3913)  # WGS-84, Beijing

    @classmethod
    def from_env(cls, env=None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            host=env.get("HOST", cls.host),
            port=_env_int(env, "PORT", cls.port),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
            default_layer=env.get("CNMAP_DEFAULT_LAYER", cls.default_layer),
            default_zoom=_env_int(env, "CNMAP_DEFAULT_ZOOM", cls.default_zoom),
            default_center=_env_center(env, "CNMAP_DEFAULT_CENTER", cls.default_center),
        )
