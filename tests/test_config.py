import pytest

from cnmap.config import Settings


def test_defaults():
    s = Settings.from_env({})
    assert s == Settings()
    assert (s.host, s.port) == ("127.0.0.1", 5050)
    assert s.default_layer == "baidu"
    assert s.default_center == (39.9075, 116.3913)


def test_overrides():
    s = Settings.from_env({
        "HOST": "0.0.0.0",
        "PORT": "8080",
        "LOG_LEVEL": "debug",
        "CNMAP_DEFAULT_LAYER": "gaode",
        "CNMAP_DEFAULT_ZOOM": "12",
        "CNMAP_DEFAULT_CENTER": "22.3115, 113.9334",
    })
    assert s.port == 8080
    assert s.log_level == "DEBUG"
    assert s.default_layer == "gaode"
    assert s.default_zoom == 12
    assert s.default_center == (22.3115, 113.9334)


@pytest.mark.parametrize("env,name", [
    ({"PORT": "http"}, "PORT"),
    ({"CNMAP_DEFAULT_ZOOM": "1.5"}, "CNMAP_DEFAULT_ZOOM"),
    ({"CNMAP_DEFAULT_CENTER": "39.9"}, "CNMAP_DEFAULT_CENTER"),
])
def test_malformed_values_name_the_variable(env, name):
    with pytest.raises(ValueError, match=name):
        Settings.from_env(env)
