import pytest

from .config import default_config, load_config


def test_defaults():
    cfg = load_config({})
    assert cfg == default_config()
    assert cfg.markers.default_title == "New Location"
    assert cfg.markers.default_image == "https://via.placeholder.com/150"
    assert (cfg.view.longitude, cfg.view.latitude, cfg.view.zoom) == (
        100.523186,
        13.736717,
        12.0,
    )


def test_environment_overrides():
    cfg = load_config(
        {
            "MAPANNOT_view__zoom": "14",
            "MAPANNOT_storage__backend": "memory",
            "MAPANNOT_markers__default_title": "Pin",
        }
    )
    assert cfg.view.zoom == 14.0
    assert cfg.storage.backend == "memory"
    assert cfg.markers.default_title == "Pin"


def test_invalid_number():
    with pytest.raises(ValueError):
        load_config({"MAPANNOT_view__latitude": "north"})


def test_invalid_backend():
    with pytest.raises(ValueError):
        load_config({"MAPANNOT_storage__backend": "redis"})
