import map_annotation.utils.i18n  # noqa:F401

from easydict import EasyDict as edict

from .env import load_cfg_from_env


def test_load_cfg_from_env():
    input_dict = {"MAPANNOT_a": 2, "MAPANNOT_eoq__trabson": 3, "OTHER_b": 4}
    loaded = load_cfg_from_env(edict(), input_dict)
    assert loaded.a == 2
    assert loaded.eoq.trabson == 3
    assert "b" not in loaded


def test_load_cfg_from_env_overrides_nested():
    cfg = edict(view=edict(zoom=12.0, style="streets"))
    loaded = load_cfg_from_env(cfg, {"MAPANNOT_view__zoom": "14"})
    assert loaded.view.zoom == "14"
    assert loaded.view.style == "streets"
