"""
Application configuration.

Defaults live in ``default_config``; environment variables prefixed with
``MAPANNOT_`` override them (``MAPANNOT_view__zoom=14``).
"""

import os
from gettext import gettext as _
from typing import Dict, Optional

from easydict import EasyDict as edict

from .env import load_cfg_from_env

STORAGE_BACKENDS = ("json", "memory")


def default_config() -> edict:
    return edict(
        storage=edict(
            backend="json",
            path="~/.map_annotation",
        ),
        markers=edict(
            default_title="New Location",
            default_image="https://via.placeholder.com/150",
        ),
        view=edict(
            longitude=100.523186,
            latitude=13.736717,
            zoom=12.0,
            style="mapbox://styles/mapbox/streets-v11",
            access_token="",
        ),
    )


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    """Build the configuration from defaults and the environment."""
    cfg = load_cfg_from_env(default_config(), os.environ if env is None else env)

    for key in ("longitude", "latitude", "zoom"):
        try:
            cfg.view[key] = float(cfg.view[key])
        except (TypeError, ValueError):
            raise ValueError(
                _("view.{key} must be a number, got {value!r}").format(
                    key=key, value=cfg.view[key]
                )
            ) from None

    if cfg.storage.backend not in STORAGE_BACKENDS:
        raise ValueError(
            _("storage.backend must be one of {choices}, got {value!r}").format(
                choices=", ".join(STORAGE_BACKENDS), value=cfg.storage.backend
            )
        )
    return cfg
