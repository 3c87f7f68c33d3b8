"""
Tests for the command line entry point.
"""

import json

import pytest

from map_annotation.cli import get_version, main
from map_annotation.cli.show.show import format_snapshot
from map_annotation.core.annotation import GeoPoint
from map_annotation.core.factory import create_controller
from map_annotation.utils.config import default_config


@pytest.fixture
def storage(tmp_path):
    cfg = default_config()
    cfg.storage.path = str(tmp_path)
    controller = create_controller(cfg)
    controller.request_add_marker()
    controller.on_map_click(100.5, 13.7)
    for lng, lat in [(1, 1), (2, 1), (2, 2)]:
        controller.on_map_click(lng, lat)
    controller.save_draft_polygon()
    return tmp_path


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["-V"])

    assert capsys.readouterr().out.strip() == get_version()


def test_show_json(storage, capsys):
    main(["show", "--storage", str(storage), "--json"])

    data = json.loads(capsys.readouterr().out)
    assert data["markers"][0]["longitude"] == 100.5
    assert data["markers"][0]["title"] == "New Location"
    assert data["polygons"] == [
        [
            {"longitude": 1.0, "latitude": 1.0},
            {"longitude": 2.0, "latitude": 1.0},
            {"longitude": 2.0, "latitude": 2.0},
        ]
    ]


def test_show_text(storage, capsys):
    main(["show", "--storage", str(storage)])

    out = capsys.readouterr().out
    assert "1 marker(s)" in out
    assert "New Location (100.500000, 13.700000)" in out
    assert "1 polygon(s)" in out


def test_annotate_from_file(tmp_path, capsys):
    commands = tmp_path / "commands.txt"
    commands.write_text("add-marker\nclick 100.5 13.7\nquit\n", encoding="utf-8")
    storage = tmp_path / "storage"

    main(["annotate", "--storage", str(storage), "--input", str(commands)])

    stored = json.loads((storage / "markers.json").read_text(encoding="utf-8"))
    assert len(stored) == 1
    assert "Added marker" in capsys.readouterr().out


def test_format_snapshot_empty(store):
    from map_annotation.core.annotation import InteractionController

    text = format_snapshot(InteractionController(store).snapshot())

    assert text == "0 marker(s)\n0 polygon(s)"


def test_format_snapshot_polygon(controller):
    controller.store.add_polygon([GeoPoint(0, 0), GeoPoint(1, 0), GeoPoint(1, 1)])

    text = format_snapshot(controller.snapshot())

    assert "#1: (0.000000, 0.000000), (1.000000, 0.000000), (1.000000, 1.000000)" in text
