import json
import logging
from gettext import gettext as _

from map_annotation.core.factory import create_controller
from map_annotation.utils.config import load_config

logger = logging.getLogger(__name__)


def format_snapshot(snapshot) -> str:
    lines = [_("{n} marker(s)").format(n=len(snapshot.markers))]
    for marker in snapshot.markers:
        lines.append(
            f"  [{marker.id}] {marker.title} "
            f"({marker.longitude:.6f}, {marker.latitude:.6f}) {marker.image}"
        )
    lines.append(_("{n} polygon(s)").format(n=len(snapshot.polygons)))
    for index, polygon in enumerate(snapshot.polygons, start=1):
        vertices = ", ".join(
            f"({p.longitude:.6f}, {p.latitude:.6f})" for p in polygon.points
        )
        lines.append(f"  #{index}: {vertices}")
    return "\n".join(lines)


def handle(args):
    cfg = load_config()
    if args.storage is not None:
        cfg.storage.path = str(args.storage)
    controller = create_controller(cfg)
    snapshot = controller.snapshot()

    if args.as_json:
        data = snapshot.to_dict()
        print(json.dumps({"markers": data["markers"], "polygons": data["polygons"]}, indent=2))
    else:
        print(format_snapshot(snapshot))
