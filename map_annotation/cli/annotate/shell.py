"""
Line-oriented annotation session.

Stands in for the map toolkit: every input line is either a map click
or one of the user commands, dispatched to the interaction controller.
"""

import inspect
import logging
import shlex
import sys
from gettext import gettext as _
from typing import Callable, Iterable

from map_annotation.core.annotation import AnnotationEvent, EventType, InteractionController
from map_annotation.core.errors import AnnotationError
from map_annotation.core.factory import create_controller
from map_annotation.interfaces import MapView, MapViewAdapter
from map_annotation.utils.config import load_config

logger = logging.getLogger(__name__)

HELP = _(
    """Commands:
  add-marker            next click places a marker
  click LNG LAT         click the map
  save-polygon          save the draft polygon
  clear-polygon         discard the draft polygon
  select ID             open the popup of a marker
  edit                  edit the marker of the open popup
  set title|image VALUE change a field of the marker being edited
  save-edit             save the marker being edited
  delete ID             delete a marker
  close                 close the popup
  status                show the current state
  help                  show this message
  quit                  leave the session"""
)


class AnnotationShell:
    """Parses command lines and drives a ``MapViewAdapter``."""

    def __init__(
        self,
        controller: InteractionController,
        view: MapView,
        write: Callable[[str], None] = print,
    ):
        self.controller = controller
        self.write = write
        self.adapter = MapViewAdapter(controller, view, notice_callback=self._notice)
        controller.events.on(EventType.MARKER_ADDED, self._on_marker_added)
        controller.events.on(EventType.POLYGON_SAVED, self._on_polygon_saved)

        self._commands = {
            "add-marker": self._add_marker,
            "click": self._click,
            "save-polygon": self._save_polygon,
            "clear-polygon": self._clear_polygon,
            "select": self._select,
            "edit": self._edit,
            "set": self._set,
            "save-edit": self._save_edit,
            "delete": self._delete,
            "close": self._close,
            "status": self._status,
            "help": self._help,
        }

    def _notice(self, message: str):
        self.write(f"! {message}")

    def _on_marker_added(self, event: AnnotationEvent):
        marker = event.data["marker"]
        self.write(_("Added marker {id}").format(id=marker["id"]))

    def _on_polygon_saved(self, event: AnnotationEvent):
        self.write(
            _("Saved polygon with {n} points").format(n=len(event.data["polygon"]))
        )

    def execute(self, line: str) -> bool:
        """
        Run one command line.

        Returns:
            False when the session should end.
        """
        try:
            words = shlex.split(line, comments=True)
        except ValueError as e:
            self.write(_("Error: {error}").format(error=e))
            return True
        if not words:
            return True

        name, *params = words
        if name in ("quit", "exit"):
            return False

        fn = self._commands.get(name)
        if fn is None:
            self.write(_("Unknown command: {name}").format(name=name))
            return True

        try:
            inspect.signature(fn).bind(*params)
        except TypeError:
            self.write(_("Wrong arguments for {name}").format(name=name))
            return True

        try:
            fn(*params)
        except (AnnotationError, ValueError) as e:
            self.write(_("Error: {error}").format(error=e))
        return True

    def run(self, lines: Iterable[str]):
        for line in lines:
            if not self.execute(line):
                break

    # Commands

    def _add_marker(self):
        self.controller.request_add_marker()
        self.write(_("Click the map to place the marker"))

    def _click(self, lng, lat):
        self.adapter.click(float(lng), float(lat))

    def _save_polygon(self):
        self.controller.save_draft_polygon()

    def _clear_polygon(self):
        self.controller.clear_draft_polygon()

    def _select(self, marker_id):
        if not self.adapter.marker_clicked(int(marker_id)):
            self.write(_("No marker with id {id}").format(id=marker_id))
            return
        self._show_popup()

    def _edit(self):
        self.controller.start_edit_marker()
        self._show_popup()

    def _set(self, key, *value):
        self.adapter.field_changed(key, " ".join(value))

    def _save_edit(self):
        self.controller.save_edit()
        self._show_popup()

    def _delete(self, marker_id):
        self.controller.delete_marker(int(marker_id))

    def _close(self):
        self.adapter.popup_closed()

    def _status(self):
        status = self.adapter.get_status()
        self.write(
            _(
                "mode={mode} markers={num_markers} polygons={num_polygons} draft={num_draft_points}"
            ).format(mode=self.controller.mode.value, **status)
        )
        self._show_popup()

    def _help(self):
        self.write(HELP)

    def _show_popup(self):
        popup = self.adapter.get_popup()
        if popup is None:
            return
        self.write(
            f"[{popup.kind}] {popup.header}: title={popup.title!r} "
            f"image={popup.image!r} actions={','.join(popup.actions)}"
        )


def handle(args):
    cfg = load_config()
    if args.storage is not None:
        cfg.storage.path = str(args.storage)
    controller = create_controller(cfg)
    shell = AnnotationShell(controller, MapView.from_config(cfg))

    if args.input is not None:
        with args.input.open("r", encoding="utf-8") as f:
            shell.run(f)
        return

    interactive = sys.stdin.isatty()
    while True:
        try:
            line = input("map> ") if interactive else sys.stdin.readline()
        except EOFError:
            break
        if not interactive and not line:
            break
        if not shell.execute(line):
            break
