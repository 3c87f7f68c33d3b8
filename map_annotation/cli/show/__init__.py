from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Show the stored markers and polygons")


def command(subparser):
    subparser.add_argument(
        "-s",
        "--storage",
        dest="storage",
        type=Path,
        help=_("Annotation storage folder (overrides MAPANNOT_storage__path)"),
    )
    subparser.add_argument(
        "--json",
        dest="as_json",
        action="store_true",
        help=_("Print the annotations as JSON"),
    )

    def handle(args):
        from .show import handle as show_handle

        show_handle(args)

    return handle
