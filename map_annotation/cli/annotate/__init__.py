# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Annotate the map from a line-oriented command session")


def command(subparser):
    subparser.add_argument(
        "-s",
        "--storage",
        dest="storage",
        type=Path,
        help=_("Annotation storage folder (overrides MAPANNOT_storage__path)"),
    )
    subparser.add_argument(
        "-i",
        "--input",
        dest="input",
        type=Path,
        help=_("Read commands from this file instead of standard input"),
    )

    def handle(args):
        from .shell import handle as shell_handle

        shell_handle(args)

    return handle
