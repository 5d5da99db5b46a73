"""vlog surface — show or change the configured output surface.

    vlog surface                  # active surface plus the presets
    vlog surface editor           # write to the project .vlog.json
    vlog surface terminal --global

The project file is the nearest .vlog.json above the working directory,
created in the working directory when there is none. --global writes
~/.vlog/config.json instead. Other keys in either file are kept.
"""

import argparse
import os
import sys
from pathlib import Path

from vlog.config import (
    load_global_config,
    load_project_config,
    save_global_config,
    save_project_config,
)
from vlog.lib.log_lib import format_surface_list, get_surface


def register(subparsers, parents):
    """Register the 'surface' subcommand."""
    p = subparsers.add_parser(
        "surface",
        parents=parents,
        help="Show or set the configured output surface",
        description=(
            "Show the active surface, or persist NAME as the default.\n"
            "\n" + format_surface_list()
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("name", nargs="?", metavar="NAME",
                   help="Surface preset to remember")
    p.add_argument("--global", dest="global_config", action="store_true",
                   help="Write the global config instead of the project's")
    p.set_defaults(func=run)


def run(args):
    """Execute the surface command."""
    if args.name is None:
        print(f"Active surface: {args.vlog.surface.name}")
        print()
        print(format_surface_list())
        return 0

    try:
        surface = get_surface(args.name)
    except ValueError as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        return 1

    if args.global_config:
        data = load_global_config()
        data["surface"] = surface.name
        path = save_global_config(data)
    else:
        data, existing = load_project_config()
        data["surface"] = surface.name
        project_dir = existing.parent if existing else Path(os.getcwd())
        path = save_project_config(data, str(project_dir))

    print(f"  [OK] Surface set to {surface.name} ({path})")
    return 0

