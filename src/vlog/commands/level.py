"""vlog level — show or change the persisted verbosity threshold.

    vlog level            # print the current level
    vlog level info       # remember Info as the threshold

The value is stored under VSDK_EDITOR_LOG_LEVEL in the preference file
(~/.vlog/config.json, or --config PATH) and picked up by every process
that logs through vlog afterwards.
"""

import argparse
import sys

from vlog.lib.log_lib import VLogLevel, parse_level


def register(subparsers, parents):
    """Register the 'level' subcommand."""
    p = subparsers.add_parser(
        "level",
        parents=parents,
        help="Show or set the persisted verbosity level",
        description=(
            "Show the verbosity threshold, or set it when LEVEL is given.\n"
            "Records less severe than the threshold are dropped."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "level", nargs="?", metavar="LEVEL",
        help="One of: " + ", ".join(lvl.display_name for lvl in VLogLevel),
    )
    p.set_defaults(func=run)


def run(args):
    """Execute the level command."""
    vlog = args.vlog

    if args.level is None:
        print(vlog.log_level.display_name)
        return 0

    level = parse_level(args.level)
    if level is None:
        names = ", ".join(lvl.display_name for lvl in VLogLevel)
        print(f"  ERROR: unknown level '{args.level}' (expected one of: {names})",
              file=sys.stderr)
        return 1

    vlog.log_level = level
    print(f"  [OK] Log level set to {level.display_name}")
    return 0
