"""vlog emit — send one record through the full logging pipeline.

Useful to preview how a surface renders records, or to log from shell
scripts with the same format as the application:

    vlog emit warning "connection lost" --category Net
    vlog --surface editor emit error "upload failed"
"""

import argparse
import sys

from vlog.lib.log_lib import VLogLevel, parse_level


def register(subparsers, parents):
    """Register the 'emit' subcommand."""
    p = subparsers.add_parser(
        "emit",
        parents=parents,
        help="Log a single record",
        description="Filter, format and dispatch one record like an application would.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("level", metavar="LEVEL",
                   help="One of: " + ", ".join(lvl.display_name for lvl in VLogLevel))
    p.add_argument("message", metavar="MESSAGE", help="Record text")
    p.add_argument("--category", metavar="NAME", default=None,
                   help="Record category (default: inferred, i.e. 'emit')")
    p.set_defaults(func=run)


def run(args):
    """Execute the emit command."""
    level = parse_level(args.level)
    if level is None:
        print(f"  ERROR: unknown level '{args.level}'", file=sys.stderr)
        return 1
    args.vlog.log(level, args.category, args.message)
    return 0
