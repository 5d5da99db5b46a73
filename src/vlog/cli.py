"""Main CLI entry point for vlog.

Implements a Docker-style two-pass argument parser:
  1. First pass: extract global flags (--config, --no-color, --surface)
  2. Second pass: dispatch to subcommand with shared parent args

Global flags can appear before OR after the subcommand:
  vlog --surface editor emit info "hello"      # works
  vlog emit info "hello" --surface editor      # also works

Subcommands self-register via register(subparsers, parents) convention.
"""

import argparse
import sys

from vlog._version import BASE_VERSION, VERSION


# ---------------------------------------------------------------------------
# Global flags (Docker-style: can precede the subcommand)
# ---------------------------------------------------------------------------
GLOBAL_FLAGS = {
    "--config": {"metavar": "PATH", "default": None,
                 "help": "Preference file (default: ~/.vlog/config.json)"},
    "--surface": {"metavar": "NAME", "default": None,
                  "help": "Output surface: editor, terminal, logging, plain"},
    "--no-color": {"action": "store_true", "default": False,
                   "help": "Disable colored output (same as --surface plain)"},
    "--list-channels": {"action": "store_true", "default": False,
                        "help": "List sink channels and exit"},
    "--list-surfaces": {"action": "store_true", "default": False,
                        "help": "List output surface presets and exit"},
}


def _extract_global_flags(argv):
    """Two-pass parse: pull global flags from anywhere in argv.

    Returns (global_namespace, remaining_argv).
    """
    global_parser = argparse.ArgumentParser(add_help=False)
    for flag, kwargs in GLOBAL_FLAGS.items():
        global_parser.add_argument(flag, **kwargs)

    global_args, remaining = global_parser.parse_known_args(argv)
    return global_args, remaining


# ---------------------------------------------------------------------------
# Subcommand discovery and registration
# ---------------------------------------------------------------------------
def _discover_commands():
    """Import and return all command modules.

    Each module in vlog.commands must export:
      register(subparsers, parents) — add itself to the subparser
      run(args) — execute the command
    """
    from vlog.commands import emit, level, surface
    return [level, surface, emit]


def _build_parser(commands):
    """Build the main argparse parser with subcommand dispatch."""
    parser = argparse.ArgumentParser(
        prog="vlog",
        description="vlog — leveled VSDK console logging",
        epilog=(
            "Run 'vlog <command> --help' for details on a specific command.\n"
            "\n"
            "Global flags (--config, --surface, --no-color) can appear\n"
            "before or after the subcommand."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"vlog {BASE_VERSION} ({VERSION})",
    )

    # Add global flags to main parser too (for --help display)
    for flag, kwargs in GLOBAL_FLAGS.items():
        parser.add_argument(flag, **kwargs)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        metavar="<command>",
    )

    for cmd_module in commands:
        cmd_module.register(subparsers, parents=[])

    return parser


def _init_from_globals(global_args):
    """Build the process-wide VLog honoring the global flags."""
    from vlog.config import JsonPreferenceStore
    from vlog.output import init_vlog

    surface = "plain" if global_args.no_color else global_args.surface
    store = JsonPreferenceStore(global_args.config) if global_args.config else None
    return init_vlog(store=store, surface=surface)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def main(argv=None):
    """Main entry point for vlog CLI.

    Args:
        argv: Command-line arguments. None means sys.argv[1:].

    Returns:
        Exit code (0 = success).
    """
    if argv is None:
        argv = sys.argv[1:]

    # Pass 1: extract global flags from anywhere in the arg list
    global_args, remaining = _extract_global_flags(argv)

    if global_args.list_channels:
        from vlog.lib.log_lib import format_channel_list
        print(format_channel_list())
        return 0

    if global_args.list_surfaces:
        from vlog.lib.log_lib import format_surface_list
        print(format_surface_list())
        return 0

    # Pass 2: parse subcommand args
    parser = _build_parser(_discover_commands())

    if not remaining:
        parser.print_help()
        return 0

    args = parser.parse_args(remaining)

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    for key, value in vars(global_args).items():
        if key not in vars(args) or getattr(args, key) is None:
            setattr(args, key, value)

    try:
        args.vlog = _init_from_globals(global_args)
    except ValueError as e:
        print(f"  ERROR: {e}", file=sys.stderr)
        return 1

    try:
        return args.func(args) or 0
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1


if __name__ == "__main__":
    sys.exit(main())
