"""Module-level logging API for vlog.

One-stop import for applications::

    from vlog import output as vlog

    vlog.info("heartbeat")
    vlog.warn("Net", "connection lost")
    vlog.error("Upload failed", exc)

Every function delegates to the process-wide VLog. The first call
builds it from the layered config (see vlog.config) unless init_vlog()
was called at startup.

Also re-exports the log_lib public API for convenience imports.
"""

import threading

from vlog.config import JsonPreferenceStore, as_bool, resolve_config
from vlog.lib.log_lib import manager as _manager_mod

# Re-export log_lib public API
from vlog.lib.log_lib import (                        # noqa: F401
    VLog, VLogLevel, LogSettings, PreLogHooks, RecordBuffer,
    StreamSink, LoggingSink, MemorySink, MemoryPreferenceStore,
    Surface, EDITOR, TERMINAL, LOGGING, PLAIN,
    get_surface, get_vlog, format_stack_trace, parse_level,
)


def init_vlog(store=None, surface=None, sink=None, suppress_logs=None,
              runtime_level=None, working_dir=None, start_dir=None,
              **kwargs):
    """Build the process-wide VLog and install it.

    Arguments left as None are resolved from .vlog.json and
    ~/.vlog/config.json. Remaining keyword arguments (hooks, clock,
    diagnostics) go straight to VLog.

    Args:
        store: Preference store for the verbosity level
            (default: JsonPreferenceStore on the global config)
        surface: Surface or preset name ('editor', 'terminal', ...)
        sink: LogSink (default: StreamSink)
        suppress_logs: Errors only; default is ``not __debug__``
        runtime_level: Whether the verbosity threshold applies (default True)
        working_dir: Prefix stripped from paths in links
        start_dir: Where the .vlog.json search starts (default: cwd)

    Returns:
        The installed VLog
    """
    cfg = resolve_config({
        "surface": surface,
        "suppress_logs": suppress_logs,
        "runtime_level": runtime_level,
        "working_dir": working_dir,
    }, start_dir=start_dir)

    settings = LogSettings(
        store=store if store is not None else JsonPreferenceStore(),
        suppress_logs=as_bool(cfg["suppress_logs"]),
        runtime_level=as_bool(cfg["runtime_level"], default=True),
    )
    resolved_surface = cfg["surface"]
    if resolved_surface is not None:
        resolved_surface = get_surface(resolved_surface)

    vlog = VLog(
        settings=settings,
        surface=resolved_surface,
        sink=sink,
        working_dir=cfg["working_dir"],
        **kwargs,
    )
    return _manager_mod.install_vlog(vlog)


_init_lock = threading.Lock()


def _facility():
    if _manager_mod.is_initialized():
        return _manager_mod.get_vlog()
    with _init_lock:
        if not _manager_mod.is_initialized():
            init_vlog()
        return _manager_mod.get_vlog()


def info(*args, stacklevel=1):
    """Log at INFO: info(message) or info(category, message)."""
    _facility().info(*args, stacklevel=stacklevel + 1)


def debug(*args, stacklevel=1):
    """Log at LOG: debug(message) or debug(category, message)."""
    _facility().debug(*args, stacklevel=stacklevel + 1)


def warn(*args, exception=None, stacklevel=1):
    """Log at WARNING: warn([category,] message[, exception])."""
    _facility().warn(*args, exception=exception, stacklevel=stacklevel + 1)


def error(*args, exception=None, stacklevel=1):
    """Log at ERROR: error([category,] message[, exception])."""
    _facility().error(*args, exception=exception, stacklevel=stacklevel + 1)


def log(level, category, message, exception=None, stacklevel=1):
    """Log at an explicit level."""
    _facility().log(level, category, message, exception, stacklevel=stacklevel + 1)


def add_pre_log_hook(hook):
    """Register a pre-log hook on the process-wide VLog."""
    return _facility().add_pre_log_hook(hook)


def remove_pre_log_hook(hook):
    """Unregister a pre-log hook. Returns False if it was not registered."""
    return _facility().remove_pre_log_hook(hook)


def get_log_level():
    """Current verbosity threshold."""
    return _facility().log_level


def set_log_level(level):
    """Set and persist the verbosity threshold.

    Raises:
        ValueError: if `level` is not a known level
    """
    _facility().log_level = level
    return _facility().log_level
