"""
VLog — the leveled, category-tagged logging facility.

Pipeline for one call:

    gate (LogSettings.should_emit)
      → caller/category resolution (callers.py)
      → base record (record.build_record)
      → pre-log hooks (hooks.PreLogHooks)
      → exception block, when an exception was passed
      → sink dispatch (channels.dispatch)

Logging is a side channel: nothing raised inside the pipeline reaches
the caller. Failures are written as one line to `diagnostics`.
"""

import sys
import traceback
from datetime import datetime
from typing import Any, Callable, Optional, TextIO

from .callers import resolve_caller, resolve_category
from .channels import dispatch
from .hooks import PreLogHook, PreLogHooks
from .levels import VLogLevel, parse_level
from .record import build_record, format_exception_block
from .settings import LogSettings
from .sinks import LogSink, StreamSink
from .surfaces import Surface, detect_surface


class VLog:
    """Leveled logger with category inference and pre-log hooks.

    Usage::

        log = VLog(surface=TERMINAL)
        log.info("heartbeat")                     # category from caller
        log.warn("Net", "connection lost")
        log.error("Upload failed", exc)
        log.log(VLogLevel.LOG, "Audio", "buffer resized")
    """

    def __init__(
        self,
        settings: LogSettings = None,
        surface: Surface = None,
        sink: LogSink = None,
        hooks: PreLogHooks = None,
        clock: Callable[[], datetime] = None,
        diagnostics: TextIO = None,
        working_dir: str = None,
    ):
        self.settings = settings if settings is not None else LogSettings()
        self.surface = surface if surface is not None else detect_surface(sys.stderr)
        self.sink = sink if sink is not None else StreamSink()
        self.hooks = hooks if hooks is not None else PreLogHooks()
        self.clock = clock or datetime.now
        self.diagnostics = diagnostics
        self.working_dir = working_dir

    # -------------------------------------------------------------------------
    # Level policy
    # -------------------------------------------------------------------------

    @property
    def log_level(self) -> VLogLevel:
        """Verbosity threshold (persisted on assignment)."""
        return self.settings.log_level

    @log_level.setter
    def log_level(self, value) -> None:
        self.settings.log_level = value

    @property
    def suppress_logs(self) -> bool:
        return self.settings.suppress_logs

    def should_emit(self, level) -> bool:
        """True if a record at `level` would be dispatched."""
        return self.settings.should_emit(VLogLevel(level))

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def add_pre_log_hook(self, hook: PreLogHook) -> PreLogHook:
        return self.hooks.add(hook)

    def remove_pre_log_hook(self, hook: PreLogHook) -> bool:
        return self.hooks.remove(hook)

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def info(self, *args: Any, stacklevel: int = 1) -> None:
        """info(message) or info(category, message) at INFO."""
        category, message, _ = _split_args(args, allow_exception=False)
        self.log(VLogLevel.INFO, category, message, stacklevel=stacklevel + 1)

    def debug(self, *args: Any, stacklevel: int = 1) -> None:
        """debug(message) or debug(category, message) at LOG."""
        category, message, _ = _split_args(args, allow_exception=False)
        self.log(VLogLevel.LOG, category, message, stacklevel=stacklevel + 1)

    def warn(self, *args: Any, exception: BaseException = None,
             stacklevel: int = 1) -> None:
        """warn(message[, exception]) or warn(category, message[, exception]).

        A second positional argument that is an exception or None is the
        exception, so warn("Net", None) logs message "Net" with an inferred
        category. Pass the category with a message: warn("Net", "").
        """
        category, message, exc = _split_args(args, exception=exception)
        self.log(VLogLevel.WARNING, category, message, exc, stacklevel=stacklevel + 1)

    def error(self, *args: Any, exception: BaseException = None,
              stacklevel: int = 1) -> None:
        """error(message[, exception]) or error(category, message[, exception]).

        Two-argument calls resolve the same way as warn().
        """
        category, message, exc = _split_args(args, exception=exception)
        self.log(VLogLevel.ERROR, category, message, exc, stacklevel=stacklevel + 1)

    def log(self, level, category: Optional[str], message: Any,
            exception: BaseException = None, *, stacklevel: int = 1) -> None:
        """Filter, build, enrich and dispatch one record.

        Args:
            level: VLogLevel (or anything parse_level accepts)
            category: Explicit category; None/'' infers it from the caller
            message: Record body; None gives an empty body
            exception: Optional exception appended with its stack trace
            stacklevel: 1 for a direct call, +1 per wrapper in between
        """
        self._log(level, category, message, exception, stacklevel)

    def _log(self, level, category, message, exception, stacklevel) -> None:
        try:
            resolved_level = parse_level(level)
            if resolved_level is None:
                raise ValueError(f"Unknown log level: {level!r}")
            if not self.settings.should_emit(resolved_level):
                return

            caller = None
            if not category or self.surface.supports_clickable_links:
                # Must stay a direct call from here; see callers.CALLER_FRAME_OFFSET
                caller = resolve_caller(stacklevel)

            record = build_record(
                resolved_level,
                resolve_category(category, caller),
                message,
                self.surface,
                caller=caller,
                now=self.clock(),
                working_dir=self.working_dir,
            )
            self.hooks.invoke(record, category, resolved_level,
                              on_error=self._hook_failed)

            text = record.getvalue()
            if exception is not None:
                text += format_exception_block(exception, self.surface, self.working_dir)

            dispatch(self.sink, resolved_level, text)
        except Exception as e:
            self._report("log call", e)

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def _hook_failed(self, hook: PreLogHook, error: Exception) -> None:
        name = getattr(hook, '__qualname__', None) or repr(hook)
        self._report(f"pre-log hook {name}", error)

    def _report(self, what: str, error: Exception) -> None:
        stream = self.diagnostics if self.diagnostics is not None else sys.stderr
        detail = traceback.format_exception_only(type(error), error)[-1].strip()
        try:
            print(f"[VSDK] {what} failed: {detail}", file=stream)
        except (OSError, ValueError):
            pass


def _split_args(args, exception=None, allow_exception=True):
    """Map positional shorthand arguments to (category, message, exception).

    One argument is the message. Two are (category, message), except for
    warn/error where a second argument that is an exception or None makes
    them (message, exception). Three are (category, message, exception).
    """
    if len(args) == 1:
        return None, args[0], exception
    if len(args) == 2:
        first, second = args
        if allow_exception and (second is None or isinstance(second, BaseException)):
            return None, first, second if second is not None else exception
        return first, second, exception
    if len(args) == 3 and allow_exception:
        return args[0], args[1], args[2] if args[2] is not None else exception
    expected = "1 to 3" if allow_exception else "1 or 2"
    raise TypeError(f"expected {expected} positional arguments, got {len(args)}")


# =============================================================================
# Module-level singleton
# =============================================================================

_vlog: Optional[VLog] = None


def install_vlog(vlog: VLog) -> VLog:
    """Make `vlog` the process-wide facility returned by get_vlog()."""
    global _vlog
    _vlog = vlog
    return _vlog


def is_initialized() -> bool:
    return _vlog is not None


def get_vlog() -> VLog:
    """Get the module-level VLog, creating a default if needed."""
    global _vlog
    if _vlog is None:
        _vlog = VLog()
    return _vlog


def reset_vlog() -> None:
    """Drop the module-level VLog (next get_vlog() builds a new one)."""
    global _vlog
    _vlog = None
