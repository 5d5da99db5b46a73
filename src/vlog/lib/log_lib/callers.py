"""
Caller resolution: who invoked the public logging entry point.

When no category is passed, VLog names the record after the caller's
declaring class (or module). The same frame supplies the file and line
used for the clickable category link, so both always agree.

Call-depth coupling
-------------------
resolve_caller() is reached through a fixed chain of facility frames:

    caller -> VLog.log -> VLog._log -> resolve_caller

CALLER_FRAME_OFFSET counts the facility frames above resolve_caller
(VLog._log and VLog.log). Every public wrapper that adds a frame
(VLog.info, vlog.output.warn, ...) passes ``stacklevel + 1`` down,
so the constant only changes if that chain changes. tests/test_callers.py
pins it against the real call depth.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


CALLER_FRAME_OFFSET = 2

# Category used when the stack cannot be inspected
NO_STACKTRACE = "NoStacktrace"


@dataclass(frozen=True)
class CallerInfo:
    """Identity and source location of a logging call site."""
    category: str
    filename: Optional[str] = None
    lineno: Optional[int] = None


def _declaring_name(frame) -> str:
    """Short name of the class declaring the frame's code, else its module."""
    code = frame.f_code
    qualname = getattr(code, 'co_qualname', None)
    if qualname:
        parts = qualname.split('.')
        if len(parts) > 1 and parts[-2] != '<locals>':
            return parts[-2]
    else:
        # Interpreters without co_qualname: fall back to the bound instance
        f_locals = frame.f_locals
        if 'self' in f_locals:
            return type(f_locals['self']).__name__
        if isinstance(f_locals.get('cls'), type):
            return f_locals['cls'].__name__

    module = frame.f_globals.get('__name__') or ''
    if module == '__main__' or not module:
        return Path(code.co_filename).stem
    return module.rsplit('.', 1)[-1]


def resolve_caller(stacklevel: int = 1) -> Optional[CallerInfo]:
    """Inspect the stack for the external caller of VLog.log.

    Args:
        stacklevel: 1 when VLog.log was called directly, plus one for
            every wrapper between the caller and VLog.log

    Returns:
        CallerInfo, or None if the frame does not exist
    """
    try:
        frame = sys._getframe(CALLER_FRAME_OFFSET + stacklevel)
    except (AttributeError, ValueError):
        return None
    try:
        filename = frame.f_code.co_filename
        return CallerInfo(
            category=_declaring_name(frame) or NO_STACKTRACE,
            filename=filename.replace('\\', '/') if filename else None,
            lineno=frame.f_lineno,
        )
    finally:
        del frame


def resolve_category(explicit: Optional[str], caller: Optional[CallerInfo]) -> str:
    """Return the explicit category, or the caller's, or the sentinel."""
    if explicit:
        return explicit
    if caller is None:
        return NO_STACKTRACE
    return caller.category


def shorten_path(path: str, working_dir: str = None) -> str:
    """Strip the working directory prefix from `path`."""
    if not path:
        return path
    root = working_dir if working_dir is not None else os.getcwd()
    root = root.replace('\\', '/').rstrip('/')
    normalized = path.replace('\\', '/')
    if root and normalized.startswith(root + '/'):
        return normalized[len(root) + 1:]
    return path
