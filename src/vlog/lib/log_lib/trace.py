"""
Stack trace reformatting.

Rewrites frame references in a raw stack trace into annotated, clickable
references. Two frame shapes are recognized:

    at Foo.Bar in /work/Assets/Foo.cs:42          (managed runtimes)
    File "/work/pkg/foo.py", line 42, in bar      (Python tracebacks)

A frame is only rewritten when the referenced file exists; otherwise the
text is left exactly as it was.
"""

import os
import re
import traceback
from typing import Optional

from .callers import shorten_path
from .surfaces import EDITOR, Surface, bold, link


AT_FRAME_RE = re.compile(r"at (.+) in (.*):(\d+)")
PY_FRAME_RE = re.compile(r'File "(.+)", line (\d+), in (.+)')


def _file_exists(path: str) -> bool:
    try:
        return os.path.isfile(path)
    except (OSError, ValueError):
        return False


def format_stack_trace(stack_trace: Optional[str], surface: Surface = None,
                       working_dir: str = None) -> str:
    """Annotate every resolvable frame reference in `stack_trace`.

    Args:
        stack_trace: Raw trace text (None is treated as empty)
        surface: Decides the markup; defaults to the editor's rich text
        working_dir: Prefix stripped from paths (default: os.getcwd())

    Returns:
        The trace with existing-file frames rewritten
    """
    if not stack_trace:
        return ''
    surface = surface or EDITOR
    root = working_dir if working_dir is not None else os.getcwd()

    def reference(path: str, line: str) -> Optional[str]:
        short = shorten_path(path, root)
        # Relative paths are relative to root, not to the process cwd
        if not _file_exists(os.path.join(root, short)):
            return None
        if not surface.supports_clickable_links:
            return f"{short}:{bold(line, surface)}"
        name = os.path.basename(short.replace('\\', '/'))
        return link(f"{name}:{bold(line, surface)}", short, line, surface)

    def at_frame(match):
        method, path, line = match.groups()
        ref = reference(path, line)
        if ref is None:
            return match.group(0)
        return f"at {method} in {ref}"

    def py_frame(match):
        path, line, method = match.groups()
        ref = reference(path, line)
        if ref is None:
            return match.group(0)
        return f"File {ref}, in {method}"

    formatted = AT_FRAME_RE.sub(at_frame, stack_trace)
    return PY_FRAME_RE.sub(py_frame, formatted)


def exception_stack_trace(exception: BaseException) -> str:
    """Raw traceback text of a raised exception ('' if never raised)."""
    tb = getattr(exception, '__traceback__', None)
    if tb is None:
        return ''
    return ''.join(traceback.format_tb(tb)).rstrip('\n')
