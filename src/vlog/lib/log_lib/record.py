"""
Record assembly.

A record is built left to right into a RecordBuffer:

    [2026-10-19 14:03] [WARNING] [VSDK Net] connection lost
    └─ timestamp ────┘ └ level ┘ └ category ┘ └ message ─────┘

The timestamp is skipped on surfaces that stamp lines themselves; colors
and links are only applied where the surface renders them. Pre-log hooks
receive the same buffer and may append to it before dispatch.
"""

from datetime import datetime
from typing import List, Optional

from .callers import CallerInfo, shorten_path
from .levels import VLogLevel
from .surfaces import Surface, bold, exception_color, level_color, link
from .trace import exception_stack_trace, format_stack_trace


PRODUCT_PREFIX = "VSDK"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


class RecordBuffer:
    """Mutable text buffer for one log call."""

    def __init__(self, text: str = ''):
        self._parts: List[str] = [text] if text else []

    def append(self, text) -> 'RecordBuffer':
        self._parts.append(str(text))
        return self

    def insert(self, index: int, text) -> 'RecordBuffer':
        value = self.getvalue()
        self._parts = [value[:index], str(text), value[index:]]
        return self

    def getvalue(self) -> str:
        if len(self._parts) > 1:
            self._parts = [''.join(self._parts)]
        return self._parts[0] if self._parts else ''

    def __len__(self) -> int:
        return sum(len(p) for p in self._parts)

    def __str__(self) -> str:
        return self.getvalue()

    def __repr__(self) -> str:
        return f"RecordBuffer({self.getvalue()!r})"


def message_text(message) -> str:
    """String form of a log message; '' for None. Never raises."""
    if message is None:
        return ''
    try:
        return str(message)
    except Exception:
        return f"<unprintable {type(message).__name__} object>"


def build_record(level: VLogLevel, category: Optional[str], message,
                 surface: Surface, caller: CallerInfo = None,
                 now: datetime = None, working_dir: str = None) -> RecordBuffer:
    """Compose timestamp, level tag, category tag and message body.

    Args:
        level: Record level
        category: Resolved category ('' or None omits it from the tag)
        message: Any object; None gives an empty body
        surface: Output surface capabilities
        caller: Call site for the category link, if known
        now: Timestamp override (default: datetime.now())
        working_dir: Prefix stripped from the caller path in links

    Returns:
        RecordBuffer holding the base record text
    """
    record = RecordBuffer()

    if not surface.supports_timestamp_prefix:
        stamp = now if now is not None else datetime.now()
        record.append(f"[{stamp.strftime(TIMESTAMP_FORMAT)}] ")

    record.append(level_color(level.tag, level, surface))
    record.append(' ')

    tag = f"[{PRODUCT_PREFIX} {category}]" if category else f"[{PRODUCT_PREFIX}]"
    if caller is not None and caller.filename:
        tag = link(tag, shorten_path(caller.filename, working_dir),
                   caller.lineno, surface)
    record.append(tag)
    record.append(' ')

    record.append(message_text(message))
    return record


def format_exception_block(exception: Optional[BaseException], surface: Surface,
                           working_dir: str = None) -> str:
    """Exception headline plus its formatted stack trace.

    Returns '' when `exception` is None.
    """
    if exception is None:
        return ''
    headline = (f"{bold(type(exception).__name__ + ':', surface)} "
                f"{message_text(exception)}")
    trace = format_stack_trace(exception_stack_trace(exception), surface, working_dir)
    return (f"\n{exception_color(headline, surface)}"
            f"\n=== STACK TRACE ===\n{trace}\n=====")
