"""
log_lib — leveled, category-tagged logging in front of a host's console.

A reusable logging core providing:
- Four severity levels with a persisted, runtime-adjustable threshold
- Error-only suppression for release (optimized) runs
- Category inference from the calling class or module
- Surface-aware decoration (rich-text, ANSI, plain) and stack trace links
- Pre-log hooks that enrich records before dispatch
- Three-channel sink dispatch (error, warning, standard)

Public API:
    VLog               — the logging facility
    install_vlog       — set the singleton
    get_vlog           — access singleton
    VLogLevel          — severity enum
    LogSettings        — suppression flag + verbosity threshold
    PreLogHooks        — pre-log hook registry
    Surface            — output surface capabilities
    StreamSink, LoggingSink, MemorySink — sinks
    format_stack_trace — annotate frame references in a trace
"""

from .manager import VLog, install_vlog, get_vlog, reset_vlog, is_initialized
from .levels import VLogLevel, DEFAULT_LEVEL, parse_level, should_emit
from .settings import (
    LogSettings, MemoryPreferenceStore, PreferenceStore, LOG_LEVEL_KEY,
)
from .hooks import PreLogHooks
from .callers import (
    CALLER_FRAME_OFFSET, NO_STACKTRACE, CallerInfo, resolve_caller, resolve_category,
)
from .record import PRODUCT_PREFIX, RecordBuffer, build_record, format_exception_block
from .trace import format_stack_trace
from .channels import (
    ERROR_CHANNEL, WARNING_CHANNEL, STANDARD_CHANNEL, KNOWN_CHANNELS,
    CHANNEL_DESCRIPTIONS, channel_for_level, dispatch, format_channel_list,
)
from .sinks import LogSink, StreamSink, LoggingSink, MemorySink
from .surfaces import (
    Surface, SURFACES, EDITOR, TERMINAL, LOGGING, PLAIN,
    get_surface, detect_surface, format_surface_list,
)

__all__ = [
    'VLog', 'install_vlog', 'get_vlog', 'reset_vlog', 'is_initialized',
    'VLogLevel', 'DEFAULT_LEVEL', 'parse_level', 'should_emit',
    'LogSettings', 'MemoryPreferenceStore', 'PreferenceStore', 'LOG_LEVEL_KEY',
    'PreLogHooks',
    'CALLER_FRAME_OFFSET', 'NO_STACKTRACE', 'CallerInfo', 'resolve_caller', 'resolve_category',
    'PRODUCT_PREFIX', 'RecordBuffer', 'build_record', 'format_exception_block',
    'format_stack_trace',
    'ERROR_CHANNEL', 'WARNING_CHANNEL', 'STANDARD_CHANNEL', 'KNOWN_CHANNELS',
    'CHANNEL_DESCRIPTIONS', 'channel_for_level', 'dispatch', 'format_channel_list',
    'LogSink', 'StreamSink', 'LoggingSink', 'MemorySink',
    'Surface', 'SURFACES', 'EDITOR', 'TERMINAL', 'LOGGING', 'PLAIN',
    'get_surface', 'detect_surface', 'format_surface_list',
]
