"""Tests for vlog.lib.log_lib.record and surface decoration."""

import io
from datetime import datetime

import pytest
from colorama import Fore, Style

from vlog.lib.log_lib import (
    EDITOR, LOGGING, PLAIN, TERMINAL, PRODUCT_PREFIX, CallerInfo,
    RecordBuffer, Surface, VLogLevel, build_record, detect_surface,
    format_exception_block, format_surface_list, get_surface, SURFACES,
)
from vlog.lib.log_lib.record import message_text


FIXED_NOW = datetime(2026, 10, 19, 14, 3, 27)


class Unprintable:
    def __str__(self):
        raise RuntimeError("no str for you")


def _raise(exc):
    try:
        raise exc
    except type(exc) as e:
        return e


# =============================================================================
# RecordBuffer
# =============================================================================

class TestRecordBuffer:
    def test_append_and_value(self):
        record = RecordBuffer("a")
        record.append("b").append(3)
        assert record.getvalue() == "ab3"
        assert str(record) == "ab3"
        assert len(record) == 3

    def test_insert(self):
        record = RecordBuffer("[x]")
        record.insert(0, "<").append(">")
        assert record.getvalue() == "<[x]>"

    def test_empty(self):
        assert RecordBuffer().getvalue() == ""
        assert len(RecordBuffer()) == 0


# =============================================================================
# build_record
# =============================================================================

class TestBuildRecord:
    """Segment order, tags and per-surface decoration."""

    def test_plain_record(self):
        record = build_record(VLogLevel.WARNING, "Net", "connection lost",
                              PLAIN, now=FIXED_NOW)
        assert record.getvalue() == "[2026-10-19 14:03] [WARNING] [VSDK Net] connection lost"

    def test_surface_with_own_timestamps_skips_stamp(self):
        record = build_record(VLogLevel.INFO, "Net", "hi", LOGGING, now=FIXED_NOW)
        assert record.getvalue() == "[INFO] [VSDK Net] hi"

    @pytest.mark.parametrize("level", list(VLogLevel))
    def test_always_has_level_and_prefix(self, level):
        text = build_record(level, "", "m", PLAIN).getvalue()
        assert f"[{level.name}]" in text
        assert PRODUCT_PREFIX in text

    def test_empty_category_omitted(self):
        text = build_record(VLogLevel.LOG, "", "m", LOGGING).getvalue()
        assert text == "[LOG] [VSDK] m"

    def test_none_category_omitted(self):
        text = build_record(VLogLevel.LOG, None, "m", LOGGING).getvalue()
        assert "[VSDK] " in text

    def test_none_message_is_empty(self):
        text = build_record(VLogLevel.INFO, "Net", None, LOGGING).getvalue()
        assert text == "[INFO] [VSDK Net] "

    def test_non_string_message(self):
        text = build_record(VLogLevel.INFO, "Net", {"a": 1}, LOGGING).getvalue()
        assert text.endswith("{'a': 1}")

    def test_unprintable_message_does_not_raise(self):
        text = build_record(VLogLevel.INFO, "Net", Unprintable(), LOGGING).getvalue()
        assert text.endswith("<unprintable Unprintable object>")

    @pytest.mark.parametrize("level,hex_color", [
        (VLogLevel.ERROR, "FF0000"),
        (VLogLevel.WARNING, "FFFF00"),
        (VLogLevel.LOG, "00FF00"),
        (VLogLevel.INFO, "00FF00"),
    ])
    def test_editor_level_colors(self, level, hex_color):
        text = build_record(level, "Net", "m", EDITOR).getvalue()
        assert text.startswith(f"<color=#{hex_color}>[{level.name}]</color> ")

    def test_terminal_level_colors(self):
        text = build_record(VLogLevel.ERROR, "Net", "m", TERMINAL, now=FIXED_NOW).getvalue()
        assert f"{Fore.RED}[ERROR]{Style.RESET_ALL}" in text
        assert text.startswith("[2026-10-19 14:03] ")

    def test_editor_links_category_to_caller(self):
        caller = CallerInfo("Net", "/src/app/net.py", 12)
        text = build_record(VLogLevel.LOG, "Net", "m", EDITOR,
                            caller=caller, working_dir="/src").getvalue()
        assert '<a href="app/net.py" line="12">[VSDK Net]</a> m' in text

    def test_link_omitted_without_location(self):
        caller = CallerInfo("Net")
        text = build_record(VLogLevel.LOG, "Net", "m", EDITOR, caller=caller).getvalue()
        assert "<a " not in text

    def test_plain_surface_never_links(self):
        caller = CallerInfo("Net", "/src/app/net.py", 12)
        text = build_record(VLogLevel.LOG, "Net", "m", LOGGING, caller=caller).getvalue()
        assert text == "[LOG] [VSDK Net] m"

    def test_ansi_links_use_osc8(self):
        surface = Surface("osc", supports_color=True, supports_timestamp_prefix=True,
                          supports_clickable_links=True, markup="ansi")
        caller = CallerInfo("Net", "/src/app/net.py", 12)
        text = build_record(VLogLevel.LOG, "Net", "m", surface,
                            caller=caller, working_dir="/elsewhere").getvalue()
        assert "\x1b]8;;file:///src/app/net.py\x1b\\[VSDK Net]\x1b]8;;\x1b\\" in text


class TestMessageText:
    def test_none(self):
        assert message_text(None) == ""

    def test_empty(self):
        assert message_text("") == ""


# =============================================================================
# Exception block
# =============================================================================

class TestExceptionBlock:
    def test_none_gives_empty(self):
        assert format_exception_block(None, PLAIN) == ""

    def test_unraised_exception(self):
        block = format_exception_block(ValueError("boom"), PLAIN)
        assert block == "\nValueError: boom\n=== STACK TRACE ===\n\n====="

    def test_raised_exception_has_trace(self):
        exc = _raise(KeyError("missing"))
        block = format_exception_block(exc, PLAIN, working_dir="/nonexistent-root")
        assert block.startswith("\nKeyError: 'missing'\n=== STACK TRACE ===\n")
        assert "test_record.py" in block
        assert "in _raise" in block
        assert block.endswith("\n=====")

    def test_editor_highlights_headline(self):
        block = format_exception_block(ValueError("boom"), EDITOR)
        assert "<color=#ff6666><b>ValueError:</b> boom</color>" in block

    def test_editor_links_trace_frames(self):
        exc = _raise(ValueError("boom"))
        block = format_exception_block(exc, EDITOR, working_dir="/nonexistent-root")
        assert '<a href="' in block
        assert "test_record.py:<b>" in block


# =============================================================================
# Surfaces
# =============================================================================

class TestSurfaces:
    def test_get_surface_by_name(self):
        assert get_surface("Editor") is EDITOR
        assert get_surface(TERMINAL) is TERMINAL

    def test_unknown_surface(self):
        with pytest.raises(ValueError, match="Unknown surface"):
            get_surface("hologram")

    def test_detect_non_tty(self):
        assert detect_surface(io.StringIO()) is PLAIN

    def test_detect_tty(self):
        class FakeTTY(io.StringIO):
            def isatty(self):
                return True

        assert detect_surface(FakeTTY()) is TERMINAL

    def test_detect_closed_stream(self):
        stream = io.StringIO()
        stream.close()
        assert detect_surface(stream) is PLAIN

    def test_detect_none(self):
        assert detect_surface(None) is PLAIN

    def test_surface_list_describes_presets(self):
        listing = format_surface_list()
        assert listing.startswith("Available surfaces:")
        for name in SURFACES:
            assert name in listing
        assert "Rich-text editor console" in listing
