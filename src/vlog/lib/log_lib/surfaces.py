"""
Output surface descriptors and text decoration.

A surface describes what the final destination of a record can render.
The host decides it once at startup; the record builder and stack trace
formatter only ask it questions:

    supports_color            -- severity colors and highlights
    supports_timestamp_prefix -- destination prefixes its own timestamps
    supports_clickable_links  -- caller and stack frame links
    markup                    -- 'rich_text', 'ansi' or 'plain'

'rich_text' emits the tag markup understood by editor consoles
(<color=#..>, <b>, <a href line>). 'ansi' uses colorama escape codes
plus OSC 8 hyperlinks for terminals.
"""

import os
from dataclasses import dataclass
from typing import Dict

from colorama import Fore, Style

from .levels import VLogLevel


@dataclass(frozen=True)
class Surface:
    """Capabilities of an output surface."""
    name: str
    supports_color: bool = False
    supports_timestamp_prefix: bool = False
    supports_clickable_links: bool = False
    markup: str = 'plain'


EDITOR = Surface('editor', supports_color=True, supports_timestamp_prefix=True,
                 supports_clickable_links=True, markup='rich_text')
TERMINAL = Surface('terminal', supports_color=True, markup='ansi')
LOGGING = Surface('logging', supports_timestamp_prefix=True)
PLAIN = Surface('plain')

SURFACES: Dict[str, Surface] = {s.name: s for s in (EDITOR, TERMINAL, LOGGING, PLAIN)}

SURFACE_DESCRIPTIONS = {
    'editor':   'Rich-text editor console (colors, links, own timestamps)',
    'terminal': 'ANSI terminal (colors)',
    'logging':  'Standard library logging handlers (own timestamps)',
    'plain':    'Undecorated text with timestamps',
}


def get_surface(name) -> Surface:
    """Look up a preset surface by name (case-insensitive).

    Raises:
        ValueError: if no preset has that name
    """
    if isinstance(name, Surface):
        return name
    try:
        return SURFACES[str(name).strip().lower()]
    except KeyError:
        known = ', '.join(sorted(SURFACES))
        raise ValueError(f"Unknown surface {name!r} (known: {known})") from None


def format_surface_list() -> str:
    """Format the preset surfaces with descriptions for display."""
    lines = ["Available surfaces:"]
    max_name = max(len(name) for name in SURFACES)
    for name in SURFACES:
        desc = SURFACE_DESCRIPTIONS.get(name, '')
        lines.append(f"  {name:<{max_name}}  {desc}")
    return "\n".join(lines)


def detect_surface(stream=None) -> Surface:
    """Pick TERMINAL for an interactive stream, PLAIN otherwise."""
    isatty = getattr(stream, 'isatty', None)
    try:
        if isatty is not None and isatty():
            return TERMINAL
    except (OSError, ValueError):
        pass
    return PLAIN


# =============================================================================
# Decoration
# =============================================================================

# Hex colors for rich-text markup, ANSI colors for terminals
LEVEL_HEX = {
    VLogLevel.ERROR: 'FF0000',
    VLogLevel.WARNING: 'FFFF00',
}
LEVEL_ANSI = {
    VLogLevel.ERROR: Fore.RED,
    VLogLevel.WARNING: Fore.YELLOW,
}
DEFAULT_HEX = '00FF00'
DEFAULT_ANSI = Fore.GREEN

EXCEPTION_HEX = 'ff6666'
EXCEPTION_ANSI = Fore.LIGHTRED_EX


def _wrap_color(text: str, hex_color: str, ansi_color: str, surface: Surface) -> str:
    if not surface.supports_color:
        return text
    if surface.markup == 'rich_text':
        return f"<color=#{hex_color}>{text}</color>"
    if surface.markup == 'ansi':
        return f"{ansi_color}{text}{Style.RESET_ALL}"
    return text


def level_color(text: str, level: VLogLevel, surface: Surface) -> str:
    """Color `text` red, yellow or green by severity."""
    return _wrap_color(text, LEVEL_HEX.get(level, DEFAULT_HEX),
                       LEVEL_ANSI.get(level, DEFAULT_ANSI), surface)


def exception_color(text: str, surface: Surface) -> str:
    """Highlight an exception headline."""
    return _wrap_color(text, EXCEPTION_HEX, EXCEPTION_ANSI, surface)


def bold(text: str, surface: Surface) -> str:
    """Bold `text` where the markup supports it."""
    if surface.markup == 'rich_text':
        return f"<b>{text}</b>"
    if surface.markup == 'ansi' and surface.supports_color:
        return f"{Style.BRIGHT}{text}{Style.NORMAL}"
    return text


def link(text: str, path: str, line, surface: Surface) -> str:
    """Make `text` a clickable reference to `path` at `line`.

    Returned unchanged when the surface has no clickable links.
    """
    if not surface.supports_clickable_links or not path:
        return text
    if surface.markup == 'rich_text':
        return f'<a href="{path}" line="{line}">{text}</a>'
    if surface.markup == 'ansi':
        uri = 'file://' + os.path.abspath(path).replace(os.sep, '/')
        return f"\x1b]8;;{uri}\x1b\\{text}\x1b]8;;\x1b\\"
    return text
