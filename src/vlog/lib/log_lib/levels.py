"""
VLog severity levels.

Lower value means more severe. The emit rule against the verbosity
threshold is simple:

    level <= threshold  →  record is shown

Level assignments:
    ←── severe ──────────────── chatty ──→
      0        1        2       3
    Error   Warning    Log     Info
"""

from enum import IntEnum


class VLogLevel(IntEnum):
    """Severity rank of a log record. The numeric order never changes."""
    ERROR = 0
    WARNING = 1
    LOG = 2
    INFO = 3

    @property
    def display_name(self) -> str:
        """Name as persisted and shown to users ('Error', 'Warning', ...)."""
        return self.name.capitalize()

    @property
    def tag(self) -> str:
        """Bracketed upper-case tag used in records, e.g. '[WARNING]'."""
        return f"[{self.name}]"


DEFAULT_LEVEL = VLogLevel.WARNING


def parse_level(value, default=None):
    """Parse a level from a VLogLevel, int, digit string or name.

    Names are case-insensitive ('warning', 'Warning', 'WARNING').
    Anything unrecognized returns `default` rather than raising, so a
    corrupt persisted value can never break logging.

    Args:
        value: Candidate level value
        default: Returned when `value` cannot be parsed

    Returns:
        VLogLevel or `default`
    """
    if isinstance(value, VLogLevel):
        return value
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        try:
            return VLogLevel(value)
        except ValueError:
            return default
    if not isinstance(value, str):
        return default

    text = value.strip()
    if text.lstrip('-').isdigit():
        return parse_level(int(text), default)
    try:
        return VLogLevel[text.upper()]
    except KeyError:
        return default


def should_emit(level, threshold=None, suppress=False) -> bool:
    """Decide whether a record at `level` passes both gates.

    Args:
        level: Requested record level
        threshold: Active verbosity threshold, or None when the
            runtime-editable threshold is not in effect
        suppress: When True only ERROR records pass

    Returns:
        True if the record should be built and dispatched
    """
    if threshold is not None and level > threshold:
        return False
    if suppress and level > VLogLevel.ERROR:
        return False
    return True
