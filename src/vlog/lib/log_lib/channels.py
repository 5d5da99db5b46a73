"""
Sink channels.

Every record goes to exactly one of three channels, chosen by level:

    ERROR            → 'error'
    WARNING          → 'warning'
    LOG, INFO        → 'standard'

Sinks receive the channel name with the finished message and decide
where it lands (stderr, a logging.Logger, a list, ...).
"""

from .levels import VLogLevel


ERROR_CHANNEL = 'error'
WARNING_CHANNEL = 'warning'
STANDARD_CHANNEL = 'standard'

KNOWN_CHANNELS = {ERROR_CHANNEL, WARNING_CHANNEL, STANDARD_CHANNEL}

CHANNEL_DESCRIPTIONS = {
    'error':    'Error records (stderr / logger.error)',
    'warning':  'Warning records (stderr / logger.warning)',
    'standard': 'Log and Info records (stdout / logger.info)',
}


def channel_for_level(level: VLogLevel) -> str:
    """Select the sink channel for a record level."""
    if level == VLogLevel.ERROR:
        return ERROR_CHANNEL
    if level == VLogLevel.WARNING:
        return WARNING_CHANNEL
    return STANDARD_CHANNEL


def dispatch(sink, level: VLogLevel, message: str) -> str:
    """Route a finished record to its channel on `sink`.

    Returns:
        The channel name used
    """
    channel = channel_for_level(level)
    sink.write(channel, message)
    return channel


def format_channel_list() -> str:
    """Format the list of sink channels for display.

    Returns:
        Formatted string listing all channels with descriptions.
    """
    lines = ["Available channels:"]
    max_name = max(len(name) for name in KNOWN_CHANNELS)
    for name in sorted(KNOWN_CHANNELS):
        desc = CHANNEL_DESCRIPTIONS.get(name, '')
        lines.append(f"  {name:<{max_name}}  {desc}")
    return "\n".join(lines)
