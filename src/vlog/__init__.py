"""vlog — leveled, category-tagged console logging for VSDK hosts.

Filters records by a persisted verbosity threshold, tags them with the
calling category, decorates them for the output surface and routes them
to error, warning or standard sinks. Application code imports
``vlog.output``; embedding hosts build ``vlog.lib.log_lib.VLog`` directly.
"""

from vlog._version import __version__, __app_name__

__all__ = ["__version__", "__app_name__"]
