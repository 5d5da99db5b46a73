"""
Process-wide suppression state for VLog.

Two independent gates decide whether a record is emitted:

- suppress_logs: fixed at construction. When set, only ERROR records
  pass. Defaults to ``not __debug__`` so an optimized interpreter (-O)
  behaves like a release build.
- log_level: the runtime-adjustable verbosity threshold. Loaded lazily
  from a preference store on first use and written back on every change.

The preference store is injected so tests can use MemoryPreferenceStore
while real programs persist through vlog.config.JsonPreferenceStore.
"""

import threading
from typing import Dict, Optional, Protocol

from .levels import DEFAULT_LEVEL, VLogLevel, parse_level, should_emit


# Preference key under which the threshold is persisted
LOG_LEVEL_KEY = "VSDK_EDITOR_LOG_LEVEL"


class PreferenceStore(Protocol):
    """Key-value store holding string preferences across sessions."""

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryPreferenceStore:
    """In-process PreferenceStore. Nothing survives the process."""

    def __init__(self, values: Dict[str, str] = None):
        self._values: Dict[str, str] = dict(values or {})
        self._lock = threading.Lock()

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with self._lock:
            return self._values.get(key, default)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._values[key] = value

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._values


class LogSettings:
    """Guarded holder for the suppression flag and verbosity threshold.

    Usage::

        settings = LogSettings(store=MemoryPreferenceStore())
        settings.log_level                  # lazily loaded, WARNING by default
        settings.log_level = VLogLevel.INFO # persisted immediately
        settings.should_emit(VLogLevel.LOG) # True
    """

    def __init__(
        self,
        store: PreferenceStore = None,
        suppress_logs: bool = None,
        runtime_level: bool = True,
        default_level: VLogLevel = DEFAULT_LEVEL,
    ):
        self.store = store if store is not None else MemoryPreferenceStore()
        self._suppress_logs = (not __debug__) if suppress_logs is None else bool(suppress_logs)
        self._runtime_level = bool(runtime_level)
        self._default_level = default_level
        self._level: Optional[VLogLevel] = None
        self._lock = threading.RLock()

    def init(self) -> VLogLevel:
        """Load the persisted threshold now instead of on first use."""
        return self.log_level

    def _load(self) -> VLogLevel:
        try:
            raw = self.store.get(LOG_LEVEL_KEY)
        except (OSError, ValueError):
            raw = None
        if raw is None:
            return self._default_level

        level = parse_level(raw)
        if level is None:
            # Corrupt value: fall back and overwrite it
            level = self._default_level
            try:
                self.store.set(LOG_LEVEL_KEY, level.display_name)
            except OSError:
                pass
        return level

    @property
    def log_level(self) -> VLogLevel:
        """Current verbosity threshold."""
        with self._lock:
            if self._level is None:
                self._level = self._load()
            return self._level

    @log_level.setter
    def log_level(self, value) -> None:
        level = parse_level(value)
        if level is None:
            raise ValueError(f"Unknown log level: {value!r}")
        with self._lock:
            self._level = level
            self.store.set(LOG_LEVEL_KEY, level.display_name)

    @property
    def suppress_logs(self) -> bool:
        """True when everything but errors is silenced."""
        return self._suppress_logs

    @property
    def runtime_level(self) -> bool:
        """True when the runtime-editable threshold is in effect."""
        return self._runtime_level

    @property
    def threshold(self) -> Optional[VLogLevel]:
        """The active threshold, or None when runtime levels are off."""
        if not self._runtime_level:
            return None
        return self.log_level

    def should_emit(self, level: VLogLevel) -> bool:
        """Apply both gates to a requested level."""
        return should_emit(level, self.threshold, self._suppress_logs)
