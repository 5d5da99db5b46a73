"""
Pre-log hook registry.

Hooks let other components enrich a record after the base text is built
and before it is dispatched. Each hook is called as

    hook(record, category, level)

with the shared RecordBuffer, the category the caller passed (None when
it was inferred) and the record level. Hooks run synchronously in
registration order.

A hook that raises does not stop the others or the record itself: the
failure is handed to `on_error` and iteration continues. Without an
`on_error` the failure propagates to whoever called invoke().
"""

import threading
from typing import Callable, List, Optional

from .levels import VLogLevel


PreLogHook = Callable[..., None]


class PreLogHooks:
    """Ordered, thread-safe list of pre-log hooks.

    Usage::

        hooks = PreLogHooks()

        @hooks.add
        def add_session(record, category, level):
            record.append(f" (session {session_id})")
    """

    def __init__(self):
        self._hooks: List[PreLogHook] = []
        self._lock = threading.Lock()

    def add(self, hook: PreLogHook) -> PreLogHook:
        """Register a hook. Returns it, so this works as a decorator."""
        if not callable(hook):
            raise TypeError(f"Pre-log hook must be callable, got {type(hook).__name__}")
        with self._lock:
            self._hooks.append(hook)
        return hook

    def remove(self, hook: PreLogHook) -> bool:
        """Unregister the first matching hook. Returns False if absent."""
        with self._lock:
            try:
                self._hooks.remove(hook)
            except ValueError:
                return False
        return True

    def clear(self) -> None:
        with self._lock:
            self._hooks.clear()

    def snapshot(self) -> List[PreLogHook]:
        with self._lock:
            return list(self._hooks)

    def __len__(self) -> int:
        with self._lock:
            return len(self._hooks)

    def __contains__(self, hook) -> bool:
        with self._lock:
            return hook in self._hooks

    def invoke(self, record, category: Optional[str], level: VLogLevel,
               on_error: Callable[[PreLogHook, Exception], None] = None) -> None:
        """Call every hook once, in registration order.

        Args:
            record: The in-progress RecordBuffer
            category: Category as passed by the caller
            level: Record level
            on_error: Receives (hook, exception) for each failing hook;
                when None, the first failure propagates
        """
        for hook in self.snapshot():
            try:
                hook(record, category, level)
            except Exception as e:
                if on_error is None:
                    raise
                on_error(hook, e)
