"""Debounce helper for interactive callers.

Recomputing a schedule on every keystroke is wasteful; callers wrap the
recompute in a ``Debouncer`` so that only the last call within ``wait``
seconds runs. The engine itself knows nothing about this.
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Tuple

DEFAULT_WAIT = 0.3


class Debouncer:
    """Delay ``func`` until ``wait`` seconds have passed without a new call."""

    def __init__(self, func: Callable[..., Any], wait: float = DEFAULT_WAIT) -> None:
        if wait < 0:
            raise ValueError("wait must not be negative")
        self._func = func
        self._wait = wait
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._pending: Optional[Tuple[tuple, dict]] = None

    def call(self, *args: Any, **kwargs: Any) -> None:
        """Schedule ``func(*args, **kwargs)``, superseding any pending call."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = (args, kwargs)
            self._timer = threading.Timer(self._wait, self._fire)
            self._timer.daemon = True
            self._timer.start()

    __call__ = call

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def cancel(self) -> None:
        """Drop the pending call, if any."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def flush(self) -> None:
        """Run the pending call now instead of waiting for the timer."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
        self._fire()

    def _fire(self) -> None:
        with self._lock:
            pending = self._pending
            self._pending = None
            self._timer = None
        if pending is not None:
            args, kwargs = pending
            self._func(*args, **kwargs)
