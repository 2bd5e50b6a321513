"""Process-wide publish/subscribe channel.

Decouples framework internals from user observers. The framework
emits:

- ``route.loaded``  — ``{"path": ..., "methods": [...], "file": ...}``
- ``route.failed``  — ``{"file": ..., "error": ...}``
- ``ready``         — ``{"routes": <count>}``
- ``request``       — the ``Request`` being dispatched
- ``error``         — ``{"request": ..., "exception": ...}``

Listeners are plain callables invoked synchronously, in subscription
order, on the emitting thread.
"""

import threading
from collections.abc import Callable
from typing import Any, TypeAlias

Listener: TypeAlias = Callable[[Any], Any]


class EventBus:
    """Named-event broadcast.

    Usage::

        bus = EventBus()
        bus.on("ready", lambda data: print("routes:", data["routes"]))
        bus.emit("ready", {"routes": 3})
    """

    __slots__ = ("_listeners", "_lock")

    def __init__(self) -> None:
        self._listeners: dict[str, list[tuple[Listener, bool]]] = {}
        self._lock = threading.Lock()

    def on(self, event: str, listener: Listener) -> Listener:
        """Subscribe *listener* to *event*. Returns the listener."""
        with self._lock:
            self._listeners.setdefault(event, []).append((listener, False))
        return listener

    def once(self, event: str, listener: Listener) -> Listener:
        """Subscribe *listener* for the next emission of *event* only."""
        with self._lock:
            self._listeners.setdefault(event, []).append((listener, True))
        return listener

    def off(self, event: str, listener: Listener) -> None:
        """Remove every subscription of *listener* to *event*."""
        with self._lock:
            remaining = [(fn, one) for fn, one in self._listeners.get(event, []) if fn != listener]
            if remaining:
                self._listeners[event] = remaining
            else:
                self._listeners.pop(event, None)

    def emit(self, event: str, data: Any = None) -> int:
        """Call every listener of *event* with *data*.

        Listener exceptions propagate to the emitter. Returns the number
        of listeners called.
        """
        with self._lock:
            subscribed = list(self._listeners.get(event, ()))
            if any(one for _, one in subscribed):
                self._listeners[event] = [(fn, one) for fn, one in subscribed if not one]
        for listener, _ in subscribed:
            listener(data)
        return len(subscribed)

    def listener_count(self, event: str) -> int:
        with self._lock:
            return len(self._listeners.get(event, ()))
