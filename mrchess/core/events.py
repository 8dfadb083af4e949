"""
Notifications from the engine to whoever renders the game.

A Signal is a plain listener list: the host connects callbacks, the engine emits. No UI concerns leak into the engine.
"""

import logging
from typing import Callable, Generic, ParamSpec

logger = logging.getLogger(__name__)

P = ParamSpec("P")


class Signal(Generic[P]):
    """Listener list for a single kind of notification"""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Callable[P, None]] = []

    def connect(self, listener: Callable[P, None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def disconnect(self, listener: Callable[P, None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, *args: P.args, **kwargs: P.kwargs) -> None:
        """Call the listeners in the order they connected. A failing listener propagates its exception to the emitter."""
        logger.debug("emit %s to %d listener(s)", self.name, len(self._listeners))
        for listener in list(self._listeners):
            listener(*args, **kwargs)

    def __len__(self) -> int:
        return len(self._listeners)
