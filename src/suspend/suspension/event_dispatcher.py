"""
SUSPEND - Suspension - Event Dispatcher

Diffusion synchrone des événements de cycle de vie vers des écouteurs
abonnés par classe d'événement.

Un écouteur qui lève n'interrompt ni les autres écouteurs ni
l'opération qui a émis l'événement: l'échec est journalisé.
"""

import threading
from collections import defaultdict
from typing import Any, Callable, Dict, List, Optional, Type

from ..logging.interfaces import IStructuredLogger
from ..logging.structured_logger import StructuredLogger
from .interfaces import ISuspensionEventSink


Listener = Callable[[Any], None]


class SuspensionEventDispatcher(ISuspensionEventSink):
    """
    Dispatcher en mémoire.

    Usage:
        events = SuspensionEventDispatcher()
        events.subscribe(SuspensionCreated, lambda e: notify(e.suspension))
    """

    def __init__(self, logger: Optional[IStructuredLogger] = None, record: bool = True):
        self._listeners: Dict[Type[Any], List[Listener]] = defaultdict(list)
        self._dispatched: List[Any] = []
        self._record = record
        self._logger = logger or StructuredLogger("suspend.events")
        self._lock = threading.Lock()

    def subscribe(self, event_type: Type[Any], listener: Listener) -> None:
        with self._lock:
            self._listeners[event_type].append(listener)

    def unsubscribe(self, event_type: Type[Any], listener: Listener) -> bool:
        with self._lock:
            listeners = self._listeners.get(event_type, [])
            if listener in listeners:
                listeners.remove(listener)
                return True
            return False

    def dispatch(self, event: Any) -> None:
        with self._lock:
            if self._record:
                self._dispatched.append(event)
            listeners = list(self._listeners.get(type(event), []))

        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                self._logger.error(
                    "Suspension event listener failed",
                    event=type(event).__name__,
                    error=str(e),
                )

    def dispatched(self, event_type: Optional[Type[Any]] = None) -> List[Any]:
        """Événements émis, filtrés par classe si précisée."""
        with self._lock:
            events = list(self._dispatched)
        if event_type is None:
            return events
        return [event for event in events if isinstance(event, event_type)]

    def clear(self) -> None:
        with self._lock:
            self._dispatched.clear()
