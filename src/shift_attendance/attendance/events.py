from __future__ import annotations

import logging
import threading
from typing import Callable

from .model import RecordChanged

logger = logging.getLogger(__name__)

Listener = Callable[[RecordChanged], None]


class RecordEventPublisher:
    """Fan-out of "record changed" events to the notification collaborator.

    Delivery is best effort: a failing listener is logged and skipped, the
    write that produced the event stands.
    """

    def __init__(self):
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Listener:
        with self._lock:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: Listener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def publish(self, event: RecordChanged) -> None:
        with self._lock:
            listeners = list(self._listeners)

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Record event listener failed (kind=%s, attendance_id=%s)",
                    event.kind.value,
                    event.record.attendance_id,
                )
