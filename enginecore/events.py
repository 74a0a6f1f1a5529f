"""A thread-safe event dispatcher delivering events to handlers by exact type."""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from typing import Any, Optional

logger = logging.getLogger(__name__)


class BaseEvent:
    """Base class for every event that can be dispatched."""


EventHandler = Callable[[Any], None]


class EventDispatcher:
    """Queues events and hands them to registered handlers on worker threads.

    Handlers are chosen by the exact class of the event and called in the
    order they were registered.
    """

    _instance: Optional["EventDispatcher"] = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = {}
        self._handlers_lock = threading.Lock()
        self._queue: deque[BaseEvent] = deque()
        self._condition = threading.Condition()
        self._workers: list[threading.Thread] = []
        self._running = False

    @staticmethod
    def get_instance() -> "EventDispatcher":
        """Return the process-wide dispatcher."""
        with EventDispatcher._instance_lock:
            if EventDispatcher._instance is None:
                EventDispatcher._instance = EventDispatcher()
            return EventDispatcher._instance

    def start(self, num_worker_threads: int) -> None:
        """Start the workers; does nothing if already running."""
        if self._running:
            return
        self._running = True
        self._workers = [
            threading.Thread(target=self._worker_loop, name=f"dispatcher-{n}", daemon=True)
            for n in range(num_worker_threads)
        ]
        for worker in self._workers:
            worker.start()
        logger.info("EventDispatcher started with %d workers.", num_worker_threads)

    def stop(self) -> None:
        """Stop and join the workers; events still queued stay queued."""
        if not self._running:
            return
        with self._condition:
            self._running = False
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()
        self._workers.clear()
        logger.info("EventDispatcher stopped.")

    def register_handler(self, event_type: type, handler: EventHandler) -> None:
        """Call *handler* for every dispatched event whose class is exactly *event_type*."""
        if not (isinstance(event_type, type) and issubclass(event_type, BaseEvent)):
            raise TypeError("event_type must be a subclass of BaseEvent")
        with self._handlers_lock:
            self._handlers.setdefault(event_type, []).append(handler)

    def dispatch(self, event: BaseEvent) -> None:
        """Queue *event* for delivery."""
        if not isinstance(event, BaseEvent):
            raise TypeError("only BaseEvent instances can be dispatched")
        with self._condition:
            self._queue.append(event)
            self._condition.notify()

    def _worker_loop(self) -> None:
        while True:
            with self._condition:
                if not self._running:
                    return
                self._condition.wait_for(lambda: not self._running or bool(self._queue))
                if not self._running and not self._queue:
                    return
                event = self._queue.popleft()

            with self._handlers_lock:
                handlers = list(self._handlers.get(type(event), ()))
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception("Event handler failed for %s", type(event).__name__)