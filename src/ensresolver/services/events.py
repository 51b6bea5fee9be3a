"""Lifecycle events published by the resolver."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Union

from ensresolver.core.models import BatchResolutionResult, ResolutionResult
from ensresolver.core.types import EventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheHitEvent:
    ens_name: str
    cached: bool = True
    event_type: EventType = field(default=EventType.CACHE_HIT, init=False)


@dataclass(frozen=True)
class ResolutionCompleteEvent:
    ens_name: str
    result: ResolutionResult
    duration_ms: float
    event_type: EventType = field(default=EventType.RESOLUTION_COMPLETE, init=False)


@dataclass(frozen=True)
class ResolutionErrorEvent:
    ens_name: str
    error: str
    event_type: EventType = field(default=EventType.RESOLUTION_ERROR, init=False)


@dataclass(frozen=True)
class BatchCompleteEvent:
    batch: BatchResolutionResult
    event_type: EventType = field(default=EventType.BATCH_COMPLETE, init=False)


@dataclass(frozen=True)
class CacheClearedEvent:
    event_type: EventType = field(default=EventType.CACHE_CLEARED, init=False)


Event = Union[
    CacheHitEvent,
    ResolutionCompleteEvent,
    ResolutionErrorEvent,
    BatchCompleteEvent,
    CacheClearedEvent,
]

EventHandler = Callable[[Any], Any]


class EventBus:
    """
    Synchronous, best-effort publish/subscribe for resolver events.

    Handlers run in subscription order inside ``emit``. A handler that raises
    is logged and skipped; it never affects the operation that emitted the
    event. Handlers returning a coroutine have it scheduled as a task on the
    running loop rather than awaited.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._handlers: dict[EventType, list[EventHandler]] = defaultdict(list)
        self._pending: set[asyncio.Task[Any]] = set()

    def subscribe(self, event_type: EventType, handler: EventHandler) -> Callable[[], None]:
        """
        Register a handler for one event type.

        Returns:
            A callable that removes this subscription
        """
        event_type = EventType(event_type)
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            try:
                self._handlers[event_type].remove(handler)
            except ValueError:
                pass

        return unsubscribe

    def handler_count(self, event_type: EventType) -> int:
        return len(self._handlers.get(EventType(event_type), []))

    def emit(self, event: Event) -> None:
        """Deliver an event to every handler subscribed to its type."""
        if not self.enabled:
            return

        for handler in list(self._handlers.get(event.event_type, [])):
            try:
                outcome = handler(event)
                if inspect.isawaitable(outcome):
                    self._schedule(outcome, event.event_type)
            except Exception:
                logger.exception(f"Event handler {handler!r} failed for {event.event_type}")

    def _schedule(self, awaitable: Any, event_type: EventType) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Emitted from sync code: nothing can run the handler
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            logger.warning(f"Dropped async handler for {event_type}: no running event loop")
            return

        task = asyncio.ensure_future(awaitable, loop=loop)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(lambda t: self._log_task_failure(t, event_type))

    @staticmethod
    def _log_task_failure(task: asyncio.Task[Any], event_type: EventType) -> None:
        if task.cancelled():
            return
        if exc := task.exception():
            logger.error(f"Async event handler failed for {event_type}: {exc!r}")

    async def drain(self) -> None:
        """Wait for scheduled async handlers to finish."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

    def clear(self) -> None:
        """Remove every subscription."""
        self._handlers.clear()
