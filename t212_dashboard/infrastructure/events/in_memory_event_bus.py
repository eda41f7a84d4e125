"""In-memory event bus implementation.

Implements EventBusProtocol with a dictionary-based registry
(event type → handlers). Handlers run concurrently via asyncio.gather and a
failing handler never breaks the others or the publisher (fail-open).

Orchestration progress events are published at most a few times per
second, so no queueing is needed.

Usage:
    >>> bus = InMemoryEventBus(logger=get_logger())
    >>> bus.subscribe(ExportYearSucceeded, on_year_succeeded)
    >>> await bus.publish(ExportYearSucceeded(run_id=run_id, year=2023, report_id="1"))
"""

import asyncio
from collections import defaultdict

from t212_dashboard.domain.events.base_event import DomainEvent
from t212_dashboard.domain.protocols.event_bus_protocol import EventHandler
from t212_dashboard.domain.protocols.logger_protocol import LoggerProtocol


class InMemoryEventBus:
    """In-memory event bus with fail-open behavior.

    Thread Safety:
        NOT thread-safe (single event loop design).

    Attributes:
        _handlers: Event class → list of async handlers.
        _logger: Logger for handler failures and event publishing.
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._handlers: dict[type[DomainEvent], list[EventHandler]] = defaultdict(list)
        self._logger = logger

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register event handler for specific event type.

        Args:
            event_type: Class of event to handle. Exact type match only.
            handler: Async function taking the event and returning None.
        """
        self._handlers[event_type].append(handler)

    def unsubscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Remove a previously registered handler (no-op if absent)."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    async def publish(self, event: DomainEvent) -> None:
        """Publish event to all registered handlers.

        Flow:
            1. Look up handlers for type(event)
            2. If no handlers, return immediately (no-op)
            3. Execute all handlers with asyncio.gather(return_exceptions=True)
            4. Log any handler exceptions (warning level)

        Never raises.
        """
        event_type = type(event)
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            return

        self._logger.debug(
            "event_publishing",
            event_type=event_type.__name__,
            event_id=str(event.event_id),
            handler_count=len(handlers),
        )

        results = await asyncio.gather(
            *(handler(event) for handler in handlers),
            return_exceptions=True,
        )

        for handler, result in zip(handlers, results, strict=True):
            if isinstance(result, Exception):
                self._logger.warning(
                    "event_handler_failed",
                    event_type=event_type.__name__,
                    event_id=str(event.event_id),
                    handler_name=getattr(handler, "__name__", repr(handler)),
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
