"""Event bus protocol (port) for domain events.

The orchestrator and poller publish progress events through this port;
the presentation layer (or a test) subscribes to the event types it cares
about.

Implementations:
    - InMemoryEventBus: t212_dashboard/infrastructure/events/in_memory_event_bus.py

Usage:
    >>> bus = get_event_bus()
    >>> async def show_wait(event: ExportWaitScheduled) -> None:
    ...     print(f"waiting {event.delay_seconds}s before {event.next_year}")
    >>> bus.subscribe(ExportWaitScheduled, show_wait)
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from t212_dashboard.domain.events.base_event import DomainEvent

# Type alias for event handler functions
EventHandler = Callable[[Any], Awaitable[None]]
"""Async handler receiving one event (of the subscribed type) and returning None."""


class EventBusProtocol(Protocol):
    """Protocol for event bus implementations.

    Key Requirements:
        1. **Fail-open behavior**: One handler failure must NOT prevent other
           handlers from executing, nor propagate to the publisher.
        2. **Async support**: All handlers are async.
        3. **Type-based routing**: Handlers receive only events of the exact
           type they subscribed to.
        4. **No ordering guarantees** between handlers of one event.
    """

    def subscribe(
        self,
        event_type: type[DomainEvent],
        handler: EventHandler,
    ) -> None:
        """Register an async handler for an event type."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event to every handler registered for its type.

        Never raises.
        """
        ...
