"""Event bus adapters implementing EventBusProtocol."""

from t212_dashboard.infrastructure.events.in_memory_event_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
