"""Base domain event class.

Domain events represent "things that happened" and are always named in past
tense (e.g. ExportYearRequested, ExportBackoffEscalated). Orchestration
progress is published as events so callers can render status without the
orchestrator knowing anything about presentation.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    >>> class ExportYearRequested(DomainEvent):
    ...     year: int
    >>>
    >>> event = ExportYearRequested(year=2023)
    >>> print(event.event_id)  # Auto-generated UUID
    >>> print(event.occurred_at)  # Auto-generated timestamp
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID, uuid4


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    All domain events MUST:
        1. Inherit from this base class
        2. Use past tense naming
        3. Be frozen dataclasses (immutable after creation)
        4. Use kw_only=True

    Attributes:
        event_id: Unique identifier for this event instance (UUID v4).
        occurred_at: Timestamp when the event occurred (UTC).
    """

    event_id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))
