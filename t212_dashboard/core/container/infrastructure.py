"""Infrastructure dependency factories.

Application-scoped singletons:
- Logging (structlog console adapter)
- Event bus (in-memory, progress handler subscribed)
- Export policy (from settings)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from t212_dashboard.core.config import settings

if TYPE_CHECKING:
    from t212_dashboard.domain.protocols import EventBusProtocol, LoggerProtocol
    from t212_dashboard.domain.value_objects import ExportPolicy


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection:
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from t212_dashboard.infrastructure.logging import ConsoleAdapter

    use_json = settings.is_testing or settings.is_ci or settings.is_production
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_event_bus() -> "EventBusProtocol":
    """Get event bus singleton (app-scoped).

    The export progress handler is subscribed here so every run and poll
    produces progress log lines without the handlers knowing about it.
    """
    from t212_dashboard.infrastructure.events import InMemoryEventBus
    from t212_dashboard.infrastructure.events.handlers import ExportProgressHandler

    event_bus = InMemoryEventBus(logger=get_logger())
    ExportProgressHandler(logger=get_logger()).subscribe_all(event_bus)
    return event_bus


@lru_cache()
def get_export_policy() -> "ExportPolicy":
    from t212_dashboard.domain.value_objects import ExportPolicy

    return ExportPolicy.from_settings(settings)
