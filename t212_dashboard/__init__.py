"""Trading212 history export orchestration, CSV ingestion and analytics.

Layers:
    - core: configuration, Result types, base errors, composition root
    - domain: entities, value objects, errors, events, ports
    - infrastructure: HTTP clients, CSV parser, logging, event bus
    - application: orchestration handlers, ingestion, analytics
    - presentation: same-origin proxy endpoints (FastAPI)
"""

__version__ = "0.1.0"
