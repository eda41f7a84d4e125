"""Domain protocols (ports).

Structural typing (Protocol, not ABC). Infrastructure adapters satisfy
these without inheriting from them.
"""

from t212_dashboard.domain.protocols.account_client_protocol import (
    AccountClientProtocol,
)
from t212_dashboard.domain.protocols.csv_fetcher_protocol import CsvFetcherProtocol
from t212_dashboard.domain.protocols.csv_parser_protocol import (
    CsvParserProtocol,
    ParsedCsv,
)
from t212_dashboard.domain.protocols.event_bus_protocol import (
    EventBusProtocol,
    EventHandler,
)
from t212_dashboard.domain.protocols.export_client_protocol import (
    ExportClientProtocol,
)
from t212_dashboard.domain.protocols.logger_protocol import LoggerProtocol

__all__ = [
    "AccountClientProtocol",
    "CsvFetcherProtocol",
    "CsvParserProtocol",
    "EventBusProtocol",
    "EventHandler",
    "ExportClientProtocol",
    "LoggerProtocol",
    "ParsedCsv",
]
