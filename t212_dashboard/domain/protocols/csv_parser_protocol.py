"""CsvParserProtocol and its output type."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from t212_dashboard.core.result import Result
    from t212_dashboard.domain.errors import CsvParseError


@dataclass(frozen=True, kw_only=True)
class ParsedCsv:
    """Parsed CSV text.

    Attributes:
        header: Trimmed header cells in file order.
        rows: Data rows (header cell → value) in file order.
        skipped_rows: Rows dropped for mismatched field count.
    """

    header: tuple[str, ...] = ()
    rows: list[dict[str, str]] = field(default_factory=list)
    skipped_rows: int = 0


class CsvParserProtocol(Protocol):
    """Parse CSV text into column mappings."""

    def parse(self, text: str) -> "Result[ParsedCsv, CsvParseError]":
        ...
