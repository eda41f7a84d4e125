"""CSV parser for history export reports.

Export CSV files have one header line followed by data rows. Values never
contain line breaks, so the text is split into lines first and each line is
split into fields by a quote-aware scanner:

- a comma inside an open quote is not a delimiter
- `""` inside an open quote is a literal quote (`"d""e"` → `d"e`)
- any other `"` toggles the quote state, also mid-field (`ab"c,d"e` → `abc,de`)

Header cells are trimmed. Data values are kept verbatim so that values with
surrounding spaces survive a write/parse round trip.

Rows whose field count is off from the header by more than
`ROW_ARITY_TOLERANCE` are skipped and counted. Rows within the tolerance
are padded with empty strings or truncated to the header width.
"""

import re

import structlog

from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.errors import CsvParseError
from t212_dashboard.domain.protocols import ParsedCsv

logger = structlog.get_logger(__name__)

ROW_ARITY_TOLERANCE = 2
"""Maximum difference between a row's field count and the header's."""

_LINE_BREAK = re.compile(r"\r\n|\n|\r")
_BOM = "\ufeff"
_QUOTE = '"'
_DELIMITER = ","


def split_fields(line: str) -> list[str]:
    """Split one CSV line into raw field values.

    An unterminated quote runs to the end of the line.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        char = line[i]
        if char == _QUOTE:
            if in_quotes and line[i + 1 : i + 2] == _QUOTE:
                current.append(_QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == _DELIMITER and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1
    fields.append("".join(current))
    return fields


class CsvParser:
    """Parser for brokerage export CSV text.

    Thread-safe: No mutable state, can be reused across requests.

    Example:
        >>> parser = CsvParser()
        >>> result = parser.parse('x,y,z\\n"a,b",c,"d""e"\\n')
        >>> result.value.rows
        [{'x': 'a,b', 'y': 'c', 'z': 'd"e'}]
    """

    def parse(self, text: str) -> Result[ParsedCsv, CsvParseError]:
        """Parse CSV text into rows keyed by header cell.

        Args:
            text: Full CSV payload.

        Returns:
            Success(ParsedCsv): Rows in file order (empty for empty or
                header-only input).
            Failure(CsvParseError): Input is not text.
        """
        if not isinstance(text, str):
            return Failure(
                error=CsvParseError(
                    code=ErrorCode.CSV_PARSE_FAILED,
                    message=f"CSV input must be text, got {type(text).__name__}",
                )
            )

        lines = [
            line
            for line in _LINE_BREAK.split(text.removeprefix(_BOM))
            if line.strip()
        ]
        if not lines:
            return Success(value=ParsedCsv())

        header = tuple(cell.strip() for cell in split_fields(lines[0]))
        width = len(header)
        rows: list[dict[str, str]] = []
        skipped = 0
        for line_number, line in enumerate(lines[1:], start=2):
            values = split_fields(line)
            if abs(len(values) - width) > ROW_ARITY_TOLERANCE:
                logger.debug(
                    "csv_row_skipped",
                    line_number=line_number,
                    expected_fields=width,
                    actual_fields=len(values),
                )
                skipped += 1
                continue

            if len(values) < width:
                values.extend([""] * (width - len(values)))
            rows.append(dict(zip(header, values[:width], strict=True)))

        if skipped:
            logger.info(
                "csv_rows_skipped",
                skipped_rows=skipped,
                parsed_rows=len(rows),
            )

        return Success(value=ParsedCsv(header=header, rows=rows, skipped_rows=skipped))
