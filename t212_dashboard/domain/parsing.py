"""Lenient scalar parsing shared by entities, mappers and analytics.

Export CSV files and the exports listing carry every value as text. These
helpers never raise: an empty or malformed amount reads as zero and an
unparsable timestamp reads as None.
"""

from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def parse_amount(value: object) -> Decimal:
    """Parse a locale-invariant decimal string.

    Args:
        value: Raw cell value ("12.50", "-3", "", None).

    Returns:
        Decimal: Parsed amount, or 0 when empty, malformed or non-finite.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, bool):
        return ZERO
    if isinstance(value, int | float):
        value = str(value)
    if not isinstance(value, str):
        return ZERO
    text = value.strip()
    if not text:
        return ZERO
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts both the API form (`2023-01-01T00:00:00Z`, `...+00:00`) and
    the CSV form (`2023-01-05 10:22:31`, optional fractional seconds).
    Naive values are taken as UTC.

    Returns:
        datetime | None: Aware UTC datetime, or None when unparsable.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime as the API's `YYYY-MM-DDTHH:MM:SSZ`."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)
