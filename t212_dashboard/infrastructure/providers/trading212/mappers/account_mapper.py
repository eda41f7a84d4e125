"""Trading212 account cash mapper.

Response Structure (`GET /equity/account/cash`):
    {
        "blocked": 0,
        "free": 120.5,
        "invested": 900.0,
        "pieCash": 0,
        "ppl": 15.25,
        "result": 42.0,
        "total": 1035.75
    }
"""

from typing import Any

from t212_dashboard.domain.parsing import parse_amount
from t212_dashboard.domain.value_objects import AccountCash


class Trading212AccountMapper:
    """Mapper for converting account cash JSON to AccountCash."""

    def map_account_cash(self, data: dict[str, Any]) -> AccountCash:
        """Map the cash snapshot; missing or malformed numbers read as 0."""
        return AccountCash(
            free=parse_amount(data.get("free")),
            total=parse_amount(data.get("total")),
            invested=parse_amount(data.get("invested")),
            ppl=parse_amount(data.get("ppl")),
            result=parse_amount(data.get("result")),
            blocked=parse_amount(data.get("blocked")),
            pie_cash=parse_amount(data.get("pieCash")),
        )
