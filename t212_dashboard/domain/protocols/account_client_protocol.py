"""AccountClientProtocol: account cash endpoint (port).

`GET /equity/account/cash` doubles as the credential probe.
"""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from t212_dashboard.core.result import Result
    from t212_dashboard.domain.errors import ProviderError
    from t212_dashboard.domain.value_objects import AccountCash


class AccountClientProtocol(Protocol):
    """Fetch the account cash snapshot."""

    async def get_account_cash(
        self,
        credential: str,
    ) -> "Result[AccountCash, ProviderError]":
        ...
