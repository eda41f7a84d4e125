"""GetAccountSnapshot query handler.

Returns the account cash snapshot. A cache from credential verification is
consumed on first use; every other read goes to the API.
"""

from t212_dashboard.application.queries.account_queries import GetAccountSnapshot
from t212_dashboard.core.result import Result, Success
from t212_dashboard.domain.errors import ProviderError
from t212_dashboard.domain.protocols import AccountClientProtocol, LoggerProtocol
from t212_dashboard.domain.value_objects import AccountCash


class GetAccountSnapshotHandler:
    """Handler for GetAccountSnapshot query."""

    def __init__(
        self,
        account_client: AccountClientProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._client = account_client
        self._logger = logger

    async def handle(
        self, query: GetAccountSnapshot
    ) -> Result[AccountCash, ProviderError]:
        if query.cache is not None:
            cached = query.cache.take()
            if cached is not None:
                self._logger.debug("account_snapshot_cache_hit")
                return Success(value=cached)
        return await self._client.get_account_cash(query.credential)
