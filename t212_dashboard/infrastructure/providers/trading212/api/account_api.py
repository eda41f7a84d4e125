"""Trading212 account API client.

Endpoints:
    GET /equity/account/cash - Account cash snapshot (also the credential probe)
"""

from t212_dashboard.core.constants import (
    ACCOUNT_CASH_PATH,
    PROVIDER_NAME,
    PROVIDER_TIMEOUT_DEFAULT,
)
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.errors import ProviderError
from t212_dashboard.domain.value_objects import AccountCash
from t212_dashboard.infrastructure.providers.base_api_client import (
    BaseProviderAPIClient,
)
from t212_dashboard.infrastructure.providers.trading212.mappers import (
    Trading212AccountMapper,
)


class Trading212AccountAPI(BaseProviderAPIClient):
    """HTTP client for the account cash endpoint.

    Implements AccountClientProtocol.
    """

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = PROVIDER_TIMEOUT_DEFAULT,
        mapper: Trading212AccountMapper | None = None,
    ) -> None:
        super().__init__(base_url=base_url, provider_name=PROVIDER_NAME, timeout=timeout)
        self._mapper = mapper or Trading212AccountMapper()

    async def get_account_cash(
        self,
        credential: str,
    ) -> Result[AccountCash, ProviderError]:
        """Fetch the account cash snapshot.

        Returns:
            Success(AccountCash): Snapshot.
            Failure(ProviderAuthenticationError): Credential rejected.
            Failure(ProviderError): Transport or response errors.
        """
        result = await self._execute_and_parse_object(
            method="GET",
            path=ACCOUNT_CASH_PATH,
            headers=self._build_headers(credential),
            operation="get_account_cash",
        )
        if isinstance(result, Failure):
            return result
        return Success(value=self._mapper.map_account_cash(result.value))
