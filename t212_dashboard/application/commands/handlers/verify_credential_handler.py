"""VerifyCredential command handler.

Probes `GET /equity/account/cash` with the given API key. The probe already
returns the account snapshot, so the handler hands it back inside a
single-use `AccountSnapshotCache` the caller can pass to the first
GetAccountSnapshot query.
"""

from t212_dashboard.application.commands.account_commands import VerifyCredential
from t212_dashboard.application.dtos import VerifiedCredential
from t212_dashboard.core.enums import ErrorCode
from t212_dashboard.core.errors import DomainError, ValidationError
from t212_dashboard.core.fingerprinting import mask_credential
from t212_dashboard.core.result import Failure, Result, Success
from t212_dashboard.domain.protocols import AccountClientProtocol, LoggerProtocol
from t212_dashboard.domain.value_objects import AccountSnapshotCache


class VerifyCredentialHandler:
    """Handler for VerifyCredential command.

    Dependencies (injected via constructor):
        - AccountClientProtocol: Account cash endpoint
        - LoggerProtocol: Structured logging

    Returns:
        Result[VerifiedCredential, DomainError]
    """

    def __init__(
        self,
        account_client: AccountClientProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._client = account_client
        self._logger = logger

    async def handle(
        self, command: VerifyCredential
    ) -> Result[VerifiedCredential, DomainError]:
        """Handle VerifyCredential command.

        Returns:
            Success(VerifiedCredential): Key accepted.
            Failure(ValidationError): Empty credential.
            Failure(ProviderAuthenticationError): Key rejected.
            Failure(ProviderError): Transport or response error.
        """
        if not command.credential or not command.credential.strip():
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_INPUT,
                    message="Credential is required",
                    field="credential",
                )
            )

        masked = mask_credential(command.credential)
        result = await self._client.get_account_cash(command.credential)
        if isinstance(result, Failure):
            self._logger.warning(
                "credential_verification_failed",
                credential=masked,
                error_code=result.error.code.value,
            )
            return result

        self._logger.info("credential_verified", credential=masked)
        return Success(
            value=VerifiedCredential(
                snapshot=result.value,
                cache=AccountSnapshotCache(result.value),
            )
        )
