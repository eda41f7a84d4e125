"""Account commands."""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class VerifyCredential:
    """Command to check that an API key is accepted by the brokerage.

    Attributes:
        credential: Brokerage API key.
    """

    credential: str = field(repr=False)
