"""Export commands.

Commands that create export jobs on the brokerage or wait for them.
Both are long-running (seconds to minutes, dominated by rate-limit delays).

Architecture:
    - Commands are immutable value objects representing user intent
    - Handlers return Result types and publish progress events
"""

from dataclasses import dataclass, field


@dataclass(frozen=True, kw_only=True)
class RunYearlyExports:
    """Command to make sure one export exists per calendar year.

    Covers every year from `start_year` up to and including the current
    year. Years that already have a finished full-year export are reused.

    Attributes:
        credential: Brokerage API key.
        start_year: First calendar year to cover.
    """

    credential: str = field(repr=False)
    start_year: int


@dataclass(frozen=True, kw_only=True)
class PollExportStatus:
    """Command to wait until export jobs reach a terminal status.

    Attributes:
        credential: Brokerage API key.
        report_ids: Jobs to wait for.
    """

    credential: str = field(repr=False)
    report_ids: tuple[str, ...]
