"""Calendar-year coverage of history exports.

An export "covers" a year when it is finished and its range spans exactly
that UTC calendar year: it starts at Jan 1 00:00:00 and ends on Dec 31 at
23:59 with seconds in the tolerated window. The brokerage has been seen to
end such ranges at :55 as well as :59.

The current year is never covered: its data keeps growing, so every run
re-exports it. An existing current-year export (Jan 1 up to some moment of
this year) is still tracked so callers can tell when it went stale.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from t212_dashboard.domain.entities import ExportDescriptor

YEAR_END_SECONDS_TOLERANCE = 5
"""Accepted seconds below a full minute on Dec 31 23:59 (i.e. :55 to :59)."""


def _starts_year(value: datetime) -> bool:
    return (
        value.month == 1
        and value.day == 1
        and value.hour == 0
        and value.minute == 0
        and value.second == 0
    )


def is_full_calendar_year_range(
    time_from: datetime | None,
    time_to: datetime | None,
) -> bool:
    """Check whether a range spans exactly one UTC calendar year.

    Args:
        time_from: Range start (aware).
        time_to: Range end (aware).

    Returns:
        bool: True for Jan 1 00:00:00 → Dec 31 23:59:(55..59) of one year.
    """
    if time_from is None or time_to is None:
        return False
    start = time_from.astimezone(UTC)
    end = time_to.astimezone(UTC)
    return (
        start.year == end.year
        and _starts_year(start)
        and end.month == 12
        and end.day == 31
        and end.hour == 23
        and end.minute == 59
        and end.second >= 60 - YEAR_END_SECONDS_TOLERANCE
    )


def year_of_descriptor(descriptor: ExportDescriptor, now: datetime) -> int | None:
    """Calendar year a descriptor stands for, if any.

    Full calendar-year ranges map to their year. A range starting Jan 1 of
    the current year and ending within it maps to the current year.
    Anything else (custom ranges, unparsable times) maps to None.
    """
    if descriptor.time_from is None or descriptor.time_to is None:
        return None
    start = descriptor.time_from.astimezone(UTC)
    end = descriptor.time_to.astimezone(UTC)
    if is_full_calendar_year_range(start, end):
        return start.year
    current_year = now.astimezone(UTC).year
    if start.year == end.year == current_year and _starts_year(start):
        return current_year
    return None


def _is_later(candidate: ExportDescriptor, incumbent: ExportDescriptor) -> bool:
    if candidate.time_to is None:
        return False
    if incumbent.time_to is None:
        return True
    return candidate.time_to > incumbent.time_to


@dataclass(frozen=True, slots=True, kw_only=True)
class YearCoverage:
    """Coverage analysis of an exports listing.

    Attributes:
        covered: Finished full-year exports by year (current year excluded).
        current_year_export: Latest finished current-year export, if any.
        outdated_years: Years whose tracked export is older than the
            freshness threshold.
    """

    covered: dict[int, ExportDescriptor] = field(default_factory=dict)
    current_year_export: ExportDescriptor | None = None
    outdated_years: tuple[int, ...] = ()

    @property
    def covered_years(self) -> tuple[int, ...]:
        return tuple(sorted(self.covered))

    def missing_years(self, start_year: int, end_year: int) -> list[int]:
        """Years in [start_year, end_year] without coverage, ascending."""
        return [y for y in range(start_year, end_year + 1) if y not in self.covered]


def analyze_coverage(
    descriptors: Iterable[ExportDescriptor],
    *,
    now: datetime,
    outdated_after: timedelta,
) -> YearCoverage:
    """Compute which years are already exported.

    Only finished descriptors count. When several finished descriptors
    cover the same year, the one with the later `time_to` wins.

    Args:
        descriptors: Exports listing.
        now: Current time (aware).
        outdated_after: Age of `time_to` after which the current-year
            export is flagged outdated.

    Returns:
        YearCoverage: Covered past years plus current-year tracking.
    """
    current_year = now.astimezone(UTC).year
    by_year: dict[int, ExportDescriptor] = {}
    for descriptor in descriptors:
        if not descriptor.is_finished:
            continue
        year = year_of_descriptor(descriptor, now)
        if year is None:
            continue
        incumbent = by_year.get(year)
        if incumbent is None or _is_later(descriptor, incumbent):
            by_year[year] = descriptor

    current = by_year.pop(current_year, None)
    outdated: list[int] = []
    if current is not None and current.time_to is not None:
        if now - current.time_to > outdated_after:
            outdated.append(current_year)

    return YearCoverage(
        covered=dict(sorted(by_year.items())),
        current_year_export=current,
        outdated_years=tuple(outdated),
    )


def merge_descriptors_by_year(
    existing: Iterable[ExportDescriptor],
    incoming: Iterable[ExportDescriptor],
    now: datetime,
) -> list[ExportDescriptor]:
    """Rebuild a one-per-year mirror of export descriptors.

    Descriptors that do not stand for a calendar year are dropped. For each
    year the descriptor with the later `time_to` wins; on a tie the incoming
    one replaces the existing one, so status updates for the same job land.

    Returns:
        list[ExportDescriptor]: One descriptor per year, ascending by year.
    """
    by_year: dict[int, ExportDescriptor] = {}
    for descriptor in existing:
        year = year_of_descriptor(descriptor, now)
        if year is None:
            continue
        incumbent = by_year.get(year)
        if incumbent is None or _is_later(descriptor, incumbent):
            by_year[year] = descriptor
    for descriptor in incoming:
        year = year_of_descriptor(descriptor, now)
        if year is None:
            continue
        incumbent = by_year.get(year)
        if incumbent is None or not _is_later(incumbent, descriptor):
            by_year[year] = descriptor
    return [by_year[year] for year in sorted(by_year)]
