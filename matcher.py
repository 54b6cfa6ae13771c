from dataclasses import dataclass
from datetime import date, timedelta
from typing import NamedTuple, Optional

from adapters.base import AvailabilityPoint


@dataclass(frozen=True)
class DateRange:
    """Check in on `start`, check out on `end`. Every night in [start, end) is available."""

    start: date
    end: date

    @property
    def key(self) -> tuple:
        return (self.start, self.end)

    @property
    def nights(self) -> int:
        return (self.end - self.start).days


class Streak(NamedTuple):
    start: date
    nights: int


def _step(
    streak: Optional[Streak], point: AvailabilityPoint, start_weekday: int, length_of_stay: int
) -> tuple[Optional[Streak], Optional[DateRange]]:
    """
    Advances the scan by one day. Returns (next_streak, emitted_range).

    A streak of None means idle. The day that completes a stay is its checkout,
    so its own availability is ignored and it never opens the next streak.
    A day missing from the data counts as unavailable.
    """
    if streak is not None:
        if point.date != streak.start + timedelta(days=streak.nights):
            return None, None
        if streak.nights == length_of_stay:
            return None, DateRange(start=streak.start, end=point.date)
        if point.is_available and streak.nights < length_of_stay:
            return streak._replace(nights=streak.nights + 1), None
        return None, None

    if point.is_available and point.date.isoweekday() == start_weekday:
        return Streak(start=point.date, nights=1), None
    return None, None


def match(availabilities: list[AvailabilityPoint], start_weekday: int, length_of_stay: int) -> list[DateRange]:
    """
    Finds every stay of exactly `length_of_stay` nights that starts on `start_weekday`.

    Args:
        availabilities: one site's days, sorted ascending by date
        start_weekday: ISO weekday, 1=Monday .. 7=Sunday
        length_of_stay: nights, >= 1

    Returns:
        list of DateRange in scan order
    """
    ranges = []
    streak = None
    for point in availabilities:
        streak, found = _step(streak, point, start_weekday, length_of_stay)
        if found is not None:
            ranges.append(found)
    return ranges
