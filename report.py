from datetime import date

from itineraries import Itinerary
from matcher import DateRange

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
NO_RESULTS = "No sites found for the given constraints :("


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def format_date(d: date) -> str:
    return f"{d.month}/{d.day}/{d.year}"


def format_range(date_range: DateRange) -> str:
    return f"{format_date(date_range.start)} to {format_date(date_range.end)}"


def weeks_until(start: date, today: date) -> int:
    return round((start - today).days / 7)


def describe_search(campground_name: str, start_weekday: int, nights: int) -> str:
    return (
        f"Checking for sites at {campground_name} available on a "
        f"{WEEKDAY_NAMES[start_weekday - 1]} for {nights} {_plural(nights, 'night', 'nights')}."
    )


def format_itineraries(itineraries: list[Itinerary], today: date) -> str:
    """
    Returns the console report for a list of itineraries.

    Each itinerary is a header line with its dates and how far away they are,
    followed by one "- name url" line per site.
    """
    if not itineraries:
        return NO_RESULTS

    count = len(itineraries)
    lines = [f"Found {count} matching {_plural(count, 'itinerary', 'itineraries')}:", ""]
    for itinerary in itineraries:
        weeks = weeks_until(itinerary.date_range.start, today)
        lines.append(f"{format_range(itinerary.date_range)} (in {weeks} {_plural(weeks, 'week', 'weeks')}):")
        for site in itinerary.sites:
            lines.append(f"- {site.name} {site.url}")
    return "\n".join(lines)
