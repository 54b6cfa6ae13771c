from dataclasses import dataclass
from operator import attrgetter

from adapters.base import Campsite
from matcher import DateRange, match


@dataclass
class SiteMatch:
    site: Campsite
    ranges: list[DateRange]


@dataclass
class Itinerary:
    date_range: DateRange
    sites: list[Campsite]


def consolidate(matches: list[SiteMatch]) -> list[Itinerary]:
    """
    Groups sites by the exact stay they can offer.

    Returns one Itinerary per distinct (start, end), ordered by start date.
    Itineraries sharing a start date keep the order they were first seen in.
    """
    buckets = {}
    for site_match in matches:
        for date_range in site_match.ranges:
            if date_range.key not in buckets:
                buckets[date_range.key] = Itinerary(date_range=date_range, sites=[])
            buckets[date_range.key].sites.append(site_match.site)

    # sorted() is stable, dicts keep insertion order
    return sorted(buckets.values(), key=lambda itinerary: itinerary.date_range.start)


def find_itineraries(campsites: list[Campsite], start_weekday: int, length_of_stay: int) -> list[Itinerary]:
    matches = []
    for site in campsites:
        availabilities = sorted(site.availabilities, key=attrgetter("date"))
        ranges = match(availabilities, start_weekday, length_of_stay)
        if ranges:
            matches.append(SiteMatch(site=site, ranges=ranges))
    return consolidate(matches)
