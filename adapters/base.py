from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
}


@dataclass(frozen=True)
class AvailabilityPoint:
    date: date
    is_available: bool


@dataclass
class Campground:
    campground_id: str
    name: str


@dataclass
class Campsite:
    site_id: str
    name: str
    url: str
    availabilities: list[AvailabilityPoint] = field(default_factory=list)


class BaseAdapter(ABC):
    @abstractmethod
    def get_campground(self, campground_id: str) -> Optional[Campground]:
        """Returns the campground, or None if the back-end doesn't know it."""
        raise NotImplementedError

    @abstractmethod
    def get_campsites(self, campground_id: str, start: date, months_to_check: int) -> list[Campsite]:
        """
        Returns every campsite of a campground with its day-by-day availability.

        Args:
            campground_id: back-end specific identifier (e.g. "232447")
            start: first day of the search window
            months_to_check: how many months from `start` to cover

        Returns:
            list of Campsite objects; availabilities are not guaranteed sorted
        """
        raise NotImplementedError
