import calendar
import json
from datetime import date, timedelta
from typing import Optional

import requests

from .base import HEADERS, AvailabilityPoint, BaseAdapter, Campground, Campsite

GRID_ENDPOINT = "https://calirdr.usedirect.com/rdr/rdr/search/grid"
SITE_URL = "https://www.reservecalifornia.com/CaliforniaWebHome/"


def format_api_date(d: date) -> str:
    """The grid endpoint wants M-D-YYYY without zero padding."""
    return f"{d.month}-{d.day}-{d.year}"


def add_months(d: date, months: int) -> date:
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class ReserveCaliforniaAdapter(BaseAdapter):
    def __init__(self, today: Optional[date] = None):
        self.today = today or date.today()

    def _search_grid(self, facility_id, start: date, end: date) -> dict:
        resp = requests.post(
            GRID_ENDPOINT,
            json={
                "FacilityId": facility_id,
                "StartDate": format_api_date(start),
                "EndDate": format_api_date(end),
            },
            headers=HEADERS,
        )
        resp.raise_for_status()
        return resp.json()

    # ── Campground lookup ──────────────────────────────────────────────────────

    def get_campground(self, campground_id: str) -> Optional[Campground]:
        try:
            facility_id = int(campground_id)
            data = self._search_grid(facility_id, self.today, self.today + timedelta(days=1))
        except (ValueError, requests.RequestException, json.JSONDecodeError):
            return None
        facility = data.get("Facility")
        if not facility:
            return None
        return Campground(campground_id=str(campground_id), name=facility["Name"])

    # ── Availability ───────────────────────────────────────────────────────────

    def get_campsites(self, campground_id: str, start: date, months_to_check: int) -> list[Campsite]:
        end = add_months(start, months_to_check)
        units = {}

        page_start = start
        while True:
            data = self._search_grid(campground_id, page_start, end)
            for unit in ((data.get("Facility") or {}).get("Units") or {}).values():
                if not unit:
                    continue
                if unit["UnitId"] not in units:
                    units[unit["UnitId"]] = {"meta": unit, "slices": {}}
                units[unit["UnitId"]]["slices"].update(unit.get("Slices") or {})

            # The back-end caps how many days one response covers; page on from where it stopped.
            served_until = date.fromisoformat(data["EndDate"][:10]) if data.get("EndDate") else end
            if served_until >= end or served_until < page_start:
                break
            page_start = served_until + timedelta(days=1)

        return [self._to_campsite(entry) for entry in units.values()]

    def _to_campsite(self, entry: dict) -> Campsite:
        meta = entry["meta"]
        return Campsite(
            site_id=str(meta["UnitId"]),
            name=str(meta.get("Name", meta["UnitId"])),
            url=SITE_URL,
            availabilities=[
                AvailabilityPoint(date=date.fromisoformat(day[:10]), is_available=bool(info.get("IsFree")))
                for day, info in entry["slices"].items()
            ],
        )
