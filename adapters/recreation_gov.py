import json
import sys
from datetime import date
from typing import Optional

import requests

from .base import HEADERS, AvailabilityPoint, BaseAdapter, Campground, Campsite

CAMPGROUND_BASE = "https://www.recreation.gov/api/camps/campgrounds"
AVAIL_BASE = "https://www.recreation.gov/api/camps/availability/campground"
SITE_URL = "https://www.recreation.gov/camping/campsites"
AVAILABLE = "Available"


class RecreationGovAdapter(BaseAdapter):
    # ── Campground lookup ──────────────────────────────────────────────────────

    def get_campground(self, campground_id: str) -> Optional[Campground]:
        try:
            resp = requests.get(f"{CAMPGROUND_BASE}/{campground_id}", headers=HEADERS)
            resp.raise_for_status()
            data = resp.json().get("campground")
        except (requests.RequestException, json.JSONDecodeError):
            return None
        if not data:
            return None
        return Campground(campground_id=str(campground_id), name=data["facility_name"])

    # ── Availability ───────────────────────────────────────────────────────────

    def get_campsites(self, campground_id: str, start: date, months_to_check: int) -> list[Campsite]:
        raw_sites = {}

        for month_start in self._months_to_query(start, months_to_check):
            try:
                resp = requests.get(
                    f"{AVAIL_BASE}/{campground_id}/month",
                    params={"start_date": f"{month_start.isoformat()}T00:00:00.000Z"},
                    headers=HEADERS,
                )
                resp.raise_for_status()
                campsites = resp.json().get("campsites") or {}
            except (requests.RequestException, json.JSONDecodeError) as e:
                print(f"WARNING skipping {month_start:%Y-%m} for {campground_id}: {e}", file=sys.stderr)
                continue

            for site_id, data in campsites.items():
                if site_id not in raw_sites:
                    raw_sites[site_id] = {"meta": data, "avail": {}}
                raw_sites[site_id]["avail"].update(data.get("availabilities") or {})

        return [self._to_campsite(site_id, entry) for site_id, entry in raw_sites.items()]

    def _to_campsite(self, site_id: str, entry: dict) -> Campsite:
        meta = entry["meta"]
        campsite_id = meta.get("campsite_id", site_id)
        return Campsite(
            site_id=str(campsite_id),
            name=f"{meta.get('site', site_id)} ({meta.get('loop', '')})",
            url=f"{SITE_URL}/{campsite_id}",
            availabilities=[
                AvailabilityPoint(date=date.fromisoformat(dt_str[:10]), is_available=status == AVAILABLE)
                for dt_str, status in entry["avail"].items()
            ],
        )

    def _months_to_query(self, start: date, months_to_check: int) -> list:
        months = []
        d = start.replace(day=1)
        for _ in range(months_to_check):
            months.append(d)
            # advance to first day of next month
            if d.month == 12:
                d = d.replace(year=d.year + 1, month=1)
            else:
                d = d.replace(month=d.month + 1)
        return months
